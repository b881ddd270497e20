# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Helper functions for commonly used utilities."""

import datetime
import os
import re


# Go's encoding of the zero time.Time, written by tools that share the
# token file format for tokens that never expire.
_ZERO_YEAR = 1

_RFC3339_PATTERN = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<zone>Z|z|[+-]\d{2}:\d{2})?$"
)


def utcnow():
    """Returns the current UTC datetime.

    Returns:
        datetime: The current time in UTC, without tzinfo, matching the
            convention google-auth uses for ``Credentials.expiry``.
    """
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def parse_rfc3339(value):
    """Parses an RFC 3339 timestamp into a naive UTC datetime.

    Fractional seconds beyond microsecond precision are truncated.

    Args:
        value (str): The timestamp, e.g. ``2026-10-18T12:00:00.123456789Z``.

    Returns:
        Optional[datetime]: The parsed time, or None for the zero time.

    Raises:
        ValueError: If the value is not an RFC 3339 timestamp.
    """
    match = _RFC3339_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"{value!r} is not an RFC 3339 timestamp")

    parsed = datetime.datetime.strptime(match.group("base"), "%Y-%m-%dT%H:%M:%S")
    fraction = match.group("fraction")
    if fraction:
        parsed = parsed.replace(microsecond=int(fraction[:6].ljust(6, "0")))

    zone = match.group("zone")
    if zone and zone not in ("Z", "z"):
        sign = 1 if zone[0] == "+" else -1
        hours, minutes = zone[1:].split(":")
        offset = datetime.timedelta(hours=int(hours), minutes=int(minutes))
        parsed = parsed - sign * offset

    if parsed.year == _ZERO_YEAR:
        return None
    return parsed


def format_rfc3339(value):
    """Formats a naive UTC datetime as an RFC 3339 timestamp ending in Z."""
    return value.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def string_to_scopes(scopes):
    """Converts stringifed scope value to a list.

    If scopes is a list then it is simply passed through. If scopes is an
    string then a list of each individual scope is returned.

    Args:
        scopes (Union[Sequence, str])

    Returns:
        list: The scopes in a list.
    """
    if not scopes:
        return []
    if isinstance(scopes, str):
        return scopes.split()
    return list(scopes)


def validate_file(filename):
    """Refuses to operate on symbolic links.

    Args:
        filename (str): The path about to be read or written.

    Raises:
        IOError: If the path is a symbolic link.
    """
    if os.path.islink(filename):
        raise IOError(f"File: {filename} is a symbolic link.")
