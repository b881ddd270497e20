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

"""File backed token storage.

The token record is a JSON document (see :mod:`gmailsend.tokens`). Writes
truncate and rewrite the whole file; they are not atomic, so a crash midway
can leave a partial record behind.
"""

import io
import logging
import os
import pathlib
import threading

from gmailsend import _helpers
from gmailsend import exceptions
from gmailsend import storage
from gmailsend import tokens


_LOGGER = logging.getLogger(__name__)

_FILE_MODE = 0o600


class Storage(storage.Storage):
    """Store and retrieve a single token to and from a file."""

    def __init__(self, filename):
        super().__init__(lock=threading.Lock())
        self._filename = filename
        self._pp = pathlib.Path(filename)

    @property
    def filename(self):
        return self._filename

    def locked_exists(self):
        return self._pp.is_file()

    def locked_get(self):
        """Retrieve the token from file.

        Returns:
            Optional[gmailsend.tokens.Token]: The token, or None if the file
                does not exist.

        Raises:
            gmailsend.exceptions.CredentialError: If the file is a symbolic
                link, cannot be read, or does not hold a token record.
        """
        if not self._pp.exists():
            return None

        try:
            _helpers.validate_file(self._filename)
            with io.open(self._filename, "r", encoding="utf-8") as fh:
                content = fh.read()
        except (IOError, UnicodeDecodeError) as caught_exc:
            raise exceptions.CredentialError(
                "error reading token from {}: {}".format(self._filename, caught_exc)
            ) from caught_exc

        try:
            return tokens.Token.from_json(content)
        except exceptions.CredentialError as caught_exc:
            raise exceptions.CredentialError(
                "error reading token from {}: {}".format(self._filename, caught_exc)
            ) from caught_exc

    def _create_file_if_needed(self):
        """Create an empty file if necessary.

        This method will not initialize the file. Instead it implements a
        simple version of "touch" to ensure the file has been created with
        owner-only permissions.
        """
        if not self._pp.exists():
            old_umask = os.umask(0o177)
            try:
                io.open(self._filename, "a+b").close()
            finally:
                os.umask(old_umask)

    def locked_put(self, token):
        """Write the token to file, replacing any previous record.

        Args:
            token (gmailsend.tokens.Token): The token to store.

        Raises:
            gmailsend.exceptions.CredentialError: If the file is a symbolic
                link or cannot be written.
        """
        try:
            _helpers.validate_file(self._filename)
            self._create_file_if_needed()
            os.chmod(self._filename, _FILE_MODE)
            with io.open(self._filename, "w", encoding="utf-8") as fh:
                fh.write(token.to_json())
        except IOError as caught_exc:
            raise exceptions.CredentialError(
                "error saving token to {}: {}".format(self._filename, caught_exc)
            ) from caught_exc
        _LOGGER.debug("Wrote token record to %s", self._filename)
