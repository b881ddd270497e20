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

"""OAuth 2.0 token records.

A :class:`Token` is the part of an authorization that changes over time: the
access token, the refresh token used to renew it, and the access token's
expiry. It is persisted as a small JSON document::

    {
        "access_token": "ya29...",
        "token_type": "Bearer",
        "refresh_token": "1//0g...",
        "expiry": "2026-10-18T12:00:00.000000Z"
    }

Records written by ``google.oauth2.credentials.Credentials.to_json`` (which
name the access token ``token``) are accepted as well.
"""

import dataclasses
import datetime
import json
from typing import Optional

from gmailsend import _helpers
from gmailsend import exceptions


DEFAULT_TOKEN_TYPE = "Bearer"


@dataclasses.dataclass(frozen=True)
class Token:
    """An OAuth 2.0 access and refresh token pair.

    Attributes:
        access_token (str): The bearer token attached to API requests.
        refresh_token (Optional[str]): Used to obtain new access tokens.
        token_type (str): The token type, almost always ``Bearer``.
        expiry (Optional[datetime.datetime]): When the access token expires,
            as a naive UTC datetime. None if unknown.
    """

    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = DEFAULT_TOKEN_TYPE
    expiry: Optional[datetime.datetime] = None

    @property
    def expired(self) -> bool:
        if self.expiry is None:
            return False
        return _helpers.utcnow() >= self.expiry

    @classmethod
    def from_info(cls, info):
        """Creates a Token from a parsed token record.

        Args:
            info (Mapping[str, Any]): The decoded JSON record.

        Returns:
            Token: The constructed token.

        Raises:
            gmailsend.exceptions.CredentialError: If the record has no access
                token or an unparseable expiry.
        """
        if not isinstance(info, dict):
            raise exceptions.CredentialError(
                "Token record must be a JSON object, got {}".format(
                    type(info).__name__
                )
            )

        access_token = info.get("access_token") or info.get("token")
        if not access_token:
            raise exceptions.CredentialError(
                "Token record was not in the expected format, missing "
                "field access_token."
            )

        expiry = info.get("expiry")
        if expiry:
            try:
                if isinstance(expiry, (int, float)):
                    expiry = datetime.datetime.fromtimestamp(
                        expiry, datetime.timezone.utc
                    ).replace(tzinfo=None)
                else:
                    expiry = _helpers.parse_rfc3339(expiry)
            except (TypeError, ValueError, OverflowError) as caught_exc:
                raise exceptions.CredentialError(
                    "Token record has an invalid expiry {!r}".format(expiry)
                ) from caught_exc
        else:
            expiry = None

        return cls(
            access_token=access_token,
            refresh_token=info.get("refresh_token") or None,
            token_type=info.get("token_type") or DEFAULT_TOKEN_TYPE,
            expiry=expiry,
        )

    @classmethod
    def from_json(cls, content):
        """Creates a Token from its JSON serialization.

        Raises:
            gmailsend.exceptions.CredentialError: If the content is not a
                valid token record.
        """
        try:
            info = json.loads(content)
        except ValueError as caught_exc:
            raise exceptions.CredentialError(
                "Token record is not valid JSON"
            ) from caught_exc
        return cls.from_info(info)

    @classmethod
    def from_oauth2_response(cls, response):
        """Creates a Token from a token endpoint response as stored by
        ``requests_oauthlib.OAuth2Session.token``."""
        expiry = None
        if response.get("expires_at"):
            expiry = datetime.datetime.fromtimestamp(
                response["expires_at"], datetime.timezone.utc
            ).replace(tzinfo=None)
        return cls(
            access_token=response["access_token"],
            refresh_token=response.get("refresh_token"),
            token_type=response.get("token_type") or DEFAULT_TOKEN_TYPE,
            expiry=expiry,
        )

    @classmethod
    def from_credentials(cls, credentials, token_type=DEFAULT_TOKEN_TYPE):
        """Captures the current state of ``google.oauth2.credentials.Credentials``.
        """
        return cls(
            access_token=credentials.token,
            refresh_token=credentials.refresh_token,
            token_type=token_type,
            expiry=credentials.expiry,
        )

    def to_info(self):
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "refresh_token": self.refresh_token,
            "expiry": _helpers.format_rfc3339(self.expiry) if self.expiry else None,
        }

    def to_json(self, indent=2):
        return json.dumps(self.to_info(), indent=indent)
