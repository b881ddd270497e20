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

"""Authorized HTTP transport that writes refreshed tokens back to storage.

:class:`google.auth.transport.requests.AuthorizedSession` attaches the
bearer token to every request and refreshes the credentials when the access
token has expired or the server answers ``401``. Refreshing only updates the
in-memory credentials; :class:`PersistingSession` additionally saves the new
token so the next process does not start from a stale record.
"""

import logging

from google.auth.transport import requests as google_auth_requests

from gmailsend import exceptions
from gmailsend import tokens


_LOGGER = logging.getLogger(__name__)


class PersistingSession(google_auth_requests.AuthorizedSession):
    """An authorized session that persists refreshed tokens.

    Args:
        credentials (google.oauth2.credentials.Credentials): The user
            credentials to attach to requests.
        storage (gmailsend.storage.Storage): Where refreshed tokens are
            written. If None, refreshed tokens are kept in memory only.
        token_type (str): The token type recorded alongside new tokens.
        kwargs: Passed through to ``AuthorizedSession``.
    """

    def __init__(
        self, credentials, storage=None, token_type=tokens.DEFAULT_TOKEN_TYPE, **kwargs
    ):
        super().__init__(credentials, **kwargs)
        self._storage = storage
        self._token_type = token_type

    def request(self, method, url, *args, **kwargs):
        previous = self.credentials.token
        response = super().request(method, url, *args, **kwargs)
        if self.credentials.token != previous:
            self._save_refreshed_token()
        return response

    def _save_refreshed_token(self):
        token = tokens.Token.from_credentials(self.credentials, self._token_type)
        if self._storage is None:
            _LOGGER.debug("Access token refreshed; no storage configured")
            return
        try:
            self._storage.put(token)
        except exceptions.CredentialError as caught_exc:
            # The request itself succeeded; the next run will refresh again.
            _LOGGER.warning("Could not save refreshed token: %s", caught_exc)
            return
        _LOGGER.info("Access token refreshed and saved")
