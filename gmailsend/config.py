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

"""Configuration for the credential manager and mail client."""

import dataclasses
import os
from typing import List, Optional

from gmailsend import _helpers
from gmailsend import environment_vars
from gmailsend import exceptions
from gmailsend import scopes as _scopes


DEFAULT_CREDENTIALS_FILE = "gmailsend_credentials.json"
DEFAULT_TOKEN_FILE = "gmailsend_token.json"
DEFAULT_USER_ID = "me"


@dataclasses.dataclass
class Config:
    """Paths and scopes used to authorize against the Gmail API.

    Attributes:
        credentials_file (str): Path to the OAuth client "installed
            application" JSON export.
        token_file (str): Path the token record is read from and written to.
        scopes (List[str]): OAuth scopes requested at consent time.
        user_id (str): The Gmail user messages are sent as.
        redirect_uri (Optional[str]): Redirect URI for the consent flow.
            When None, the first ``redirect_uris`` entry of the credentials
            file is used.
    """

    credentials_file: str = DEFAULT_CREDENTIALS_FILE
    token_file: str = DEFAULT_TOKEN_FILE
    scopes: List[str] = dataclasses.field(
        default_factory=lambda: list(_scopes.DEFAULT_SCOPES)
    )
    user_id: str = DEFAULT_USER_ID
    redirect_uri: Optional[str] = None

    @classmethod
    def default(cls):
        return cls()

    @classmethod
    def from_environment(cls, environ=None):
        """Creates a Config, overriding defaults from environment variables.

        Args:
            environ (Optional[Mapping[str, str]]): The environment to read.
                Defaults to ``os.environ``.

        Returns:
            Config: The constructed configuration.
        """
        if environ is None:
            environ = os.environ

        config = cls()
        config.credentials_file = environ.get(
            environment_vars.CREDENTIALS, config.credentials_file
        )
        config.token_file = environ.get(environment_vars.TOKEN, config.token_file)
        config.user_id = environ.get(environment_vars.USER_ID, config.user_id)
        env_scopes = _helpers.string_to_scopes(environ.get(environment_vars.SCOPES))
        if env_scopes:
            config.scopes = env_scopes
        return config

    def with_default_scopes(self):
        """Fills in the send-only scope when no scopes were given."""
        if not self.scopes:
            self.scopes = list(_scopes.DEFAULT_SCOPES)
        return self

    def validate(self):
        """Checks that both file paths are set.

        Raises:
            gmailsend.exceptions.ConfigError: If a path is empty.
        """
        if not self.credentials_file:
            raise exceptions.ConfigError("credentials_file is required")
        if not self.token_file:
            raise exceptions.ConfigError("token_file is required")
