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

"""Three-legged OAuth 2.0 authorization for the Gmail API.

The :class:`CredentialManager` turns an OAuth client identity (the
"installed application" credentials file exported from the Google Cloud
console) and a persisted :class:`gmailsend.tokens.Token` into an authorized
HTTP session.

When no token has been stored yet, :meth:`CredentialManager.obtain_token`
runs the consent flow: it builds an authorization URL, hands it to a
*prompt*, exchanges the code the prompt returns for a token, and saves the
token. The default prompt prints the URL and blocks on console input; pass
:func:`static_prompt` or any other callable to supply the code some other
way::

    manager = authenticator.CredentialManager(config.Config())
    if not manager.has_token():
        manager.obtain_token()
    session = manager.authorized_session()

Once a token exists, :meth:`CredentialManager.load_config` reads it without
any operator interaction. Refreshing expired access tokens is left to
google-auth; the session returned by
:meth:`CredentialManager.authorized_session` writes refreshed tokens back to
the token file.
"""

import enum
import io
import json
import logging
import os

from google.oauth2 import credentials as oauth2_credentials
from google_auth_oauthlib import flow as oauth_flow
from oauthlib.oauth2.rfc6749 import errors as oauth2_errors
import requests

from gmailsend import config as _config
from gmailsend import exceptions
from gmailsend import file as _file
from gmailsend import tokens
from gmailsend import transport


_LOGGER = logging.getLogger(__name__)

# Out-of-band redirect, used when the credentials file lists no redirect URI.
_OOB_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"

_CLIENT_TYPES = ("installed", "web")
_REQUIRED_CLIENT_FIELDS = ("client_id", "client_secret", "auth_uri", "token_uri")


class State(enum.Enum):
    """Authorization state of a :class:`CredentialManager`."""

    UNCONFIGURED = "unconfigured"
    AWAITING_CONSENT = "awaiting_consent"
    AUTHORIZED = "authorized"


def console_prompt(authorization_url):
    """Asks the operator to authorize the application on the console.

    Blocks the calling thread until a line is entered.

    Args:
        authorization_url (str): The URL the operator must visit.

    Returns:
        str: The authorization code the operator entered.
    """
    print(
        "Go to the following URL and authorize the application:\n{}\n".format(
            authorization_url
        )
    )
    return input("Enter the authorization code: ")


def static_prompt(code):
    """Returns a prompt that answers with a pre-fetched authorization code.

    Args:
        code (str): The authorization code.

    Returns:
        Callable[[str], str]: A prompt usable with :class:`CredentialManager`.
    """

    def prompt(authorization_url):
        _LOGGER.debug("Using pre-fetched code for %s", authorization_url)
        return code

    return prompt


def load_client_config(filename):
    """Reads an OAuth client credentials file.

    Args:
        filename (str): Path to the "installed" or "web" application JSON
            export.

    Returns:
        Tuple[Mapping[str, Any], str]: The full client config and its client
            type (``installed`` or ``web``).

    Raises:
        gmailsend.exceptions.CredentialError: If the file cannot be read or
            is not a client credentials record.
    """
    try:
        with io.open(filename, "r", encoding="utf-8") as fh:
            info = json.load(fh)
    except (IOError, UnicodeDecodeError) as caught_exc:
        raise exceptions.CredentialError(
            "error reading credentials from {}: {}".format(filename, caught_exc)
        ) from caught_exc
    except ValueError as caught_exc:
        raise exceptions.CredentialError(
            "error configuring OAuth2: {} is not valid JSON".format(filename)
        ) from caught_exc

    if not isinstance(info, dict):
        raise exceptions.CredentialError(
            "error configuring OAuth2: {} is not a JSON object".format(filename)
        )

    for client_type in _CLIENT_TYPES:
        if client_type in info:
            break
    else:
        raise exceptions.CredentialError(
            "error configuring OAuth2: client secrets in {} must be for a web "
            "or installed app".format(filename)
        )

    missing = [key for key in _REQUIRED_CLIENT_FIELDS if key not in info[client_type]]
    if missing:
        raise exceptions.CredentialError(
            "error configuring OAuth2: client secrets in {} are missing "
            "fields {}".format(filename, ", ".join(missing))
        )

    return info, client_type


class CredentialManager:
    """Obtains, stores and loads the OAuth 2.0 token used to send mail.

    Args:
        config (Optional[gmailsend.config.Config]): Paths and scopes. Uses
            :meth:`gmailsend.config.Config.default` when None.
        prompt (Optional[Callable[[str], str]]): Turns an authorization URL
            into an authorization code. Defaults to :func:`console_prompt`.
        storage (Optional[gmailsend.storage.Storage]): Token storage.
            Defaults to a :class:`gmailsend.file.Storage` on
            ``config.token_file``.
    """

    def __init__(self, config=None, prompt=None, storage=None):
        if config is None:
            config = _config.Config.default()
        self._config = config.with_default_scopes()
        self._prompt = prompt or console_prompt
        self._storage = storage
        self._state = State.UNCONFIGURED
        self._token = None
        self._credentials = None

    @property
    def config(self):
        """gmailsend.config.Config: The configuration in use."""
        return self._config

    @property
    def state(self):
        """State: Where the manager is in the authorization flow."""
        return self._state

    @property
    def token(self):
        """Optional[gmailsend.tokens.Token]: The token loaded or obtained."""
        return self._token

    @property
    def credentials(self):
        """Optional[google.oauth2.credentials.Credentials]: The authorized
        user credentials, once available."""
        return self._credentials

    @property
    def storage(self):
        """gmailsend.storage.Storage: Where the token is persisted."""
        if self._storage is None:
            self._storage = _file.Storage(self._config.token_file)
        return self._storage

    def has_token(self):
        """Reports whether a token record has been persisted."""
        return bool(self._config.token_file) and self.storage.exists()

    def _redirect_uri(self, client):
        if self._config.redirect_uri:
            return self._config.redirect_uri
        redirect_uris = client.get("redirect_uris") or [_OOB_REDIRECT_URI]
        return redirect_uris[0]

    def _authorize(self, client, token):
        self._token = token
        self._credentials = oauth2_credentials.Credentials(
            token.access_token,
            refresh_token=token.refresh_token,
            token_uri=client["token_uri"],
            client_id=client["client_id"],
            client_secret=client["client_secret"],
            scopes=list(self._config.scopes),
            expiry=token.expiry,
        )
        self._state = State.AUTHORIZED
        return self._credentials

    def obtain_token(self):
        """Runs the consent flow and persists the resulting token.

        Blocks on the prompt until it returns an authorization code.

        Returns:
            gmailsend.tokens.Token: The newly obtained token.

        Raises:
            gmailsend.exceptions.ConfigError: If a configured path is empty.
            gmailsend.exceptions.CredentialError: If the credentials file is
                unreadable or malformed, no code was entered, the code
                exchange fails, or the token cannot be saved.
        """
        self._config.validate()
        client_config, client_type = load_client_config(self._config.credentials_file)
        client = client_config[client_type]

        flow = oauth_flow.Flow.from_client_config(
            client_config,
            scopes=list(self._config.scopes),
            redirect_uri=self._redirect_uri(client),
        )
        authorization_url, _ = flow.authorization_url(
            access_type="offline", prompt="consent"
        )

        self._state = State.AWAITING_CONSENT
        try:
            token = self._exchange(flow, authorization_url)
            print("Saving token to: {}".format(self._config.token_file))
            self.storage.put(token)
        except exceptions.GmailSendError:
            self._state = State.UNCONFIGURED
            raise

        _LOGGER.info("Saved token to %s", self._config.token_file)
        self._authorize(client, token)
        return token

    def _exchange(self, flow, authorization_url):
        try:
            code = self._prompt(authorization_url)
        except EOFError as caught_exc:
            raise exceptions.CredentialError(
                "error reading oauth code: no input"
            ) from caught_exc

        code = (code or "").strip()
        if not code:
            raise exceptions.CredentialError("error reading oauth code: empty code")

        _LOGGER.debug("Exchanging authorization code for a token")
        try:
            flow.fetch_token(code=code)
        except (
            oauth2_errors.OAuth2Error,
            requests.exceptions.RequestException,
            ValueError,
            Warning,
        ) as caught_exc:
            raise exceptions.CredentialError(
                "error obtaining oauth token: {}".format(caught_exc)
            ) from caught_exc

        return tokens.Token.from_oauth2_response(flow.oauth2session.token)

    def load_config(self):
        """Loads the client identity and the persisted token.

        Never interacts with the operator.

        Returns:
            google.oauth2.credentials.Credentials: The authorized credentials.

        Raises:
            gmailsend.exceptions.ConfigError: If a path is empty, or the
                credentials or token file does not exist.
            gmailsend.exceptions.CredentialError: If either file cannot be
                decoded.
        """
        self._config.validate()

        credentials_file = self._config.credentials_file
        if not os.path.exists(credentials_file):
            raise exceptions.ConfigError(
                "credentials file does not exist: {}".format(credentials_file),
                path=credentials_file,
            )

        token_file = self._config.token_file
        if not self.storage.exists():
            raise exceptions.ConfigError(
                "token file does not exist: {}".format(token_file), path=token_file
            )

        client_config, client_type = load_client_config(credentials_file)
        token = self.storage.get()
        if token is None:
            raise exceptions.ConfigError(
                "token file does not exist: {}".format(token_file), path=token_file
            )

        _LOGGER.debug("Loaded token from %s", token_file)
        if token.expired:
            _LOGGER.info(
                "Stored access token expired at %s, it will be refreshed on first use",
                token.expiry,
            )
        return self._authorize(client_config[client_type], token)

    def authorize(self):
        """Loads the stored token, running the consent flow first if there
        is none.

        Returns:
            google.oauth2.credentials.Credentials: The authorized credentials.
        """
        if not self.has_token():
            self.obtain_token()
        return self.load_config()

    def authorized_session(self, **kwargs):
        """Returns an HTTP session that authorizes every request.

        Loads the stored token first if the manager is not yet authorized.

        Args:
            kwargs: Passed to :class:`gmailsend.transport.PersistingSession`.

        Returns:
            gmailsend.transport.PersistingSession: The authorized session.
        """
        if self._state is not State.AUTHORIZED:
            self.load_config()
        return transport.PersistingSession(
            self._credentials,
            storage=self.storage,
            token_type=self._token.token_type,
            **kwargs
        )
