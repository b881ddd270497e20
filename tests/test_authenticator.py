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

import datetime
import json
import logging
import os

import mock
from google.oauth2 import credentials as oauth2_credentials
from google_auth_oauthlib import flow as oauth_flow
from oauthlib.oauth2.rfc6749 import errors as oauth2_errors
import pytest

from gmailsend import authenticator
from gmailsend import config as _config
from gmailsend import exceptions
from gmailsend import scopes
from gmailsend import tokens
from gmailsend import transport


DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
CLIENT_SECRETS_FILE = os.path.join(DATA_DIR, "client_secrets.json")

with open(CLIENT_SECRETS_FILE, "r") as fh:
    CLIENT_SECRETS_INFO = json.load(fh)

CLIENT_INFO = CLIENT_SECRETS_INFO["installed"]
EXPIRY = datetime.datetime(2026, 10, 18, 13, 0, 0)
TOKEN_RESPONSE = {
    "access_token": "new-access-token",
    "refresh_token": "new-refresh-token",
    "token_type": "Bearer",
    "expires_in": 3599,
    "expires_at": EXPIRY.replace(tzinfo=datetime.timezone.utc).timestamp(),
}


@pytest.fixture
def mock_fetch_token():
    def set_token(instance, **kwargs):
        instance.oauth2session.token = dict(TOKEN_RESPONSE)
        return instance.oauth2session.token

    fetch_token_patch = mock.patch.object(
        oauth_flow.Flow, "fetch_token", autospec=True, side_effect=set_token
    )

    with fetch_token_patch as fetch_token_mock:
        yield fetch_token_mock


@pytest.fixture
def unauthorized_config(credentials_file, missing_token_file):
    return _config.Config(
        credentials_file=credentials_file, token_file=missing_token_file
    )


def test_static_prompt():
    prompt = authenticator.static_prompt("the-code")

    assert prompt("https://example.com/auth") == "the-code"


@mock.patch("builtins.input", return_value="typed-code")
def test_console_prompt(input_mock, capsys):
    code = authenticator.console_prompt("https://example.com/auth")

    assert code == "typed-code"
    out, _ = capsys.readouterr()
    assert "Go to the following URL and authorize the application:" in out
    assert "https://example.com/auth" in out
    input_mock.assert_called_once_with("Enter the authorization code: ")


class TestLoadClientConfig(object):
    def test_installed(self, credentials_file):
        info, client_type = authenticator.load_client_config(credentials_file)

        assert client_type == "installed"
        assert info == CLIENT_SECRETS_INFO

    def test_web(self, tmp_path):
        path = tmp_path / "web.json"
        path.write_text(json.dumps({"web": CLIENT_INFO}))

        _, client_type = authenticator.load_client_config(str(path))

        assert client_type == "web"

    def test_missing_file(self, tmp_path):
        path = str(tmp_path / "missing.json")

        with pytest.raises(exceptions.CredentialError) as excinfo:
            authenticator.load_client_config(path)

        assert excinfo.match(r"error reading credentials from")

    def test_not_json(self, tmp_path):
        path = tmp_path / "credentials.json"
        path.write_text("{")

        with pytest.raises(exceptions.CredentialError) as excinfo:
            authenticator.load_client_config(str(path))

        assert excinfo.match(r"is not valid JSON")

    def test_bad_format(self, tmp_path):
        path = tmp_path / "credentials.json"
        path.write_text(json.dumps({"service_account": {}}))

        with pytest.raises(exceptions.CredentialError) as excinfo:
            authenticator.load_client_config(str(path))

        assert excinfo.match(r"must be for a web or installed app")

    def test_missing_fields(self, tmp_path):
        path = tmp_path / "credentials.json"
        path.write_text(json.dumps({"installed": {"client_id": "id"}}))

        with pytest.raises(exceptions.CredentialError) as excinfo:
            authenticator.load_client_config(str(path))

        assert excinfo.match(r"missing fields client_secret, auth_uri, token_uri")


class TestLoadConfig(object):
    @mock.patch("builtins.input")
    def test_load_config(self, input_mock, config):
        manager = authenticator.CredentialManager(config)
        assert manager.state is authenticator.State.UNCONFIGURED

        credentials = manager.load_config()

        assert isinstance(credentials, oauth2_credentials.Credentials)
        assert credentials.token == "ya29.example-access-token"
        assert credentials.refresh_token == "1//example-refresh-token"
        assert credentials.client_id == CLIENT_INFO["client_id"]
        assert credentials.client_secret == CLIENT_INFO["client_secret"]
        assert credentials.token_uri == CLIENT_INFO["token_uri"]
        assert credentials.expiry == datetime.datetime(2099, 1, 1)
        assert credentials.scopes == [scopes.GMAIL_SEND]
        assert manager.credentials is credentials
        assert manager.token.access_token == "ya29.example-access-token"
        assert manager.state is authenticator.State.AUTHORIZED
        input_mock.assert_not_called()

    def test_empty_credentials_path(self, token_file):
        manager = authenticator.CredentialManager(
            _config.Config(credentials_file="", token_file=token_file)
        )

        with pytest.raises(exceptions.ConfigError) as excinfo:
            manager.load_config()

        assert excinfo.match(r"credentials_file is required")

    def test_empty_token_path(self, credentials_file):
        manager = authenticator.CredentialManager(
            _config.Config(credentials_file=credentials_file, token_file="")
        )

        with pytest.raises(exceptions.ConfigError) as excinfo:
            manager.load_config()

        assert excinfo.match(r"token_file is required")

    def test_missing_credentials_file(self, tmp_path, token_file):
        path = str(tmp_path / "missing-credentials.json")
        manager = authenticator.CredentialManager(
            _config.Config(credentials_file=path, token_file=token_file)
        )

        with pytest.raises(exceptions.ConfigError) as excinfo:
            manager.load_config()

        assert excinfo.value.path == path
        assert path in str(excinfo.value)
        assert isinstance(excinfo.value, exceptions.CredentialError)
        assert manager.state is authenticator.State.UNCONFIGURED

    def test_missing_token_file(self, unauthorized_config):
        manager = authenticator.CredentialManager(unauthorized_config)

        with pytest.raises(exceptions.ConfigError) as excinfo:
            manager.load_config()

        assert excinfo.value.path == unauthorized_config.token_file
        assert excinfo.match(r"token file does not exist")

    def test_corrupt_token_file(self, config):
        with open(config.token_file, "w") as fh:
            fh.write("{]")
        manager = authenticator.CredentialManager(config)

        with pytest.raises(exceptions.CredentialError) as excinfo:
            manager.load_config()

        assert not isinstance(excinfo.value, exceptions.ConfigError)
        assert excinfo.match(r"error reading token from")

    def test_corrupt_credentials_file(self, config):
        with open(config.credentials_file, "w") as fh:
            fh.write("not json")
        manager = authenticator.CredentialManager(config)

        with pytest.raises(exceptions.CredentialError):
            manager.load_config()

    def test_custom_storage(self, config):
        storage = mock.Mock()
        storage.exists.return_value = True
        storage.get.return_value = tokens.Token("stored-access")
        manager = authenticator.CredentialManager(config, storage=storage)

        credentials = manager.load_config()

        assert credentials.token == "stored-access"
        assert manager.storage is storage

    def test_expired_token_is_logged(self, config, caplog):
        expiry = datetime.datetime(2000, 1, 1)
        storage = mock.Mock()
        storage.exists.return_value = True
        storage.get.return_value = tokens.Token("stale-access", expiry=expiry)
        manager = authenticator.CredentialManager(config, storage=storage)

        with caplog.at_level(logging.INFO, logger="gmailsend.authenticator"):
            credentials = manager.load_config()

        assert credentials.expired
        assert "expired at 2000-01-01 00:00:00" in caplog.text

    def test_fresh_token_is_not_logged(self, config, caplog):
        with caplog.at_level(logging.INFO, logger="gmailsend.authenticator"):
            authenticator.CredentialManager(config).load_config()

        assert "expired" not in caplog.text


class TestObtainToken(object):
    def test_obtain_token(self, unauthorized_config, mock_fetch_token, capsys):
        prompt = mock.Mock(return_value="  the-code\n")
        manager = authenticator.CredentialManager(unauthorized_config, prompt=prompt)

        token = manager.obtain_token()

        assert token == tokens.Token(
            "new-access-token", "new-refresh-token", "Bearer", EXPIRY
        )
        assert manager.state is authenticator.State.AUTHORIZED
        assert manager.credentials.token == "new-access-token"
        assert manager.credentials.refresh_token == "new-refresh-token"

        (authorization_url,), _ = prompt.call_args
        assert authorization_url.startswith(CLIENT_INFO["auth_uri"])
        assert "access_type=offline" in authorization_url
        assert "prompt=consent" in authorization_url
        assert "gmail.send" in authorization_url

        mock_fetch_token.assert_called_once_with(mock.ANY, code="the-code")

        with open(unauthorized_config.token_file) as fh:
            saved = json.load(fh)
        assert saved["access_token"] == "new-access-token"
        assert saved["refresh_token"] == "new-refresh-token"
        assert os.stat(unauthorized_config.token_file).st_mode & 0o777 == 0o600

        out, _ = capsys.readouterr()
        assert "Saving token to: {}".format(unauthorized_config.token_file) in out

    def test_redirect_uri_from_credentials_file(
        self, unauthorized_config, mock_fetch_token
    ):
        prompt = mock.Mock(return_value="code")
        manager = authenticator.CredentialManager(unauthorized_config, prompt=prompt)

        manager.obtain_token()

        (authorization_url,), _ = prompt.call_args
        assert "redirect_uri=http%3A%2F%2Flocalhost" in authorization_url

    def test_redirect_uri_from_config(self, unauthorized_config, mock_fetch_token):
        unauthorized_config.redirect_uri = "urn:ietf:wg:oauth:2.0:oob"
        prompt = mock.Mock(return_value="code")
        manager = authenticator.CredentialManager(unauthorized_config, prompt=prompt)

        manager.obtain_token()

        (authorization_url,), _ = prompt.call_args
        assert "redirect_uri=urn%3Aietf%3Awg%3Aoauth%3A2.0%3Aoob" in authorization_url

    @mock.patch("builtins.input", return_value="typed-code")
    def test_console_prompt_is_default(
        self, input_mock, unauthorized_config, mock_fetch_token
    ):
        manager = authenticator.CredentialManager(unauthorized_config)

        manager.obtain_token()

        input_mock.assert_called_once()
        mock_fetch_token.assert_called_once_with(mock.ANY, code="typed-code")

    @mock.patch("builtins.input", side_effect=EOFError)
    def test_no_console_input(self, input_mock, unauthorized_config):
        manager = authenticator.CredentialManager(unauthorized_config)

        with pytest.raises(exceptions.CredentialError) as excinfo:
            manager.obtain_token()

        assert excinfo.match(r"error reading oauth code")
        assert manager.state is authenticator.State.UNCONFIGURED
        assert not os.path.exists(unauthorized_config.token_file)

    def test_empty_code(self, unauthorized_config):
        manager = authenticator.CredentialManager(
            unauthorized_config, prompt=authenticator.static_prompt("   ")
        )

        with pytest.raises(exceptions.CredentialError) as excinfo:
            manager.obtain_token()

        assert excinfo.match(r"empty code")

    def test_exchange_fails(self, unauthorized_config):
        manager = authenticator.CredentialManager(
            unauthorized_config, prompt=authenticator.static_prompt("bad-code")
        )
        fetch_token_patch = mock.patch.object(
            oauth_flow.Flow,
            "fetch_token",
            autospec=True,
            side_effect=oauth2_errors.InvalidGrantError("Bad Request"),
        )

        with fetch_token_patch:
            with pytest.raises(exceptions.CredentialError) as excinfo:
                manager.obtain_token()

        assert excinfo.match(r"error obtaining oauth token")
        assert manager.state is authenticator.State.UNCONFIGURED
        assert manager.credentials is None
        assert not os.path.exists(unauthorized_config.token_file)

    def test_unreadable_credentials(self, tmp_path, missing_token_file):
        prompt = mock.Mock()
        manager = authenticator.CredentialManager(
            _config.Config(
                credentials_file=str(tmp_path / "missing.json"),
                token_file=missing_token_file,
            ),
            prompt=prompt,
        )

        with pytest.raises(exceptions.CredentialError):
            manager.obtain_token()

        prompt.assert_not_called()

    def test_save_fails(self, unauthorized_config, mock_fetch_token):
        storage = mock.Mock()
        storage.put.side_effect = exceptions.CredentialError("disk full")
        manager = authenticator.CredentialManager(
            unauthorized_config,
            prompt=authenticator.static_prompt("code"),
            storage=storage,
        )

        with pytest.raises(exceptions.CredentialError) as excinfo:
            manager.obtain_token()

        assert excinfo.match(r"disk full")
        assert manager.state is authenticator.State.UNCONFIGURED


class TestAuthorize(object):
    def test_existing_token(self, config):
        prompt = mock.Mock()
        manager = authenticator.CredentialManager(config, prompt=prompt)

        credentials = manager.authorize()

        assert credentials.token == "ya29.example-access-token"
        prompt.assert_not_called()

    def test_runs_consent_without_token(self, unauthorized_config, mock_fetch_token):
        prompt = mock.Mock(return_value="code")
        manager = authenticator.CredentialManager(unauthorized_config, prompt=prompt)

        assert not manager.has_token()
        credentials = manager.authorize()

        assert credentials.token == "new-access-token"
        assert manager.has_token()
        prompt.assert_called_once()


class TestAuthorizedSession(object):
    def test_loads_token(self, config):
        manager = authenticator.CredentialManager(config)

        session = manager.authorized_session()

        assert isinstance(session, transport.PersistingSession)
        assert session.credentials is manager.credentials
        assert session.credentials.token == "ya29.example-access-token"
        assert manager.state is authenticator.State.AUTHORIZED

    def test_missing_token(self, unauthorized_config):
        manager = authenticator.CredentialManager(unauthorized_config)

        with pytest.raises(exceptions.ConfigError):
            manager.authorized_session()


def test_default_config_fills_scopes():
    manager = authenticator.CredentialManager(_config.Config(scopes=[]))

    assert manager.config.scopes == [scopes.GMAIL_SEND]


def test_default_config():
    manager = authenticator.CredentialManager()

    assert manager.config == _config.Config.default()
