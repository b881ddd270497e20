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

import os
import shutil

import pytest

from gmailsend import config as _config


DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
CLIENT_SECRETS_FILE = os.path.join(DATA_DIR, "client_secrets.json")
TOKEN_FILE = os.path.join(DATA_DIR, "token.json")


@pytest.fixture
def credentials_file(tmp_path):
    path = tmp_path / "credentials.json"
    shutil.copy(CLIENT_SECRETS_FILE, str(path))
    return str(path)


@pytest.fixture
def token_file(tmp_path):
    path = tmp_path / "token.json"
    shutil.copy(TOKEN_FILE, str(path))
    return str(path)


@pytest.fixture
def missing_token_file(tmp_path):
    return str(tmp_path / "new_token.json")


@pytest.fixture
def config(credentials_file, token_file):
    return _config.Config(credentials_file=credentials_file, token_file=token_file)
