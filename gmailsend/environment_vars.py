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

"""Environment variables used by gmailsend."""

CREDENTIALS = "GMAILSEND_CREDENTIALS"
"""Environment variable defining the location of the OAuth client
credentials file (the "installed application" JSON export)."""

TOKEN = "GMAILSEND_TOKEN"
"""Environment variable defining the location of the token file."""

SCOPES = "GMAILSEND_SCOPES"
"""Environment variable holding space-separated OAuth scopes."""

USER_ID = "GMAILSEND_USER_ID"
"""Environment variable overriding the Gmail user id messages are sent as."""
