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

"""Gmail OAuth 2.0 scopes.

These constants help callers avoid copy-pasting long URLs.
"""

# Send messages only. No read or modify privileges on the mailbox.
GMAIL_SEND = "https://www.googleapis.com/auth/gmail.send"

GMAIL_COMPOSE = "https://www.googleapis.com/auth/gmail.compose"
GMAIL_MODIFY = "https://www.googleapis.com/auth/gmail.modify"

# Full access to the account, including permanent deletion.
GMAIL_FULL = "https://mail.google.com/"

DEFAULT_SCOPES = (GMAIL_SEND,)
