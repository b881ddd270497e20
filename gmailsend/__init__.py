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

"""Send email through the Gmail API with delegated user authorization."""

import logging

from gmailsend.authenticator import CredentialManager
from gmailsend.client import MailClient
from gmailsend.client import SendResult
from gmailsend.config import Config
from gmailsend.message import Attachment
from gmailsend.message import Email


from gmailsend import version as gmailsend_version

__version__ = gmailsend_version.__version__

__all__ = [
    "Attachment",
    "Config",
    "CredentialManager",
    "Email",
    "MailClient",
    "SendResult",
]


# Set default logging handler to avoid "No handler found" warnings.
logging.getLogger(__name__).addHandler(logging.NullHandler())
