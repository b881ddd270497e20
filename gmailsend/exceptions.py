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

"""Exceptions used in the gmailsend package."""

from typing import Any, Optional


class GmailSendError(Exception):
    """Base class for all gmailsend errors."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args)
        self._retryable: bool = kwargs.get("retryable", False)

    @property
    def retryable(self) -> bool:
        return self._retryable


class CredentialError(GmailSendError):
    """Used to indicate that the client identity or the token record could
    not be read, decoded or exchanged."""


class ConfigError(CredentialError, ValueError):
    """Used to indicate a missing or invalid credentials or token path."""

    def __init__(
        self, message: Optional[str] = None, path: Optional[str] = None, **kwargs: Any
    ) -> None:
        super().__init__(message or "Invalid configuration.", **kwargs)
        self.path = path


class ValidationError(GmailSendError, ValueError):
    """Used to indicate that an email is not fit to be sent."""


class ComposeError(GmailSendError):
    """Used to indicate that an attachment part could not be written."""

    def __init__(self, filename: str, message: Optional[str] = None, **kwargs: Any) -> None:
        full_message = f"Error adding attachment {filename}"
        if message:
            full_message = f"{full_message}: {message}"
        super().__init__(full_message, **kwargs)
        self.filename = filename


class SendError(GmailSendError):
    """Used to indicate that the Gmail API rejected or never received a
    message."""

    def __init__(
        self, message: str, status: Optional[int] = None, **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)
        self.status = status
