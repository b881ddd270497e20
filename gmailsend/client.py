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

"""Sends :class:`gmailsend.message.Email` values through the Gmail API."""

import dataclasses
import datetime
import json
import logging
from typing import Any, Dict, Optional

import google.auth.exceptions
import requests

from gmailsend import _helpers
from gmailsend import authenticator
from gmailsend import composer
from gmailsend import config as _config
from gmailsend import exceptions


_LOGGER = logging.getLogger(__name__)

_GMAIL_ENDPOINT = "https://gmail.googleapis.com"
_SEND_PATH = "/gmail/v1/users/{user_id}/messages/send"

# Statuses worth trying again later. This client never retries by itself.
_RETRYABLE_STATUS_CODES = frozenset([408, 429, 500, 502, 503, 504])


@dataclasses.dataclass
class SendResult:
    """The outcome of one send attempt.

    Returned for every attempt, successful or not, so callers can log a
    uniform record.
    """

    success: bool = False
    message_id: Optional[str] = None
    thread_id: Optional[str] = None
    sent_at: datetime.datetime = dataclasses.field(default_factory=_helpers.utcnow)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message_id": self.message_id,
            "thread_id": self.thread_id,
            "sent_at": _helpers.format_rfc3339(self.sent_at),
            "error": self.error,
        }


def _error_message(response):
    """Extracts the API error message from a failed response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or "HTTP {}".format(response.status_code)
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return json.dumps(payload)


class MailClient:
    """Gmail API client bound to one authorized identity.

    Args:
        config (Optional[gmailsend.config.Config]): Paths, scopes and the
            sending user. Defaults to :meth:`gmailsend.config.Config.default`.
        manager (Optional[gmailsend.authenticator.CredentialManager]): The
            credential manager to authorize with. One is built from
            ``config`` when None.
        session (Optional[requests.Session]): A ready authorized session.
            When given, the manager is not consulted.

    Raises:
        gmailsend.exceptions.ConfigError: If the configuration is invalid or
            the credentials or token file is missing.
        gmailsend.exceptions.CredentialError: If the stored records cannot
            be decoded.
    """

    def __init__(self, config=None, manager=None, session=None):
        if config is None:
            config = manager.config if manager is not None else _config.Config.default()
        self._config = config.with_default_scopes()
        self._config.validate()

        if session is None:
            if manager is None:
                manager = authenticator.CredentialManager(self._config)
            session = manager.authorized_session()

        self._manager = manager
        self._session = session

    @property
    def config(self):
        return self._config

    @property
    def session(self):
        return self._session

    def _send_url(self):
        return _GMAIL_ENDPOINT + _SEND_PATH.format(user_id=self._config.user_id)

    def _submit(self, raw):
        """Posts an encoded message.

        Returns:
            Mapping[str, Any]: The API's message resource.

        Raises:
            gmailsend.exceptions.SendError: If the request fails.
        """
        try:
            response = self._session.post(self._send_url(), json={"raw": raw})
        except google.auth.exceptions.RefreshError as caught_exc:
            raise exceptions.SendError(
                "error refreshing credentials: {}".format(caught_exc)
            ) from caught_exc
        except (
            requests.exceptions.RequestException,
            google.auth.exceptions.TransportError,
        ) as caught_exc:
            raise exceptions.SendError(
                "error sending email: {}".format(caught_exc), retryable=True
            ) from caught_exc

        if response.status_code >= 400:
            raise exceptions.SendError(
                "error sending email: {}".format(_error_message(response)),
                status=response.status_code,
                retryable=response.status_code in _RETRYABLE_STATUS_CODES,
            )

        try:
            return response.json()
        except ValueError as caught_exc:
            raise exceptions.SendError(
                "error sending email: response was not JSON",
                status=response.status_code,
            ) from caught_exc

    def send_email(self, email, raise_on_error=False):
        """Sends one email.

        Makes exactly one attempt. Failures are reported in the result
        rather than raised, unless ``raise_on_error`` is set.

        Args:
            email (gmailsend.message.Email): The email to send.
            raise_on_error (bool): Re-raise the failure after recording it.

        Returns:
            SendResult: The outcome of the attempt.

        Raises:
            gmailsend.exceptions.ValidationError: If ``raise_on_error`` is set
                and the email is invalid.
            gmailsend.exceptions.ComposeError: If ``raise_on_error`` is set
                and an attachment cannot be written.
            gmailsend.exceptions.SendError: If ``raise_on_error`` is set and
                the API call fails.
        """
        result = SendResult()

        try:
            email.validate()
            raw = composer.compose(email)
            sent = self._submit(raw)
        except (
            exceptions.ValidationError,
            exceptions.ComposeError,
            exceptions.SendError,
        ) as caught_exc:
            result.error = str(caught_exc)
            _LOGGER.warning("Email not sent: %s", caught_exc)
            if raise_on_error:
                raise
            return result

        result.success = True
        result.message_id = sent.get("id")
        result.thread_id = sent.get("threadId")
        _LOGGER.info(
            "Sent message %s in thread %s", result.message_id, result.thread_id
        )
        return result
