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

"""Renders :class:`gmailsend.message.Email` values as RFC 2822 messages.

Messages without attachments are written as a single text part with a fixed
header order. Messages with attachments become ``multipart/mixed`` documents
built with :class:`email.message.EmailMessage`: the body is the first part
and every attachment follows as a base64 encoded part.

Either way the result is URL-safe base64 encoded, which is what the Gmail
``users.messages.send`` endpoint expects in its ``raw`` field.
"""

import base64
import datetime
import email.header
import email.message
import email.policy
import email.utils
import logging
import uuid

from gmailsend import exceptions


_LOGGER = logging.getLogger(__name__)

_CRLF = "\r\n"
_HTML_CONTENT_TYPE = "text/html; charset=UTF-8"
_PLAIN_CONTENT_TYPE = "text/plain; charset=UTF-8"
_ADDRESS_HEADERS = frozenset(["To", "Cc", "Bcc", "From", "Reply-To"])


def _now():
    return datetime.datetime.now(datetime.timezone.utc)


def _make_boundary():
    return "gmailsend-{}".format(uuid.uuid4().hex)


def _check_header(name, value):
    if "\r" in value or "\n" in value:
        raise exceptions.ValidationError(
            "{} header must not contain line breaks: {!r}".format(name, value)
        )
    if name in _ADDRESS_HEADERS and not value.isascii():
        for _, address in email.utils.getaddresses([value]):
            if not address.isascii():
                raise exceptions.ValidationError(
                    "invalid email in {} header: {}".format(name, address)
                )
    return value


def _address_headers(mail, now):
    """Yields the top level headers shared by both message shapes.

    Raises:
        gmailsend.exceptions.ValidationError: If a value contains CR or LF,
            or an address is not ASCII.
    """
    yield "To", _check_header("To", ", ".join(mail.to))
    if mail.cc:
        yield "Cc", _check_header("Cc", ", ".join(mail.cc))
    if mail.bcc:
        yield "Bcc", _check_header("Bcc", ", ".join(mail.bcc))
    if mail.sender:
        yield "From", _check_header("From", mail.sender)
    if mail.reply_to:
        yield "Reply-To", _check_header("Reply-To", mail.reply_to)
    yield "Subject", _check_header("Subject", mail.subject)
    yield "Date", email.utils.format_datetime(now)


def _encode_header(name, value):
    """RFC 2047 encodes a non-ASCII header value for the single part path."""
    if value.isascii():
        return value
    if name in _ADDRESS_HEADERS:
        return ", ".join(
            email.utils.formataddr(pair, charset="utf-8")
            for pair in email.utils.getaddresses([value])
        )
    return email.header.Header(value, "utf-8", header_name=name).encode(
        linesep=_CRLF
    )


def _render_simple(mail, now):
    lines = [
        "{}: {}".format(name, _encode_header(name, value))
        for name, value in _address_headers(mail, now)
    ]
    lines.append(
        "Content-Type: {}".format(
            _HTML_CONTENT_TYPE if mail.is_html else _PLAIN_CONTENT_TYPE
        )
    )
    head = _CRLF.join(lines) + _CRLF + _CRLF
    return head.encode("utf-8") + mail.body.encode("utf-8")


def _add_attachment(message, attachment):
    """Appends one attachment part to a multipart message.

    Raises:
        gmailsend.exceptions.ComposeError: If the part cannot be built.
    """
    filename = attachment.filename
    if not filename or "\r" in filename or "\n" in filename:
        raise exceptions.ComposeError(filename, "invalid filename")
    if not isinstance(attachment.content, bytes):
        raise exceptions.ComposeError(
            filename,
            "content must be bytes, not {}".format(type(attachment.content).__name__),
        )

    mime_type = attachment.resolved_mime_type.split(";", 1)[0].strip()
    maintype, sep, subtype = mime_type.partition("/")
    if not sep or not maintype or not subtype:
        raise exceptions.ComposeError(
            filename, "invalid MIME type {!r}".format(attachment.resolved_mime_type)
        )

    try:
        message.add_attachment(
            attachment.content, maintype=maintype, subtype=subtype, filename=filename
        )
    except (TypeError, ValueError, KeyError) as caught_exc:
        raise exceptions.ComposeError(filename, str(caught_exc)) from caught_exc


def _render_multipart(mail, now):
    message = email.message.EmailMessage(policy=email.policy.SMTP)
    for name, value in _address_headers(mail, now):
        try:
            message[name] = value
        except (TypeError, ValueError) as caught_exc:
            raise exceptions.ValidationError(
                "invalid {} header: {}".format(name, caught_exc)
            ) from caught_exc

    message.set_content(mail.body, subtype="html" if mail.is_html else "plain")

    for attachment in mail.attachments:
        _add_attachment(message, attachment)

    message.set_boundary(_make_boundary())
    return message.as_bytes()


def render(mail, now=None):
    """Renders an email as RFC 2822 bytes.

    Args:
        mail (gmailsend.message.Email): A validated email.
        now (Optional[datetime.datetime]): Value for the Date header.
            Defaults to the current UTC time.

    Returns:
        bytes: The full message, headers and body, with CRLF line endings.

    Raises:
        gmailsend.exceptions.ComposeError: If an attachment part cannot be
            written.
        gmailsend.exceptions.ValidationError: If a header value contains a
            line break or a non-ASCII address.
    """
    if now is None:
        now = _now()

    if mail.attachments:
        _LOGGER.debug(
            "Rendering multipart message with %d attachment(s)", len(mail.attachments)
        )
        return _render_multipart(mail, now)
    return _render_simple(mail, now)


def compose(mail, now=None):
    """Renders an email and encodes it for the Gmail API.

    Args:
        mail (gmailsend.message.Email): A validated email.
        now (Optional[datetime.datetime]): Value for the Date header.

    Returns:
        str: The URL-safe base64 encoded message, padding included.

    Raises:
        gmailsend.exceptions.ComposeError: If an attachment part cannot be
            written.
        gmailsend.exceptions.ValidationError: If a header value contains a
            line break or a non-ASCII address.
    """
    return base64.urlsafe_b64encode(render(mail, now=now)).decode("ascii")
