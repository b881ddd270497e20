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

"""Email and attachment values handed to the mail client.

An :class:`Email` is built up by the caller, either directly or through its
builder methods, and is then validated and rendered by
:mod:`gmailsend.composer`::

    email = message.Email(to=["a@example.com"], subject="Hi", body="Hello")
    email.add_recipient("b@example.com").attach_file("notes.txt", b"...")
"""

import dataclasses
import mimetypes
import os
from typing import List, Optional

from gmailsend import exceptions


DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclasses.dataclass(frozen=True)
class Attachment:
    """A file attached to an email.

    Attributes:
        filename (str): Name written to the Content-Disposition header and
            used to infer the MIME type.
        content (bytes): The raw file content.
        mime_type (Optional[str]): Explicit MIME type. When unset the type is
            guessed from the filename extension.
    """

    filename: str
    content: bytes
    mime_type: Optional[str] = None

    def __post_init__(self):
        # Copy mutable buffers so later writes by the caller are not seen.
        if isinstance(self.content, (bytearray, memoryview)):
            object.__setattr__(self, "content", bytes(self.content))

    @property
    def resolved_mime_type(self) -> str:
        """str: The explicit MIME type, else one guessed from the filename."""
        if self.mime_type:
            return self.mime_type
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or DEFAULT_MIME_TYPE


@dataclasses.dataclass
class Email:
    """A message to be sent.

    Attributes:
        to (List[str]): Primary recipients. At least one is required.
        cc (List[str]): Carbon-copy recipients.
        bcc (List[str]): Blind carbon-copy recipients.
        subject (str): The subject line.
        body (str): The message body.
        is_html (bool): Whether ``body`` is HTML rather than plain text.
        sender (Optional[str]): The From address. Gmail fills in the
            authorized account when unset.
        reply_to (Optional[str]): The Reply-To address.
        attachments (List[Attachment]): Files attached in order.
    """

    to: List[str] = dataclasses.field(default_factory=list)
    subject: str = ""
    body: str = ""
    cc: List[str] = dataclasses.field(default_factory=list)
    bcc: List[str] = dataclasses.field(default_factory=list)
    is_html: bool = False
    sender: Optional[str] = None
    reply_to: Optional[str] = None
    attachments: List[Attachment] = dataclasses.field(default_factory=list)

    def add_recipient(self, address: str) -> "Email":
        self.to.append(address)
        return self

    def add_cc(self, address: str) -> "Email":
        self.cc.append(address)
        return self

    def add_bcc(self, address: str) -> "Email":
        self.bcc.append(address)
        return self

    def attach_file(
        self, filename: str, content: bytes, mime_type: Optional[str] = None
    ) -> "Email":
        """Attaches in-memory content.

        Args:
            filename (str): The name the recipient sees.
            content (bytes): The file content.
            mime_type (Optional[str]): Explicit MIME type, see
                :class:`Attachment`.

        Returns:
            Email: This email, for chaining.
        """
        self.attachments.append(Attachment(filename, content, mime_type))
        return self

    def attach_path(self, path: str, mime_type: Optional[str] = None) -> "Email":
        """Reads a file from disk and attaches it under its base name.

        Raises:
            OSError: If the file cannot be read.
        """
        with open(path, "rb") as fh:
            content = fh.read()
        return self.attach_file(os.path.basename(path), content, mime_type)

    def _header_values(self):
        for address in self.recipients:
            yield "address", address
        yield "subject", self.subject
        if self.sender:
            yield "sender", self.sender
        if self.reply_to:
            yield "reply_to", self.reply_to

    @property
    def recipients(self) -> List[str]:
        """List[str]: Every address in to, cc and bcc, in that order."""
        return list(self.to) + list(self.cc) + list(self.bcc)

    def validate(self):
        """Checks that the email can be sent.

        This is a syntactic sanity check only: addresses merely need to
        contain an ``@``. No header value may contain a line break.

        Raises:
            gmailsend.exceptions.ValidationError: If there are no primary
                recipients, the subject or body is empty, an address is
                malformed, or a header value spans lines.
        """
        if not self.to:
            raise exceptions.ValidationError("at least one recipient is required")
        if not self.subject:
            raise exceptions.ValidationError("subject is required")
        if not self.body:
            raise exceptions.ValidationError("email body is required")

        for address in self.recipients:
            if "@" not in address:
                raise exceptions.ValidationError(f"invalid email: {address}")

        for name, value in self._header_values():
            if "\r" in value or "\n" in value:
                raise exceptions.ValidationError(
                    f"{name} must not contain line breaks: {value!r}"
                )
