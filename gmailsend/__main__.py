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

"""Command line entry point.

Usage::

    python -m gmailsend authorize
    python -m gmailsend send --to a@example.com --subject Hi --body Hello

Paths default to the ``GMAILSEND_*`` environment variables, see
:mod:`gmailsend.environment_vars`.
"""

import argparse
import json
import logging
import sys

from gmailsend import authenticator
from gmailsend import client
from gmailsend import config as _config
from gmailsend import exceptions
from gmailsend import message


_LOGGER = logging.getLogger(__name__)


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="gmailsend", description="Send email through the Gmail API."
    )
    parser.add_argument("--credentials", help="OAuth client credentials file")
    parser.add_argument("--token", help="token file to read and write")
    parser.add_argument(
        "--scope",
        action="append",
        dest="scopes",
        help="OAuth scope to request (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")

    subparsers = parser.add_subparsers(dest="command", required=True)

    authorize = subparsers.add_parser(
        "authorize", help="run the consent flow and save a token"
    )
    authorize.add_argument(
        "--code", help="authorization code obtained out of band; skips the prompt"
    )

    send = subparsers.add_parser("send", help="send one email")
    send.add_argument("--to", action="append", required=True)
    send.add_argument("--cc", action="append", default=[])
    send.add_argument("--bcc", action="append", default=[])
    send.add_argument("--subject", required=True)
    send.add_argument("--body", required=True)
    send.add_argument("--html", action="store_true", help="body is HTML")
    send.add_argument("--from", dest="sender")
    send.add_argument("--reply-to")
    send.add_argument("--attach", action="append", default=[], metavar="PATH")
    return parser


def _load_config(args):
    config = _config.Config.from_environment()
    if args.credentials:
        config.credentials_file = args.credentials
    if args.token:
        config.token_file = args.token
    if args.scopes:
        config.scopes = args.scopes
    return config


def _authorize(args, config):
    prompt = authenticator.static_prompt(args.code) if args.code else None
    manager = authenticator.CredentialManager(config, prompt=prompt)
    manager.obtain_token()
    return 0


def _send(args, config):
    email = message.Email(
        to=args.to,
        cc=args.cc,
        bcc=args.bcc,
        subject=args.subject,
        body=args.body,
        is_html=args.html,
        sender=args.sender,
        reply_to=args.reply_to,
    )
    for path in args.attach:
        email.attach_path(path)

    result = client.MailClient(config).send_email(email)
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.success else 1


def main(argv=None):
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    config = _load_config(args)

    try:
        if args.command == "authorize":
            return _authorize(args, config)
        return _send(args, config)
    except (exceptions.GmailSendError, OSError) as caught_exc:
        _LOGGER.error("%s", caught_exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
