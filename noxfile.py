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

import nox

BLACK_VERSION = "black==23.7.0"
BLACK_PATHS = ["gmailsend", "tests", "noxfile.py", "setup.py"]


@nox.session(python="3.10")
def lint(session):
    session.install("flake8", "flake8-import-order", BLACK_VERSION)
    session.install("-e", ".")
    session.run("black", "--check", *BLACK_PATHS)
    session.run(
        "flake8",
        "--import-order-style=google",
        "--application-import-names=gmailsend,tests",
        "gmailsend",
        "tests",
    )


@nox.session(python="3.10")
def blacken(session):
    """Run black. Format code to uniform standard."""
    session.install(BLACK_VERSION)
    session.run("black", *BLACK_PATHS)


@nox.session(python="3.10")
def mypy(session):
    """Verify type hints are mypy compatible."""
    session.install("-e", ".")
    session.install("mypy", "types-freezegun", "types-requests", "types-mock")
    session.run("mypy", "-p", "gmailsend")


@nox.session(python=["3.8", "3.9", "3.10", "3.11", "3.12"])
def unit(session):
    session.install("-e", ".[testing]")
    session.run(
        "pytest",
        f"--junitxml=unit_{session.python}_sponge_log.xml",
        "--cov=gmailsend",
        "--cov=tests",
        "--cov-report=term-missing",
        "tests",
    )


@nox.session(python="3.10")
def cover(session):
    session.install("-e", ".[testing]")
    session.run(
        "pytest",
        "--cov=gmailsend",
        "--cov=tests",
        "--cov-report=term-missing",
        "tests",
    )
    session.run("coverage", "report", "--show-missing", "--fail-under=90")
