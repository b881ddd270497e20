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

from setuptools import find_packages
from setuptools import setup


DEPENDENCIES = (
    "google-auth >= 2.14.0, < 3.0.0",
    "google-auth-oauthlib >= 1.0.0",
    "oauthlib >= 3.2.0",
    "requests >= 2.20.0, < 3.0.0",
)

extras = {
    "testing": ["pytest", "pytest-cov", "mock", "freezegun"],
}

package_root = os.path.abspath(os.path.dirname(__file__))

version = {}
with open(os.path.join(package_root, "gmailsend/version.py")) as fp:
    exec(fp.read(), version)

setup(
    name="gmailsend",
    version=version["__version__"],
    description="Send email through the Gmail API with delegated user authorization",
    license="Apache 2.0",
    packages=find_packages(exclude=("tests*", "docs*")),
    install_requires=DEPENDENCIES,
    extras_require=extras,
    python_requires=">=3.8",
    entry_points={"console_scripts": ["gmailsend = gmailsend.__main__:main"]},
)
