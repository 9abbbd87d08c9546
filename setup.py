# Recidiviz - a data platform for criminal justice reform
# Copyright (C) 2025 Recidiviz, Inc.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
# =============================================================================
"""Packaging for the Prisoner Contact Registry API server.

The server is deployed as a container running gunicorn (see gunicorn.conf.py).
The `test` extra adds the libraries needed to run the test suite.
"""
import setuptools

REQUIRED_PACKAGES = [
    "attrs",
    "cattrs",
    "Flask",
    "gunicorn",
    "marshmallow>=3.13",
    "pytz",
    "requests",
    "sentry-sdk[flask]",
    "tenacity",
]

TEST_PACKAGES = [
    "freezegun",
    "pytest",
    "responses>=0.17",
]

setuptools.setup(
    name="prisoner-contact-registry",
    version="1.0.0",
    python_requires=">=3.8",
    install_requires=REQUIRED_PACKAGES,
    extras_require={"test": TEST_PACKAGES},
    packages=setuptools.find_packages(include=["prisoner_contact_registry*"]),
)
