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
"""Tools for working with environment variables."""
import os
import sys

import prisoner_contact_registry


def in_test() -> bool:
    """Check whether we are running in a test"""
    # Pytest sets prisoner_contact_registry.called_from_test in conftest.py
    if not hasattr(prisoner_contact_registry, "called_from_test"):
        # If it is not set, we may have been called from unittest. Check if unittest has been imported, if it has then
        # we assume we are running from a unittest
        setattr(
            prisoner_contact_registry, "called_from_test", "unittest" in sys.modules
        )
    return getattr(prisoner_contact_registry, "called_from_test")


def in_development() -> bool:
    return os.environ.get("IS_DEV") == "true"


def get_version() -> str:
    return os.getenv("CURRENT_GIT_SHA", "")
