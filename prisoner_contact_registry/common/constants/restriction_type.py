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
"""Well-known restriction and contact type codes."""
from enum import Enum


class RestrictionType(Enum):
    """Restriction type codes that this service applies its own rules to. Any
    other code is still carried through as a free-form string."""

    BANNED = "BAN"
    CLOSED = "CLOSED"


class ContactType(Enum):
    SOCIAL = "S"
    OFFICIAL = "O"


class RestrictionScope(Enum):
    # Scoped to one prisoner-contact relationship
    LOCAL = "LOCAL"
    # Scoped to the contact as a person, across all of their prisoner relationships
    GLOBAL = "GLOBAL"
