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
"""Helpers for sorting restrictions by type and by whether they are still in
force."""
import datetime
from typing import Iterable, Iterator, List

from prisoner_contact_registry.contacts.types import Contact, Restriction


def is_active(restriction: Restriction, as_of: datetime.date) -> bool:
    """A restriction is active up to and including its expiry date. Restrictions
    with no expiry never stop being active."""
    return restriction.expiry_date is None or as_of <= restriction.expiry_date


def restrictions_of_type(contact: Contact, type_code: str) -> List[Restriction]:
    """Returns the contact's local and global restrictions with exactly
    |type_code| (case-sensitive)."""
    return [r for r in contact.restrictions if r.type_code == type_code]


def all_restrictions(contacts: Iterable[Contact]) -> Iterator[Restriction]:
    for contact in contacts:
        yield from contact.local_restrictions
        yield from contact.global_restrictions


def active_restrictions(
    contact: Contact, as_of: datetime.date
) -> List[Restriction]:
    return [r for r in contact.restrictions if is_active(r, as_of)]
