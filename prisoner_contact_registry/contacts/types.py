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
"""Normalized, read-only shapes for a prisoner's contacts. Both upstream contact
sources are converted into these types at the repository boundary."""
import datetime
from typing import List, Optional

import attr

from prisoner_contact_registry.common.constants.restriction_type import (
    RestrictionScope,
)


@attr.s(frozen=True, kw_only=True)
class Restriction:
    """A constraint on a contact's ability to visit."""

    restriction_id: Optional[int] = attr.ib(default=None)
    # Free-form; well-known values are listed in RestrictionType
    type_code: str = attr.ib()
    type_description: Optional[str] = attr.ib(default=None)
    start_date: datetime.date = attr.ib()
    # None means the restriction never expires
    expiry_date: Optional[datetime.date] = attr.ib(default=None)
    scope: RestrictionScope = attr.ib(default=RestrictionScope.LOCAL)
    comment: Optional[str] = attr.ib(default=None)

    def __attrs_post_init__(self) -> None:
        if self.expiry_date is not None and self.expiry_date < self.start_date:
            raise ValueError(
                f"Restriction [{self.restriction_id}] expires ({self.expiry_date}) "
                f"before it starts ({self.start_date})"
            )

    @property
    def is_global(self) -> bool:
        return self.scope == RestrictionScope.GLOBAL


@attr.s(frozen=True, kw_only=True)
class Telephone:
    number: str = attr.ib()
    type: str = attr.ib()
    ext: Optional[str] = attr.ib(default=None)


@attr.s(frozen=True, kw_only=True)
class AddressUsage:
    address_usage: Optional[str] = attr.ib(default=None)
    address_usage_description: Optional[str] = attr.ib(default=None)
    active_flag: Optional[bool] = attr.ib(default=None)


@attr.s(frozen=True, kw_only=True)
class Address:
    """A postal address held against a contact."""

    address_type: Optional[str] = attr.ib(default=None)
    flat: Optional[str] = attr.ib(default=None)
    premise: Optional[str] = attr.ib(default=None)
    street: Optional[str] = attr.ib(default=None)
    locality: Optional[str] = attr.ib(default=None)
    town: Optional[str] = attr.ib(default=None)
    postal_code: Optional[str] = attr.ib(default=None)
    county: Optional[str] = attr.ib(default=None)
    country: Optional[str] = attr.ib(default=None)
    comment: Optional[str] = attr.ib(default=None)
    primary: bool = attr.ib(default=False)
    no_fixed_address: bool = attr.ib(default=False)
    start_date: Optional[datetime.date] = attr.ib(default=None)
    end_date: Optional[datetime.date] = attr.ib(default=None)
    phones: List[Telephone] = attr.ib(factory=list)
    address_usages: List[AddressUsage] = attr.ib(factory=list)


@attr.s(frozen=True, kw_only=True)
class Contact:
    """A person linked to a prisoner through one relationship.

    The same |contact_id| may appear on more than one Contact when a person has
    several relationships to the prisoner; |relationship_id| tells them apart.
    """

    # Not every contact in NOMIS has a person record
    contact_id: Optional[int] = attr.ib(default=None)
    relationship_id: Optional[int] = attr.ib(default=None)
    first_name: Optional[str] = attr.ib(default=None)
    middle_name: Optional[str] = attr.ib(default=None)
    last_name: Optional[str] = attr.ib(default=None)
    date_of_birth: Optional[datetime.date] = attr.ib(default=None)
    relationship_code: Optional[str] = attr.ib(default=None)
    relationship_description: Optional[str] = attr.ib(default=None)
    contact_type: Optional[str] = attr.ib(default=None)
    contact_type_description: Optional[str] = attr.ib(default=None)
    approved_visitor: bool = attr.ib(default=False)
    emergency_contact: bool = attr.ib(default=False)
    next_of_kin: bool = attr.ib(default=False)
    comment_text: Optional[str] = attr.ib(default=None)
    # Local and global restrictions together, local first
    restrictions: List[Restriction] = attr.ib(factory=list)
    addresses: List[Address] = attr.ib(factory=list)

    @property
    def local_restrictions(self) -> List[Restriction]:
        return [r for r in self.restrictions if not r.is_global]

    @property
    def global_restrictions(self) -> List[Restriction]:
        return [r for r in self.restrictions if r.is_global]

    def with_addresses(self, addresses: List[Address]) -> "Contact":
        return attr.evolve(self, addresses=addresses)


def is_contact_type(contact: Contact, contact_type: str) -> bool:
    """Case-insensitive match of a contact's type code."""
    if contact.contact_type is None:
        return False
    return contact.contact_type.lower() == contact_type.lower()
