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
"""Filters, ordering and address enrichment for contact listings."""
import datetime
import logging
from concurrent import futures
from typing import Callable, List, Optional

import attr

from prisoner_contact_registry.common.constants.restriction_type import (
    RestrictionType,
)
from prisoner_contact_registry.contacts.types import Address, Contact, is_contact_type
from prisoner_contact_registry.exceptions import PersonNotFoundError
from prisoner_contact_registry.restrictions.restriction_classifier import (
    restrictions_of_type,
)


@attr.s(frozen=True, kw_only=True)
class ContactFilters:
    """Which contacts a listing should return. Unset fields do not filter."""

    contact_type: Optional[str] = attr.ib(default=None)
    contact_id: Optional[int] = attr.ib(default=None)
    approved_only: bool = attr.ib(default=False)
    has_date_of_birth: bool = attr.ib(default=False)
    not_banned_before_date: Optional[datetime.date] = attr.ib(default=None)


def is_banned_on_or_after(contact: Contact, date: datetime.date) -> bool:
    """True if the contact has a BAN that is open-ended or still in force on
    |date|."""
    return any(
        ban.expiry_date is None or ban.expiry_date >= date
        for ban in restrictions_of_type(contact, RestrictionType.BANNED.value)
    )


def apply_filters(contacts: List[Contact], filters: ContactFilters) -> List[Contact]:
    result = contacts
    if filters.contact_type:
        result = [c for c in result if is_contact_type(c, filters.contact_type)]
    if filters.contact_id is not None:
        result = [c for c in result if c.contact_id == filters.contact_id]
    if filters.approved_only:
        result = [c for c in result if c.approved_visitor]
    if filters.has_date_of_birth:
        result = [c for c in result if c.date_of_birth is not None]
    if filters.not_banned_before_date is not None:
        not_banned_before_date = filters.not_banned_before_date
        result = [
            c for c in result if not is_banned_on_or_after(c, not_banned_before_date)
        ]
    return result


def sort_by_name(contacts: List[Contact]) -> List[Contact]:
    return sorted(contacts, key=lambda c: (c.last_name or "", c.first_name or ""))


class AddressEnricher:
    """Attaches addresses to contacts, one lookup per contact.

    A PersonNotFoundError for a contact leaves that contact with no addresses.
    Any other error fails the whole enrichment.
    """

    def __init__(
        self,
        fetch_addresses: Callable[[int], List[Address]],
        max_workers: int = 1,
    ) -> None:
        self._fetch_addresses = fetch_addresses
        self._max_workers = max_workers

    def _addresses_for(self, prisoner_id: str, contact: Contact) -> List[Address]:
        # In NOMIS a contact does not require a person id
        if contact.contact_id is None:
            return []
        try:
            return self._fetch_addresses(contact.contact_id)
        except PersonNotFoundError:
            logging.warning(
                "Person not found for prisoner %s contact %s",
                prisoner_id,
                contact.contact_id,
            )
            return []

    def enrich(self, prisoner_id: str, contacts: List[Contact]) -> List[Contact]:
        if self._max_workers <= 1 or len(contacts) <= 1:
            addresses = [self._addresses_for(prisoner_id, c) for c in contacts]
        else:
            with futures.ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                # map keeps the input order and re-raises the first failure
                addresses = list(
                    executor.map(
                        lambda c: self._addresses_for(prisoner_id, c), contacts
                    )
                )
        return [
            contact.with_addresses(contact_addresses)
            for contact, contact_addresses in zip(contacts, addresses)
        ]
