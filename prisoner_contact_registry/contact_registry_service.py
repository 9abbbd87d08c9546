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
"""Implements the contact listing and restriction queries served by the API.

Every call works on a fresh snapshot of the prisoner's contacts fetched for
that call; nothing is cached between calls.
"""
import datetime
import logging
from typing import AbstractSet, List, Optional, Sequence

from prisoner_contact_registry.common.constants.restriction_type import (
    ContactType,
    RestrictionType,
)
from prisoner_contact_registry.common.date import DateRange, date_or_today_uk
from prisoner_contact_registry.config import ContactRegistryConfig
from prisoner_contact_registry.contacts.contact_filters import (
    AddressEnricher,
    ContactFilters,
    apply_filters,
    sort_by_name,
)
from prisoner_contact_registry.contacts.contact_repository import ContactRepository
from prisoner_contact_registry.contacts.types import Contact
from prisoner_contact_registry.restrictions.restriction_classifier import (
    active_restrictions,
)
from prisoner_contact_registry.restrictions.restriction_window_resolver import (
    has_active_restriction_of_type,
    resolve_affected_windows,
    resolve_banned_window,
)
from prisoner_contact_registry.restrictions.visitor_matcher import (
    match_visitor,
    match_visitors,
)


class ContactRegistryService:
    """Reads a prisoner's contacts and answers restriction questions about them."""

    def __init__(
        self, repository: ContactRepository, address_lookup_max_workers: int = 1
    ) -> None:
        self.repository = repository
        self.address_enricher = AddressEnricher(
            repository.fetch_addresses, max_workers=address_lookup_max_workers
        )

    @classmethod
    def from_config(cls, config: ContactRegistryConfig) -> "ContactRegistryService":
        return cls(
            ContactRepository.from_config(config),
            address_lookup_max_workers=config.address_lookup_max_workers,
        )

    def _list_contacts(
        self,
        prisoner_id: str,
        filters: ContactFilters,
        with_address: bool,
    ) -> List[Contact]:
        contacts = apply_filters(
            self.repository.fetch_contacts(prisoner_id, filters.approved_only),
            filters,
        )
        if with_address:
            contacts = self.address_enricher.enrich(prisoner_id, contacts)
        return contacts

    def get_contact_list(
        self,
        prisoner_id: str,
        contact_type: Optional[str] = None,
        contact_id: Optional[int] = None,
        with_address: bool = True,
    ) -> List[Contact]:
        """Returns all of the prisoner's contacts in upstream order, optionally
        narrowed to one contact type or one person."""
        logging.debug(
            "getContactList called with parameters : prisonerId - %s, type - %s, id - %s, withAddress - %s",
            prisoner_id,
            contact_type,
            contact_id,
            with_address,
        )
        return self._list_contacts(
            prisoner_id,
            ContactFilters(contact_type=contact_type, contact_id=contact_id),
            with_address,
        )

    def get_social_contacts(
        self,
        prisoner_id: str,
        contact_id: Optional[int] = None,
        has_date_of_birth: bool = False,
        not_banned_before_date: Optional[datetime.date] = None,
        with_address: bool = True,
        approved_visitors_only: bool = False,
    ) -> List[Contact]:
        """Returns the prisoner's social contacts sorted by last name, then first
        name."""
        logging.debug(
            "getSocialContacts called with parameters : prisonerId - %s, id - %s, hasDateOfBirth - %s, "
            "notBannedBeforeDate - %s, withAddress - %s, approvedVisitorsOnly - %s",
            prisoner_id,
            contact_id,
            has_date_of_birth,
            not_banned_before_date,
            with_address,
            approved_visitors_only,
        )
        filters = ContactFilters(
            contact_type=ContactType.SOCIAL.value,
            contact_id=contact_id,
            approved_only=approved_visitors_only,
            has_date_of_birth=has_date_of_birth,
            not_banned_before_date=not_banned_before_date,
        )
        return sort_by_name(self._list_contacts(prisoner_id, filters, with_address))

    def get_approved_social_contacts(
        self,
        prisoner_id: str,
        contact_id: Optional[int] = None,
        has_date_of_birth: bool = False,
        not_banned_before_date: Optional[datetime.date] = None,
        with_address: bool = True,
    ) -> List[Contact]:
        return self.get_social_contacts(
            prisoner_id,
            contact_id=contact_id,
            has_date_of_birth=has_date_of_birth,
            not_banned_before_date=not_banned_before_date,
            with_address=with_address,
            approved_visitors_only=True,
        )

    def _approved_visitors(
        self, prisoner_id: str, visitor_ids: Sequence[int]
    ) -> List[Contact]:
        return match_visitors(
            prisoner_id,
            self.repository.fetch_contacts(prisoner_id, approved_only=True),
            visitor_ids,
        )

    def get_banned_window(
        self, prisoner_id: str, visitor_ids: Sequence[int], window: DateRange
    ) -> DateRange:
        """Returns the part of |window| after every visitor's BAN restrictions have
        expired. Raises DateRangeNotFoundError if no such part exists."""
        logging.debug(
            "getBannedDateRange called with parameters : prisonerId - %s, visitorIds - %s, fromDate - %s, toDate - %s",
            prisoner_id,
            visitor_ids,
            window.from_date,
            window.to_date,
        )
        return resolve_banned_window(
            self._approved_visitors(prisoner_id, visitor_ids), window
        )

    def get_closed_restriction_status(
        self,
        prisoner_id: str,
        visitor_ids: Sequence[int],
        as_of: Optional[datetime.date] = None,
    ) -> bool:
        """True if any of the visitors has a CLOSED restriction in force on
        |as_of|, today by default."""
        logging.debug(
            "getClosedRestrictionStatus called with parameters : prisonerId - %s, visitorIds - %s",
            prisoner_id,
            visitor_ids,
        )
        return has_active_restriction_of_type(
            self._approved_visitors(prisoner_id, visitor_ids),
            RestrictionType.CLOSED.value,
            date_or_today_uk(as_of),
        )

    def get_request_visit_windows(
        self,
        prisoner_id: str,
        visitor_ids: Sequence[int],
        supported_codes: AbstractSet[str],
        window: DateRange,
    ) -> List[DateRange]:
        logging.info(
            "getRequestVisitWindows called with parameters : prisonerId - %s, visitorIds - %s, "
            "supportedCodes - %s, fromDate - %s, toDate - %s",
            prisoner_id,
            visitor_ids,
            sorted(supported_codes),
            window.from_date,
            window.to_date,
        )
        return resolve_affected_windows(
            self._approved_visitors(prisoner_id, visitor_ids), supported_codes, window
        )

    def get_active_restrictions(
        self,
        prisoner_id: str,
        visitor_id: int,
        as_of: Optional[datetime.date] = None,
    ) -> List[str]:
        """Returns the distinct type codes of the visitor's restrictions in force on
        |as_of| (today by default), in the order they are first seen."""
        logging.debug(
            "getActiveRestrictions called with parameters : prisonerId - %s, visitorId - %s",
            prisoner_id,
            visitor_id,
        )
        as_of = date_or_today_uk(as_of)
        visitor_relationships = match_visitor(
            prisoner_id,
            self.repository.fetch_contacts(prisoner_id, approved_only=True),
            visitor_id,
        )
        type_codes: List[str] = []
        for contact in visitor_relationships:
            for restriction in active_restrictions(contact, as_of):
                if restriction.type_code not in type_codes:
                    type_codes.append(restriction.type_code)
        return type_codes
