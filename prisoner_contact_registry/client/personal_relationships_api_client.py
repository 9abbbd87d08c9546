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
"""Client for the personal-relationships-api.

Unlike prison-api, contacts and their restrictions come from two calls: a paged
listing of the prisoner's social contacts, then one batched lookup of the local
(relationship) and global (person) restrictions for every relationship returned.
"""
import datetime
import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional

import attr
import requests

from prisoner_contact_registry.client.upstream_client import (
    UpstreamApiClient,
    is_not_found_error,
    payload_converter,
)
from prisoner_contact_registry.common.constants.restriction_type import (
    ContactType,
    RestrictionScope,
)
from prisoner_contact_registry.contacts.types import Contact, Restriction
from prisoner_contact_registry.exceptions import PrisonerNotFoundError

CONTACTS_PAGE_SIZE = 350


@attr.s(frozen=True, kw_only=True)
class PersonalRelationshipsContact:
    """A single relationship from GET /prisoner/{prisonerNumber}/contact"""

    prisonerContactId: int = attr.ib()
    contactId: int = attr.ib()
    firstName: Optional[str] = attr.ib(default=None)
    middleNames: Optional[str] = attr.ib(default=None)
    lastName: Optional[str] = attr.ib(default=None)
    dateOfBirth: Optional[datetime.date] = attr.ib(default=None)
    relationshipToPrisonerCode: Optional[str] = attr.ib(default=None)
    relationshipToPrisonerDescription: Optional[str] = attr.ib(default=None)
    relationshipTypeCode: Optional[str] = attr.ib(default=None)
    relationshipTypeDescription: Optional[str] = attr.ib(default=None)
    isApprovedVisitor: bool = attr.ib(default=False)
    isEmergencyContact: bool = attr.ib(default=False)
    isNextOfKin: bool = attr.ib(default=False)
    comments: Optional[str] = attr.ib(default=None)


@attr.s(frozen=True, kw_only=True)
class PageMetadata:
    size: int = attr.ib(default=0)
    number: int = attr.ib(default=0)
    totalElements: int = attr.ib(default=0)
    totalPages: int = attr.ib(default=0)


@attr.s(frozen=True, kw_only=True)
class PersonalRelationshipsContactPage:
    content: List[PersonalRelationshipsContact] = attr.ib(factory=list)
    page: PageMetadata = attr.ib(factory=PageMetadata)


@attr.s(frozen=True, kw_only=True)
class PrisonerContactRestriction:
    prisonerContactRestrictionId: int = attr.ib()
    prisonerContactId: int = attr.ib()
    contactId: int = attr.ib()
    restrictionType: str = attr.ib()
    restrictionTypeDescription: Optional[str] = attr.ib(default=None)
    startDate: datetime.date = attr.ib()
    expiryDate: Optional[datetime.date] = attr.ib(default=None)
    comments: Optional[str] = attr.ib(default=None)


@attr.s(frozen=True, kw_only=True)
class GlobalContactRestriction:
    contactRestrictionId: int = attr.ib()
    contactId: int = attr.ib()
    restrictionType: str = attr.ib()
    restrictionTypeDescription: Optional[str] = attr.ib(default=None)
    startDate: datetime.date = attr.ib()
    expiryDate: Optional[datetime.date] = attr.ib(default=None)
    comments: Optional[str] = attr.ib(default=None)


@attr.s(frozen=True, kw_only=True)
class PrisonerContactRestrictions:
    prisonerContactId: int = attr.ib()
    prisonerContactRestrictions: List[PrisonerContactRestriction] = attr.ib(
        factory=list
    )
    globalContactRestrictions: List[GlobalContactRestriction] = attr.ib(factory=list)


@attr.s(frozen=True, kw_only=True)
class PrisonerContactRestrictionsResponse:
    prisonerContactRestrictions: List[PrisonerContactRestrictions] = attr.ib(
        factory=list
    )


def _local_restriction(r: PrisonerContactRestriction) -> Restriction:
    return Restriction(
        restriction_id=r.prisonerContactRestrictionId,
        type_code=r.restrictionType,
        type_description=r.restrictionTypeDescription,
        start_date=r.startDate,
        expiry_date=r.expiryDate,
        scope=RestrictionScope.LOCAL,
        comment=r.comments,
    )


def _global_restriction(r: GlobalContactRestriction) -> Restriction:
    return Restriction(
        restriction_id=r.contactRestrictionId,
        type_code=r.restrictionType,
        type_description=r.restrictionTypeDescription,
        start_date=r.startDate,
        expiry_date=r.expiryDate,
        scope=RestrictionScope.GLOBAL,
        comment=r.comments,
    )


def merge_contacts_and_restrictions(
    contacts: List[PersonalRelationshipsContact],
    restrictions: PrisonerContactRestrictionsResponse,
) -> List[Contact]:
    """Builds one Contact per relationship.

    Local restrictions belong to a single relationship and are matched on
    prisonerContactId. Global restrictions belong to the person, so they are
    attached to every relationship with the same contactId. The same person can
    appear more than once when they have several relationships to the prisoner,
    and each of those entries is kept.
    """
    local_by_relationship_id: Dict[int, List[Restriction]] = {}
    global_by_contact_id: Dict[int, List[Restriction]] = defaultdict(list)
    seen_global_ids = set()
    for group in restrictions.prisonerContactRestrictions:
        local_by_relationship_id[group.prisonerContactId] = [
            _local_restriction(r) for r in group.prisonerContactRestrictions
        ]
        for r in group.globalContactRestrictions:
            # Every relationship of a person repeats that person's global restrictions
            if (r.contactId, r.contactRestrictionId) in seen_global_ids:
                continue
            seen_global_ids.add((r.contactId, r.contactRestrictionId))
            global_by_contact_id[r.contactId].append(_global_restriction(r))

    logging.info(
        "Indexed restrictions: localByPrisonerContactId=%s, globalByContactId=%s",
        len(local_by_relationship_id),
        len(global_by_contact_id),
    )

    return [
        Contact(
            contact_id=c.contactId,
            relationship_id=c.prisonerContactId,
            first_name=c.firstName,
            middle_name=c.middleNames,
            last_name=c.lastName,
            date_of_birth=c.dateOfBirth,
            relationship_code=c.relationshipToPrisonerCode,
            relationship_description=c.relationshipToPrisonerDescription,
            contact_type=c.relationshipTypeCode,
            contact_type_description=c.relationshipTypeDescription,
            approved_visitor=c.isApprovedVisitor,
            emergency_contact=c.isEmergencyContact,
            next_of_kin=c.isNextOfKin,
            comment_text=c.comments,
            restrictions=local_by_relationship_id.get(c.prisonerContactId, [])
            + global_by_contact_id.get(c.contactId, []),
        )
        for c in contacts
    ]


class PersonalRelationshipsApiClient(UpstreamApiClient):
    """Reads a prisoner's social contacts and their restrictions from
    personal-relationships-api."""

    def get_prisoner_contacts(
        self, prisoner_id: str, approved_visitor_only: bool
    ) -> List[Contact]:
        logging.info(
            "Get prisoner contacts called for %s, via the personal-relationships-api",
            prisoner_id,
        )
        contacts = self._get_all_contacts(prisoner_id, approved_visitor_only)
        logging.info(
            "Get prisoner contacts called for %s, via the personal-relationships-api "
            "returned %s contacts, relationshipType = %s",
            prisoner_id,
            len(contacts),
            ContactType.SOCIAL.value,
        )
        if not contacts:
            return []

        restrictions = self._get_prisoner_contact_restrictions(
            [c.prisonerContactId for c in contacts]
        )
        return merge_contacts_and_restrictions(contacts, restrictions)

    def _get_all_contacts(
        self, prisoner_id: str, approved_visitor_only: bool
    ) -> List[PersonalRelationshipsContact]:
        path = f"/prisoner/{prisoner_id}/contact"
        contacts: List[PersonalRelationshipsContact] = []
        page_number = 0
        while True:
            params: Dict[str, Any] = {
                "relationshipType": ContactType.SOCIAL.value,
                "page": page_number,
                "size": CONTACTS_PAGE_SIZE,
            }
            # approvedVisitor=false would return only the unapproved visitors
            if approved_visitor_only:
                params["approvedVisitor"] = "true"

            try:
                body = self.get(path, params=params)
            except requests.HTTPError as e:
                if is_not_found_error(e):
                    logging.error(
                        "get prisoner contacts returned NOT_FOUND for get request %s",
                        path,
                    )
                    raise PrisonerNotFoundError(
                        f"Contacts not found for - {prisoner_id} on personal-relationships-api"
                    ) from e
                raise

            page = payload_converter.structure(body, PersonalRelationshipsContactPage)
            contacts.extend(page.content)
            page_number += 1
            if page_number >= page.page.totalPages:
                return contacts

    def _get_prisoner_contact_restrictions(
        self, prisoner_contact_ids: List[int]
    ) -> PrisonerContactRestrictionsResponse:
        path = "/prisoner-contact/restrictions"
        logging.info(
            "Get prisoner contact restrictions called %s, via the personal-relationships-api",
            path,
        )
        body = self.post(path, json={"prisonerContactIds": prisoner_contact_ids})
        return payload_converter.structure(body, PrisonerContactRestrictionsResponse)
