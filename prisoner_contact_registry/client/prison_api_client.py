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
"""Client for the legacy prison-api, which returns each contact with its
restrictions inline."""
import datetime
import logging
from typing import List, Optional

import attr
import requests

from prisoner_contact_registry.client.upstream_client import (
    UpstreamApiClient,
    is_not_found_error,
    payload_converter,
)
from prisoner_contact_registry.common.constants.restriction_type import (
    RestrictionScope,
)
from prisoner_contact_registry.contacts.types import (
    Address,
    AddressUsage,
    Contact,
    Restriction,
    Telephone,
)
from prisoner_contact_registry.exceptions import (
    PersonNotFoundError,
    PrisonerNotFoundError,
)

# Payload shapes below must match the prison-api responses


@attr.s(frozen=True, kw_only=True)
class PrisonApiRestriction:
    restrictionId: Optional[int] = attr.ib(default=None)
    restrictionType: Optional[str] = attr.ib(default=None)
    restrictionTypeDescription: Optional[str] = attr.ib(default=None)
    startDate: Optional[datetime.date] = attr.ib(default=None)
    expiryDate: Optional[datetime.date] = attr.ib(default=None)
    globalRestriction: bool = attr.ib(default=False)
    comment: Optional[str] = attr.ib(default=None)

    def to_restriction(self) -> Optional[Restriction]:
        """Returns None for a restriction with no type or start date, since it cannot
        be evaluated against a visit date."""
        if self.restrictionType is None or self.startDate is None:
            return None
        return Restriction(
            restriction_id=self.restrictionId,
            type_code=self.restrictionType,
            type_description=self.restrictionTypeDescription,
            start_date=self.startDate,
            expiry_date=self.expiryDate,
            scope=RestrictionScope.GLOBAL
            if self.globalRestriction
            else RestrictionScope.LOCAL,
            comment=self.comment,
        )


@attr.s(frozen=True, kw_only=True)
class PrisonApiContact:
    """A single entry from GET /api/offenders/{offenderNo}/contacts"""

    personId: Optional[int] = attr.ib(default=None)
    firstName: Optional[str] = attr.ib(default=None)
    middleName: Optional[str] = attr.ib(default=None)
    lastName: Optional[str] = attr.ib(default=None)
    dateOfBirth: Optional[datetime.date] = attr.ib(default=None)
    relationshipCode: Optional[str] = attr.ib(default=None)
    relationshipDescription: Optional[str] = attr.ib(default=None)
    contactType: Optional[str] = attr.ib(default=None)
    contactTypeDescription: Optional[str] = attr.ib(default=None)
    approvedVisitor: bool = attr.ib(default=False)
    emergencyContact: bool = attr.ib(default=False)
    nextOfKin: bool = attr.ib(default=False)
    commentText: Optional[str] = attr.ib(default=None)
    restrictions: List[PrisonApiRestriction] = attr.ib(factory=list)

    def to_contact(self) -> Contact:
        restrictions = []
        for r in self.restrictions:
            restriction = r.to_restriction()
            if restriction is None:
                logging.warning(
                    "Skipping restriction %s for person %s with type %s and start date %s",
                    r.restrictionId,
                    self.personId,
                    r.restrictionType,
                    r.startDate,
                )
                continue
            restrictions.append(restriction)
        return Contact(
            contact_id=self.personId,
            first_name=self.firstName,
            middle_name=self.middleName,
            last_name=self.lastName,
            date_of_birth=self.dateOfBirth,
            relationship_code=self.relationshipCode,
            relationship_description=self.relationshipDescription,
            contact_type=self.contactType,
            contact_type_description=self.contactTypeDescription,
            approved_visitor=self.approvedVisitor,
            emergency_contact=self.emergencyContact,
            next_of_kin=self.nextOfKin,
            comment_text=self.commentText,
            # prison-api mixes both scopes in one list, keep local ones first
            restrictions=[r for r in restrictions if not r.is_global]
            + [r for r in restrictions if r.is_global],
        )


@attr.s(frozen=True, kw_only=True)
class PrisonApiContacts:
    offenderContacts: List[PrisonApiContact] = attr.ib(factory=list)


@attr.s(frozen=True, kw_only=True)
class PrisonApiTelephone:
    number: str = attr.ib()
    type: str = attr.ib()
    ext: Optional[str] = attr.ib(default=None)


@attr.s(frozen=True, kw_only=True)
class PrisonApiAddressUsage:
    addressUsage: Optional[str] = attr.ib(default=None)
    addressUsageDescription: Optional[str] = attr.ib(default=None)
    activeFlag: Optional[bool] = attr.ib(default=None)


@attr.s(frozen=True, kw_only=True)
class PrisonApiAddress:
    """A single entry from GET /api/persons/{personId}/addresses"""

    addressType: Optional[str] = attr.ib(default=None)
    flat: Optional[str] = attr.ib(default=None)
    premise: Optional[str] = attr.ib(default=None)
    street: Optional[str] = attr.ib(default=None)
    locality: Optional[str] = attr.ib(default=None)
    town: Optional[str] = attr.ib(default=None)
    postalCode: Optional[str] = attr.ib(default=None)
    county: Optional[str] = attr.ib(default=None)
    country: Optional[str] = attr.ib(default=None)
    comment: Optional[str] = attr.ib(default=None)
    primary: bool = attr.ib(default=False)
    noFixedAddress: bool = attr.ib(default=False)
    startDate: Optional[datetime.date] = attr.ib(default=None)
    endDate: Optional[datetime.date] = attr.ib(default=None)
    phones: List[PrisonApiTelephone] = attr.ib(factory=list)
    addressUsages: List[PrisonApiAddressUsage] = attr.ib(factory=list)

    def to_address(self) -> Address:
        return Address(
            address_type=self.addressType,
            flat=self.flat,
            premise=self.premise,
            street=self.street,
            locality=self.locality,
            town=self.town,
            postal_code=self.postalCode,
            county=self.county,
            country=self.country,
            comment=self.comment,
            primary=self.primary,
            no_fixed_address=self.noFixedAddress,
            start_date=self.startDate,
            end_date=self.endDate,
            phones=[
                Telephone(number=p.number, type=p.type, ext=p.ext) for p in self.phones
            ],
            address_usages=[
                AddressUsage(
                    address_usage=u.addressUsage,
                    address_usage_description=u.addressUsageDescription,
                    active_flag=u.activeFlag,
                )
                for u in self.addressUsages
            ],
        )


class PrisonApiClient(UpstreamApiClient):
    """Reads contacts and person addresses from prison-api."""

    def get_offender_contacts(
        self, offender_no: str, approved_visitors_only: bool
    ) -> List[Contact]:
        path = f"/api/offenders/{offender_no}/contacts"
        params = {"approvedVisitorsOnly": "true"} if approved_visitors_only else None
        logging.info(
            "Get offender contacts called for %s, approvedVisitorsOnly - %s",
            offender_no,
            approved_visitors_only,
        )
        try:
            body = self.get(path, params=params)
        except requests.HTTPError as e:
            if is_not_found_error(e):
                logging.error(
                    "get offender contacts returned NOT_FOUND for get request %s", path
                )
                raise PrisonerNotFoundError(
                    f"Contacts not found for - {offender_no} on prison-api"
                ) from e
            raise

        contacts = payload_converter.structure(body, PrisonApiContacts)
        return [c.to_contact() for c in contacts.offenderContacts]

    def get_person_addresses(self, person_id: int) -> List[Address]:
        path = f"/api/persons/{person_id}/addresses"
        logging.info("Get person address called for %s", person_id)
        try:
            body = self.get(path)
        except requests.HTTPError as e:
            if is_not_found_error(e):
                raise PersonNotFoundError(
                    f"Addresses not found for - {person_id} on prison-api"
                ) from e
            raise

        addresses = payload_converter.structure(body or [], List[PrisonApiAddress])
        return [a.to_address() for a in addresses]
