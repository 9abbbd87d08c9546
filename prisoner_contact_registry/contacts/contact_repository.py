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
"""Single entry point for reading a prisoner's contacts, whichever upstream
holds them."""
import logging
from typing import List, Optional

from prisoner_contact_registry.client.hmpps_auth_client import HmppsAuthClient
from prisoner_contact_registry.client.personal_relationships_api_client import (
    PersonalRelationshipsApiClient,
)
from prisoner_contact_registry.client.prison_api_client import PrisonApiClient
from prisoner_contact_registry.config import ContactRegistryConfig, ContactSource
from prisoner_contact_registry.contacts.types import Address, Contact
from prisoner_contact_registry.utils.types import non_optional


class ContactRepository:
    """Fetches contacts from the configured contact source and normalizes them into
    Contact objects. Addresses always come from prison-api.

    Raises PrisonerNotFoundError when the contact source does not know the
    prisoner and PersonNotFoundError when prison-api has no person record for an
    address lookup. Every other upstream failure propagates unchanged.
    """

    def __init__(
        self,
        contact_source: ContactSource,
        prison_api_client: PrisonApiClient,
        personal_relationships_api_client: Optional[
            PersonalRelationshipsApiClient
        ] = None,
    ) -> None:
        if (
            contact_source == ContactSource.PERSONAL_RELATIONSHIPS_API
            and personal_relationships_api_client is None
        ):
            raise ValueError(
                "A personal-relationships-api client is required for contact "
                f"source [{contact_source.value}]"
            )
        self.contact_source = contact_source
        self.prison_api_client = prison_api_client
        self.personal_relationships_api_client = personal_relationships_api_client

    @classmethod
    def from_config(cls, config: ContactRegistryConfig) -> "ContactRepository":
        auth_client = HmppsAuthClient(config.hmpps_auth) if config.hmpps_auth else None
        personal_relationships_api_client = None
        if config.personal_relationships_api_url:
            personal_relationships_api_client = PersonalRelationshipsApiClient(
                config.personal_relationships_api_url,
                config.api_timeout_seconds,
                auth_client,
            )
        return cls(
            contact_source=config.contact_source,
            prison_api_client=PrisonApiClient(
                config.prison_api_url, config.prison_api_timeout_seconds, auth_client
            ),
            personal_relationships_api_client=personal_relationships_api_client,
        )

    def fetch_contacts(self, prisoner_id: str, approved_only: bool) -> List[Contact]:
        logging.debug(
            "Fetching contacts for %s from %s, approved only: %s",
            prisoner_id,
            self.contact_source.value,
            approved_only,
        )
        if self.contact_source == ContactSource.PERSONAL_RELATIONSHIPS_API:
            return non_optional(
                self.personal_relationships_api_client
            ).get_prisoner_contacts(prisoner_id, approved_only)
        return self.prison_api_client.get_offender_contacts(prisoner_id, approved_only)

    def fetch_addresses(self, contact_id: int) -> List[Address]:
        return self.prison_api_client.get_person_addresses(contact_id)
