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
"""Tests for prison_api_client.py"""
import datetime
from unittest import TestCase
from unittest.mock import MagicMock

import requests
import responses
from responses import matchers

from prisoner_contact_registry.client.prison_api_client import PrisonApiClient
from prisoner_contact_registry.common.constants.restriction_type import (
    RestrictionScope,
)
from prisoner_contact_registry.contacts.types import Address, AddressUsage, Telephone
from prisoner_contact_registry.exceptions import (
    PersonNotFoundError,
    PrisonerNotFoundError,
)
from prisoner_contact_registry.tests.contact_registry_helpers import (
    PRISON_API_URL,
    PRISONER_ID,
    prison_api_address,
    prison_api_contact,
    prison_api_restriction,
)

CONTACTS_URL = f"{PRISON_API_URL}/api/offenders/{PRISONER_ID}/contacts"


class PrisonApiClientTest(TestCase):
    """Tests for PrisonApiClient"""

    def setUp(self) -> None:
        self.auth_client = MagicMock()
        self.auth_client.get_access_token.return_value = "token"
        self.client = PrisonApiClient(
            PRISON_API_URL, timeout=5, auth_client=self.auth_client, max_attempts=2
        )

    @responses.activate
    def test_get_offender_contacts(self) -> None:
        responses.add(
            responses.GET,
            CONTACTS_URL,
            json={
                "offenderContacts": [
                    prison_api_contact(
                        1,
                        restrictions=[
                            prison_api_restriction(
                                "CLOSED",
                                global_restriction=True,
                                restriction_id=7,
                            ),
                            prison_api_restriction(
                                "BAN", expiry_date="2024-05-10", restriction_id=8
                            ),
                        ],
                    ),
                    prison_api_contact(None, first_name="Jane", contact_type="O"),
                ]
            },
            match=[
                matchers.header_matcher({"Authorization": "Bearer token"}),
                matchers.query_param_matcher({}),
            ],
        )

        contacts = self.client.get_offender_contacts(PRISONER_ID, False)

        self.assertEqual([1, None], [c.contact_id for c in contacts])
        first = contacts[0]
        self.assertEqual("John", first.first_name)
        self.assertEqual(datetime.date(1980, 1, 28), first.date_of_birth)
        self.assertTrue(first.approved_visitor)
        # Local restrictions come before global ones
        self.assertEqual([8, 7], [r.restriction_id for r in first.restrictions])
        self.assertEqual(datetime.date(2024, 5, 10), first.restrictions[0].expiry_date)
        self.assertEqual(RestrictionScope.GLOBAL, first.restrictions[1].scope)
        self.assertIsNone(first.restrictions[1].expiry_date)
        self.assertEqual("O", contacts[1].contact_type)

    @responses.activate
    def test_get_offender_contacts_skips_incomplete_restrictions(self) -> None:
        responses.add(
            responses.GET,
            CONTACTS_URL,
            json={
                "offenderContacts": [
                    prison_api_contact(
                        1,
                        restrictions=[
                            {
                                **prison_api_restriction("CCTV", restriction_id=2),
                                "startDate": None,
                            },
                            {
                                **prison_api_restriction("BAN", restriction_id=3),
                                "restrictionType": None,
                            },
                            prison_api_restriction("CLOSED", restriction_id=4),
                        ],
                    )
                ]
            },
        )

        with self.assertLogs(level="WARNING") as logs:
            contacts = self.client.get_offender_contacts(PRISONER_ID, False)

        self.assertEqual([4], [r.restriction_id for r in contacts[0].restrictions])
        self.assertEqual(["CLOSED"], [r.type_code for r in contacts[0].restrictions])
        self.assertEqual(2, len(logs.records))
        self.assertIn("Skipping restriction 2 for person 1", logs.output[0])

    @responses.activate
    def test_get_offender_contacts_approved_only(self) -> None:
        responses.add(
            responses.GET,
            CONTACTS_URL,
            json={"offenderContacts": []},
            match=[matchers.query_param_matcher({"approvedVisitorsOnly": "true"})],
        )

        self.assertEqual([], self.client.get_offender_contacts(PRISONER_ID, True))

    @responses.activate
    def test_get_offender_contacts_not_found(self) -> None:
        responses.add(responses.GET, CONTACTS_URL, status=404, json={})

        with self.assertRaises(PrisonerNotFoundError) as e:
            self.client.get_offender_contacts(PRISONER_ID, False)

        self.assertEqual(
            f"Contacts not found for - {PRISONER_ID} on prison-api",
            e.exception.description,
        )
        self.assertEqual(1, len(responses.calls))

    @responses.activate
    def test_get_offender_contacts_bad_request_not_retried(self) -> None:
        responses.add(responses.GET, CONTACTS_URL, status=400, json={})

        with self.assertRaises(requests.HTTPError):
            self.client.get_offender_contacts(PRISONER_ID, False)

        self.assertEqual(1, len(responses.calls))

    @responses.activate
    def test_get_offender_contacts_retries_server_errors(self) -> None:
        responses.add(responses.GET, CONTACTS_URL, status=503, json={})
        responses.add(
            responses.GET,
            CONTACTS_URL,
            json={"offenderContacts": [prison_api_contact(1)]},
        )

        contacts = self.client.get_offender_contacts(PRISONER_ID, False)

        self.assertEqual([1], [c.contact_id for c in contacts])
        self.assertEqual(2, len(responses.calls))

    @responses.activate
    def test_get_offender_contacts_gives_up_after_max_attempts(self) -> None:
        responses.add(responses.GET, CONTACTS_URL, status=500, json={})

        with self.assertRaises(requests.HTTPError) as e:
            self.client.get_offender_contacts(PRISONER_ID, False)

        self.assertEqual(500, e.exception.response.status_code)
        self.assertEqual(2, len(responses.calls))

    @responses.activate
    def test_get_person_addresses(self) -> None:
        responses.add(
            responses.GET,
            f"{PRISON_API_URL}/api/persons/1/addresses",
            json=[prison_api_address()],
        )

        self.assertEqual(
            [
                Address(
                    address_type="HOME",
                    flat="3B",
                    premise="Liverpool Prison",
                    street="Slinn Street",
                    town="Liverpool",
                    postal_code="LI1 5TH",
                    country="ENG",
                    primary=True,
                    no_fixed_address=False,
                    start_date=datetime.date(2000, 10, 31),
                    phones=[Telephone(number="0114 2345678", type="TEL", ext="123")],
                    address_usages=[
                        AddressUsage(
                            address_usage="HDC",
                            address_usage_description="HDC Address",
                            active_flag=True,
                        )
                    ],
                )
            ],
            self.client.get_person_addresses(1),
        )

    @responses.activate
    def test_get_person_addresses_not_found(self) -> None:
        responses.add(
            responses.GET, f"{PRISON_API_URL}/api/persons/2/addresses", status=404
        )

        with self.assertRaises(PersonNotFoundError) as e:
            self.client.get_person_addresses(2)

        self.assertEqual(
            "Addresses not found for - 2 on prison-api", e.exception.description
        )
