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
"""Tests for contact_registry_service.py"""
import datetime
from unittest import TestCase
from unittest.mock import call, create_autospec

from freezegun import freeze_time

from prisoner_contact_registry.common.constants.restriction_type import (
    RestrictionScope,
)
from prisoner_contact_registry.common.date import DateRange
from prisoner_contact_registry.contact_registry_service import ContactRegistryService
from prisoner_contact_registry.contacts.contact_repository import ContactRepository
from prisoner_contact_registry.contacts.types import Address
from prisoner_contact_registry.exceptions import (
    DateRangeNotFoundError,
    VisitorNotFoundError,
)
from prisoner_contact_registry.tests.contact_registry_helpers import (
    PRISONER_ID,
    build_contact,
    build_restriction,
)


class ContactRegistryServiceTest(TestCase):
    """Tests for ContactRegistryService"""

    def setUp(self) -> None:
        self.repository = create_autospec(ContactRepository, instance=True)
        self.repository.fetch_addresses.side_effect = lambda contact_id: [
            Address(town=f"Town {contact_id}")
        ]
        self.service = ContactRegistryService(self.repository)

    def test_get_contact_list(self) -> None:
        self.repository.fetch_contacts.return_value = [
            build_contact(2, last_name="Zulu", contact_type="O"),
            build_contact(1, last_name="Alpha"),
        ]

        contacts = self.service.get_contact_list(PRISONER_ID)

        # Upstream order is kept
        self.assertEqual([2, 1], [c.contact_id for c in contacts])
        self.assertEqual(
            [[Address(town="Town 2")], [Address(town="Town 1")]],
            [c.addresses for c in contacts],
        )
        self.repository.fetch_contacts.assert_called_once_with(PRISONER_ID, False)

    def test_get_contact_list_filtered_without_address(self) -> None:
        self.repository.fetch_contacts.return_value = [
            build_contact(2, contact_type="O"),
            build_contact(1),
            build_contact(3),
        ]

        contacts = self.service.get_contact_list(
            PRISONER_ID, contact_type="S", contact_id=3, with_address=False
        )

        self.assertEqual([3], [c.contact_id for c in contacts])
        self.assertEqual([], contacts[0].addresses)
        self.repository.fetch_addresses.assert_not_called()

    def test_get_social_contacts_sorted(self) -> None:
        self.repository.fetch_contacts.return_value = [
            build_contact(1, first_name="Bob", last_name="Young"),
            build_contact(2, contact_type="O", last_name="Aaron"),
            build_contact(3, first_name="Amy", last_name="Young"),
            build_contact(4, last_name="Brown", date_of_birth=None),
        ]

        contacts = self.service.get_social_contacts(
            PRISONER_ID, has_date_of_birth=True, approved_visitors_only=True
        )

        self.assertEqual([3, 1], [c.contact_id for c in contacts])
        self.repository.fetch_contacts.assert_called_once_with(PRISONER_ID, True)
        # Addresses are only looked up for contacts that survive filtering
        self.assertEqual(
            [call(1), call(3)],
            self.repository.fetch_addresses.call_args_list,
        )

    def test_get_social_contacts_not_banned_before_date(self) -> None:
        self.repository.fetch_contacts.return_value = [
            build_contact(1, [build_restriction("BAN", expiry_date=None)]),
            build_contact(
                2, [build_restriction("BAN", expiry_date=datetime.date(2024, 5, 1))]
            ),
        ]

        contacts = self.service.get_approved_social_contacts(
            PRISONER_ID,
            not_banned_before_date=datetime.date(2024, 5, 2),
            with_address=False,
        )

        self.assertEqual([2], [c.contact_id for c in contacts])
        self.repository.fetch_contacts.assert_called_once_with(PRISONER_ID, True)

    def test_get_banned_window(self) -> None:
        self.repository.fetch_contacts.return_value = [
            build_contact(
                1, [build_restriction("BAN", expiry_date=datetime.date(2024, 5, 4))]
            ),
            build_contact(
                2, [build_restriction("BAN", expiry_date=datetime.date(2024, 5, 20))]
            ),
        ]

        window = DateRange(datetime.date(2024, 5, 1), datetime.date(2024, 5, 10))
        self.assertEqual(
            DateRange(datetime.date(2024, 5, 4), datetime.date(2024, 5, 10)),
            self.service.get_banned_window(PRISONER_ID, [1], window),
        )
        self.repository.fetch_contacts.assert_called_once_with(
            PRISONER_ID, approved_only=True
        )

        with self.assertRaises(DateRangeNotFoundError):
            self.service.get_banned_window(PRISONER_ID, [1, 2], window)

    def test_get_banned_window_unknown_visitor(self) -> None:
        self.repository.fetch_contacts.return_value = [build_contact(1)]

        with self.assertRaises(VisitorNotFoundError):
            self.service.get_banned_window(
                PRISONER_ID,
                [1, 2],
                DateRange(datetime.date(2024, 5, 1), datetime.date(2024, 5, 10)),
            )

    @freeze_time("2024-05-05 10:00:00")
    def test_get_closed_restriction_status(self) -> None:
        self.repository.fetch_contacts.return_value = [
            build_contact(
                1,
                [build_restriction("CLOSED", expiry_date=datetime.date(2024, 5, 5))],
            ),
            build_contact(
                2,
                [build_restriction("CLOSED", expiry_date=datetime.date(2024, 5, 4))],
            ),
        ]

        self.assertTrue(self.service.get_closed_restriction_status(PRISONER_ID, [1]))
        self.assertFalse(self.service.get_closed_restriction_status(PRISONER_ID, [2]))
        self.assertTrue(
            self.service.get_closed_restriction_status(
                PRISONER_ID, [2], as_of=datetime.date(2024, 5, 1)
            )
        )

    def test_get_request_visit_windows(self) -> None:
        self.repository.fetch_contacts.return_value = [
            build_contact(
                1,
                [
                    build_restriction("PREINF", expiry_date=None),
                    build_restriction("BAN", expiry_date=None),
                ],
            ),
            build_contact(
                2,
                [
                    build_restriction(
                        "RESTRICTED",
                        start_date=datetime.date(2024, 5, 3),
                        expiry_date=datetime.date(2024, 5, 6),
                    )
                ],
            ),
        ]

        window = DateRange(datetime.date(2024, 5, 1), datetime.date(2024, 5, 28))
        self.assertEqual(
            [
                window,
                DateRange(datetime.date(2024, 5, 3), datetime.date(2024, 5, 6)),
            ],
            self.service.get_request_visit_windows(
                PRISONER_ID, [1, 2], {"PREINF", "RESTRICTED"}, window
            ),
        )

    @freeze_time("2024-05-05 10:00:00")
    def test_get_active_restrictions(self) -> None:
        self.repository.fetch_contacts.return_value = [
            build_contact(
                1,
                [
                    build_restriction("CLOSED", expiry_date=None),
                    build_restriction("BAN", expiry_date=datetime.date(2024, 5, 1)),
                    build_restriction(
                        "PREINF", expiry_date=None, scope=RestrictionScope.GLOBAL
                    ),
                ],
                relationship_id=10,
            ),
            build_contact(
                1,
                [
                    build_restriction("CLOSED", expiry_date=None),
                    build_restriction("RESTRICTED", expiry_date=None),
                ],
                relationship_id=11,
            ),
            build_contact(2, [build_restriction("BAN", expiry_date=None)]),
        ]

        self.assertEqual(
            ["CLOSED", "PREINF", "RESTRICTED"],
            self.service.get_active_restrictions(PRISONER_ID, 1),
        )
        self.assertEqual(
            ["CLOSED", "BAN", "PREINF", "RESTRICTED"],
            self.service.get_active_restrictions(
                PRISONER_ID, 1, as_of=datetime.date(2024, 4, 1)
            ),
        )

    def test_get_active_restrictions_unknown_visitor(self) -> None:
        self.repository.fetch_contacts.return_value = [build_contact(1)]

        with self.assertRaises(VisitorNotFoundError):
            self.service.get_active_restrictions(PRISONER_ID, 2)
