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
"""Tests for config.py"""
from unittest import TestCase

from prisoner_contact_registry.config import (
    DEFAULT_API_TIMEOUT_SECONDS,
    DEFAULT_PRISON_API_TIMEOUT_SECONDS,
    ContactRegistryConfig,
    ContactSource,
    HmppsAuthConfig,
)


class ContactRegistryConfigTest(TestCase):
    """Tests for ContactRegistryConfig.from_env"""

    def test_defaults(self) -> None:
        config = ContactRegistryConfig.from_env({"PRISON_API_URL": "http://prison"})

        self.assertEqual(
            ContactRegistryConfig(
                prison_api_url="http://prison",
                contact_source=ContactSource.PRISON_API,
                api_timeout_seconds=DEFAULT_API_TIMEOUT_SECONDS,
                prison_api_timeout_seconds=DEFAULT_PRISON_API_TIMEOUT_SECONDS,
            ),
            config,
        )
        self.assertIsNone(config.hmpps_auth)
        self.assertIsNone(config.sentry_dsn)

    def test_all_values(self) -> None:
        config = ContactRegistryConfig.from_env(
            {
                "PRISON_API_URL": "http://prison",
                "PERSONAL_RELATIONSHIPS_API_URL": "http://relationships",
                "CONTACT_SOURCE": "personal-relationships-api",
                "API_TIMEOUT_SECONDS": "5",
                "PRISON_API_TIMEOUT_SECONDS": "30.5",
                "ADDRESS_LOOKUP_MAX_WORKERS": "4",
                "HMPPS_AUTH_URL": "http://auth",
                "HMPPS_AUTH_CLIENT_ID": "client",
                "HMPPS_AUTH_CLIENT_SECRET": "secret",
                "SENTRY_DSN": "https://key@sentry.test/1",
            }
        )

        self.assertEqual(ContactSource.PERSONAL_RELATIONSHIPS_API, config.contact_source)
        self.assertEqual("http://relationships", config.personal_relationships_api_url)
        self.assertEqual(5.0, config.api_timeout_seconds)
        self.assertEqual(30.5, config.prison_api_timeout_seconds)
        self.assertEqual(4, config.address_lookup_max_workers)
        self.assertEqual(
            HmppsAuthConfig(url="http://auth", client_id="client", client_secret="secret"),
            config.hmpps_auth,
        )
        self.assertEqual("https://key@sentry.test/1", config.sentry_dsn)
        self.assertNotIn("secret", repr(config))

    def test_missing_prison_api_url(self) -> None:
        with self.assertRaisesRegex(ValueError, "PRISON_API_URL"):
            ContactRegistryConfig.from_env({})

    def test_unknown_contact_source(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unknown CONTACT_SOURCE"):
            ContactRegistryConfig.from_env(
                {"PRISON_API_URL": "http://prison", "CONTACT_SOURCE": "nomis"}
            )

    def test_personal_relationships_source_requires_url(self) -> None:
        with self.assertRaisesRegex(ValueError, "PERSONAL_RELATIONSHIPS_API_URL"):
            ContactRegistryConfig.from_env(
                {
                    "PRISON_API_URL": "http://prison",
                    "CONTACT_SOURCE": "personal-relationships-api",
                }
            )

    def test_partial_auth_config(self) -> None:
        with self.assertRaisesRegex(ValueError, "HMPPS_AUTH_CLIENT_SECRET"):
            ContactRegistryConfig.from_env(
                {
                    "PRISON_API_URL": "http://prison",
                    "HMPPS_AUTH_URL": "http://auth",
                    "HMPPS_AUTH_CLIENT_ID": "client",
                }
            )

    def test_malformed_timeout(self) -> None:
        with self.assertRaisesRegex(ValueError, "API_TIMEOUT_SECONDS"):
            ContactRegistryConfig.from_env(
                {"PRISON_API_URL": "http://prison", "API_TIMEOUT_SECONDS": "soon"}
            )

    def test_address_lookup_workers_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            ContactRegistryConfig.from_env(
                {"PRISON_API_URL": "http://prison", "ADDRESS_LOOKUP_MAX_WORKERS": "0"}
            )
