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
"""Environment-driven configuration for the Prisoner Contact Registry."""
import os
from enum import Enum
from typing import Mapping, Optional

import attr

DEFAULT_API_TIMEOUT_SECONDS = 10.0
DEFAULT_PRISON_API_TIMEOUT_SECONDS = 60.0


class ContactSource(Enum):
    """The upstream system that contacts and their restrictions are read from."""

    # Legacy source, restrictions are returned inline with each contact
    PRISON_API = "prison-api"
    # Newer source, restrictions are fetched with a second batched call
    PERSONAL_RELATIONSHIPS_API = "personal-relationships-api"


def _required(env: Mapping[str, str], key: str) -> str:
    value = env.get(key)
    if not value:
        raise ValueError(f"Missing required configuration value {key}")
    return value


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    value = env.get(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"Expected a number for {key}, found [{value}]") from e


@attr.s(frozen=True, kw_only=True)
class HmppsAuthConfig:
    url: str = attr.ib()
    client_id: str = attr.ib()
    client_secret: str = attr.ib(repr=False)


@attr.s(frozen=True, kw_only=True)
class ContactRegistryConfig:
    """All of the values needed to talk to the upstream APIs."""

    prison_api_url: str = attr.ib()
    personal_relationships_api_url: Optional[str] = attr.ib(default=None)
    contact_source: ContactSource = attr.ib(default=ContactSource.PRISON_API)
    api_timeout_seconds: float = attr.ib(default=DEFAULT_API_TIMEOUT_SECONDS)
    prison_api_timeout_seconds: float = attr.ib(
        default=DEFAULT_PRISON_API_TIMEOUT_SECONDS
    )
    address_lookup_max_workers: int = attr.ib(default=1)
    hmpps_auth: Optional[HmppsAuthConfig] = attr.ib(default=None)
    sentry_dsn: Optional[str] = attr.ib(default=None)

    def __attrs_post_init__(self) -> None:
        if (
            self.contact_source == ContactSource.PERSONAL_RELATIONSHIPS_API
            and not self.personal_relationships_api_url
        ):
            raise ValueError(
                "Missing required configuration value PERSONAL_RELATIONSHIPS_API_URL"
            )
        if self.address_lookup_max_workers < 1:
            raise ValueError("ADDRESS_LOOKUP_MAX_WORKERS must be at least 1")

    @classmethod
    def from_env(
        cls, env: Optional[Mapping[str, str]] = None
    ) -> "ContactRegistryConfig":
        """Builds the config from environment variables, raising a ValueError for
        any missing or malformed value."""
        env = os.environ if env is None else env

        contact_source_value = env.get("CONTACT_SOURCE") or ContactSource.PRISON_API.value
        try:
            contact_source = ContactSource(contact_source_value)
        except ValueError as e:
            raise ValueError(
                f"Unknown CONTACT_SOURCE [{contact_source_value}], expected one of "
                f"{[source.value for source in ContactSource]}"
            ) from e

        hmpps_auth = None
        if env.get("HMPPS_AUTH_URL"):
            hmpps_auth = HmppsAuthConfig(
                url=_required(env, "HMPPS_AUTH_URL"),
                client_id=_required(env, "HMPPS_AUTH_CLIENT_ID"),
                client_secret=_required(env, "HMPPS_AUTH_CLIENT_SECRET"),
            )

        return cls(
            prison_api_url=_required(env, "PRISON_API_URL"),
            personal_relationships_api_url=env.get("PERSONAL_RELATIONSHIPS_API_URL"),
            contact_source=contact_source,
            api_timeout_seconds=_float(
                env, "API_TIMEOUT_SECONDS", DEFAULT_API_TIMEOUT_SECONDS
            ),
            prison_api_timeout_seconds=_float(
                env, "PRISON_API_TIMEOUT_SECONDS", DEFAULT_PRISON_API_TIMEOUT_SECONDS
            ),
            address_lookup_max_workers=int(
                _float(env, "ADDRESS_LOOKUP_MAX_WORKERS", 1)
            ),
            hmpps_auth=hmpps_auth,
            sentry_dsn=env.get("SENTRY_DSN") or None,
        )
