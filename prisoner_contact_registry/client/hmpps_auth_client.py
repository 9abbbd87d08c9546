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
"""Fetches system access tokens from HMPPS Auth using the OAuth2 client
credentials flow."""
import datetime
import logging
import threading
from typing import Callable, Optional

import requests

from prisoner_contact_registry.config import HmppsAuthConfig

TOKEN_REQUEST_TIMEOUT = 15.0

# Tokens are refreshed this long before HMPPS Auth says they expire
TOKEN_EXPIRY_BUFFER = datetime.timedelta(seconds=60)


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(tz=datetime.timezone.utc)


class HmppsAuthClient:
    """Hands out a cached bearer token for calls to the upstream APIs."""

    def __init__(
        self,
        config: HmppsAuthConfig,
        now_fn: Callable[[], datetime.datetime] = utc_now,
    ) -> None:
        self._config = config
        self._now_fn = now_fn
        self._lock = threading.Lock()
        self._access_token: Optional[str] = None
        self._expires_at: Optional[datetime.datetime] = None

    @property
    def token_url(self) -> str:
        return f"{self._config.url.rstrip('/')}/oauth/token"

    def fetch_new_access_token(self) -> str:
        """Makes a request to HMPPS Auth for an access token using the client
        credentials authorization flow."""
        response = requests.post(
            self.token_url,
            params={"grant_type": "client_credentials"},
            auth=(self._config.client_id, self._config.client_secret),
            timeout=TOKEN_REQUEST_TIMEOUT,
        )
        try:
            response.raise_for_status()
        except requests.HTTPError:
            logging.error(
                "Failed to fetch a client credentials token from [%s]: %s",
                self.token_url,
                response.status_code,
            )
            raise

        body = response.json()
        self._access_token = body["access_token"]
        self._expires_at = (
            self._now_fn()
            + datetime.timedelta(seconds=int(body.get("expires_in", 0)))
            - TOKEN_EXPIRY_BUFFER
        )
        return self._access_token

    def get_access_token(self) -> str:
        with self._lock:
            if (
                self._access_token is None
                or self._expires_at is None
                or self._now_fn() >= self._expires_at
            ):
                logging.info("Fetching new HMPPS Auth system token")
                return self.fetch_new_access_token()
            return self._access_token
