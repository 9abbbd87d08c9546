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
"""Shared request plumbing for the upstream HMPPS APIs."""
import datetime
import logging
from functools import cached_property
from http import HTTPStatus
from typing import Any, Dict, Optional

import cattrs
import requests
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from prisoner_contact_registry.client.hmpps_auth_client import HmppsAuthClient

DEFAULT_MAX_ATTEMPTS = 3

# Structures upstream JSON bodies into the payload classes of each client
payload_converter = cattrs.Converter()
payload_converter.register_structure_hook(
    datetime.date, lambda serialized, _: datetime.date.fromisoformat(serialized)
)


def is_not_found_error(e: BaseException) -> bool:
    return (
        isinstance(e, requests.HTTPError)
        and e.response is not None
        and e.response.status_code == HTTPStatus.NOT_FOUND
    )


def transient_error_retry_predicate(e: BaseException) -> bool:
    """Retries connection problems and upstream 5xx responses. Client errors are
    never retried."""
    if isinstance(e, (requests.ConnectionError, requests.Timeout)):
        return True
    return (
        isinstance(e, requests.HTTPError)
        and e.response is not None
        and e.response.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR
    )


class UpstreamApiClient:
    """Base client for a single upstream API. Sends JSON requests with a system
    bearer token and raises requests.HTTPError for any non-2xx response."""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        auth_client: Optional[HmppsAuthClient] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._auth_client = auth_client
        self._retrying = Retrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(multiplier=0.5, max=4),
            retry=retry_if_exception(transient_error_retry_predicate),
            reraise=True,
        )

    @cached_property
    def _session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )
        return session

    def _auth_header(self) -> Dict[str, str]:
        if not self._auth_client:
            return {}
        return {"Authorization": f"Bearer {self._auth_client.get_access_token()}"}

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        response = self._session.request(
            method,
            url,
            params=params,
            json=json,
            headers=self._auth_header(),
            timeout=self._timeout,
        )
        try:
            response.raise_for_status()
        except requests.HTTPError:
            logging.error(
                "%s request to [%s] failed with status %s", method, url, response.status_code
            )
            raise
        return response.json()

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._retrying(self._send, "GET", path, params=params)

    def post(self, path: str, json: Any) -> Any:
        # Restriction lookups are read-only, so the POST is as safe to retry as a GET
        return self._retrying(self._send, "POST", path, json=json)
