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
"""Evaluates visitors' restrictions against a requested booking window.

All functions here are pure: they take contacts that have already been fetched
and matched, and never call an upstream.
"""
import datetime
import logging
from typing import AbstractSet, List

from prisoner_contact_registry.common.constants.restriction_type import (
    RestrictionType,
)
from prisoner_contact_registry.common.date import DateRange
from prisoner_contact_registry.contacts.types import Contact
from prisoner_contact_registry.exceptions import DateRangeNotFoundError
from prisoner_contact_registry.restrictions.restriction_classifier import (
    all_restrictions,
    is_active,
    restrictions_of_type,
)


def resolve_banned_window(contacts: List[Contact], window: DateRange) -> DateRange:
    """Narrows |window| so that it starts once every BAN restriction on the
    contacts has expired.

    Raises DateRangeNotFoundError if any BAN is open-ended, or expires on or after
    the last day of the window. A BAN expiring on the first day of the window,
    or earlier, leaves the window unchanged.
    """
    result = window
    for contact in contacts:
        for ban in restrictions_of_type(contact, RestrictionType.BANNED.value):
            if ban.expiry_date is None:
                raise DateRangeNotFoundError(
                    "found visitor with restriction of type BAN with no expiry date, "
                    "no date range possible"
                )
            if ban.expiry_date >= result.to_date:
                raise DateRangeNotFoundError(
                    "found visitor with restriction of type BAN with expiry date after "
                    "our endDate, no date range possible"
                )
            if ban.expiry_date > result.from_date:
                result = result.with_from_date(ban.expiry_date)
    return result


def has_active_restriction_of_type(
    contacts: List[Contact], type_code: str, as_of: datetime.date
) -> bool:
    return any(
        is_active(r, as_of)
        for contact in contacts
        for r in restrictions_of_type(contact, type_code)
    )


def resolve_affected_windows(
    contacts: List[Contact],
    supported_codes: AbstractSet[str],
    query_window: DateRange,
) -> List[DateRange]:
    """Returns one DateRange per restriction whose type code is in
    |supported_codes|.

    A restriction with an expiry date covers [start_date, expiry_date] as-is, even
    when it starts before |query_window|. An open-ended restriction covers
    [max(start_date, query_window.from_date), query_window.to_date], and is left
    out when it only starts after |query_window| ends.

    Ranges are returned in restriction order (contact by contact, local then
    global) and are never merged, sorted or deduplicated.
    """
    windows: List[DateRange] = []
    for restriction in all_restrictions(contacts):
        if restriction.type_code not in supported_codes:
            continue
        if restriction.expiry_date is not None:
            windows.append(DateRange(restriction.start_date, restriction.expiry_date))
        elif restriction.start_date <= query_window.to_date:
            windows.append(
                DateRange(
                    max(restriction.start_date, query_window.from_date),
                    query_window.to_date,
                )
            )
    logging.debug(
        "Found %s date ranges affected by restrictions %s", len(windows), supported_codes
    )
    return windows
