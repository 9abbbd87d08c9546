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
"""Matches caller-supplied visitor ids against a prisoner's contacts."""
from typing import List, Sequence

from prisoner_contact_registry.contacts.types import Contact
from prisoner_contact_registry.exceptions import VisitorNotFoundError


def match_visitors(
    prisoner_id: str, contacts: List[Contact], visitor_ids: Sequence[int]
) -> List[Contact]:
    """Returns the contacts whose contact_id is one of |visitor_ids|, in contact
    order.

    Repeated ids count once. Raises VisitorNotFoundError when any requested id has
    no matching contact; the message carries |visitor_ids| exactly as given.
    """
    requested_ids = set(visitor_ids)
    matched = [c for c in contacts if c.contact_id in requested_ids]
    matched_ids = {c.contact_id for c in matched}
    if len(matched_ids) < len(requested_ids):
        raise VisitorNotFoundError(
            f"Not all visitors provided ({list(visitor_ids)}) are listed contacts for prisoner {prisoner_id}"
        )
    return matched


def match_visitor(prisoner_id: str, contacts: List[Contact], visitor_id: int) -> List[Contact]:
    """Like match_visitors, for a single visitor. A person with several
    relationships to the prisoner yields one Contact per relationship."""
    matched = [c for c in contacts if c.contact_id == visitor_id]
    if not matched:
        raise VisitorNotFoundError(
            f"visitor provided ({visitor_id}) is not listed contact for prisoner {prisoner_id}"
        )
    return matched
