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
"""Contains the list of custom exceptions used by the Prisoner Contact Registry."""
from http import HTTPStatus

from prisoner_contact_registry.utils.flask_exception import FlaskException


class PrisonerNotFoundError(FlaskException):
    """Exception for when an upstream contact source does not know the prisoner."""

    def __init__(self, description: str) -> None:
        super().__init__(
            "prisoner_not_found",
            description,
            HTTPStatus.NOT_FOUND,
            user_message=f"Prisoner not found: {description}",
        )


class PersonNotFoundError(FlaskException):
    """Exception for when the person record behind a contact cannot be found."""

    def __init__(self, description: str) -> None:
        super().__init__(
            "person_not_found",
            description,
            HTTPStatus.NOT_FOUND,
            user_message=f"Person not found: {description}",
        )


class VisitorNotFoundError(FlaskException):
    """Exception for when one or more of the requested visitors is not a contact of
    the prisoner."""

    def __init__(self, description: str) -> None:
        super().__init__(
            "visitor_not_found",
            description,
            HTTPStatus.NOT_FOUND,
            user_message="One of the visitors provided could not found",
        )


class DateRangeNotFoundError(FlaskException):
    """Exception for when a BAN restriction leaves no part of the requested window
    available."""

    def __init__(self, description: str) -> None:
        super().__init__(
            "date_range_not_found",
            description,
            HTTPStatus.NOT_FOUND,
            user_message="One of the visitors provided has a BAN restriction, no suitable date range found",
        )


class ContactRegistryBadRequestError(FlaskException):
    """Exception for when the incoming request is improper in some way."""

    def __init__(self, description: str) -> None:
        super().__init__(
            "bad_request",
            description,
            HTTPStatus.BAD_REQUEST,
            user_message=f"Validation failure: {description}",
        )
