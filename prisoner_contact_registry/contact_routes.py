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
"""Implements the HTTP routes of the Prisoner Contact Registry."""
from http import HTTPStatus
from typing import Tuple

from flask import Blueprint, Response, g, jsonify

from prisoner_contact_registry.api_schemas import (
    ApprovedSocialContactsQuerySchema,
    BannedDateRangeQuerySchema,
    ContactListQuerySchema,
    ContactSchema,
    DateRangeResponseSchema,
    HasClosedRestrictionSchema,
    RequestVisitVisitorRestrictionsSchema,
    SocialContactsQuerySchema,
    SocialContactsV2QuerySchema,
    VisitorActiveRestrictionsSchema,
    VisitorsQuerySchema,
)
from prisoner_contact_registry.api_schemas_utils import (
    requires_api_schema,
    requires_query_schema,
)
from prisoner_contact_registry.common.date import DateRange
from prisoner_contact_registry.contact_registry_service import ContactRegistryService

PRISONER_PATH = "/prisoners/<prisoner_id>"

health_blueprint = Blueprint("health", __name__)


@health_blueprint.route("/health/ping")
def _ping() -> Tuple[Response, HTTPStatus]:
    return jsonify({"status": "UP"}), HTTPStatus.OK


def _banned_date_range_response(
    service: ContactRegistryService, prisoner_id: str
) -> Response:
    query = g.query_data
    date_range = service.get_banned_window(
        prisoner_id,
        query["visitors"],
        DateRange(query["from_date"], query["to_date"]),
    )
    return jsonify(DateRangeResponseSchema().dump(date_range))


def _closed_restriction_response(
    service: ContactRegistryService, prisoner_id: str
) -> Response:
    has_closed = service.get_closed_restriction_status(
        prisoner_id, g.query_data["visitors"]
    )
    return jsonify(HasClosedRestrictionSchema().dump({"value": has_closed}))


def create_contacts_blueprint(service: ContactRegistryService) -> Blueprint:
    """Creates the Blueprint for the original (v1) contact endpoints."""
    contacts_v1 = Blueprint("contacts_v1", __name__)

    @contacts_v1.route(f"{PRISONER_PATH}/contacts")
    @requires_query_schema(ContactListQuerySchema)
    def _get_contact_list(prisoner_id: str) -> Response:
        query = g.query_data
        contacts = service.get_contact_list(
            prisoner_id,
            contact_type=query.get("type"),
            contact_id=query.get("id"),
            with_address=query["with_address"],
        )
        return jsonify(ContactSchema(many=True).dump(contacts))

    @contacts_v1.route(f"{PRISONER_PATH}/contacts/social")
    @requires_query_schema(SocialContactsQuerySchema)
    def _get_social_contacts(prisoner_id: str) -> Response:
        query = g.query_data
        contacts = service.get_social_contacts(
            prisoner_id,
            contact_id=query.get("id"),
            has_date_of_birth=query["has_date_of_birth"],
            not_banned_before_date=query.get("not_banned_before_date"),
            with_address=query["with_address"],
            approved_visitors_only=query["approved_visitors_only"],
        )
        return jsonify(ContactSchema(many=True).dump(contacts))

    @contacts_v1.route(f"{PRISONER_PATH}/approved/social/contacts")
    @requires_query_schema(ApprovedSocialContactsQuerySchema)
    def _get_approved_social_contacts(prisoner_id: str) -> Response:
        query = g.query_data
        contacts = service.get_approved_social_contacts(
            prisoner_id,
            contact_id=query.get("id"),
            has_date_of_birth=query["has_date_of_birth"],
            not_banned_before_date=query.get("not_banned_before_date"),
            with_address=query["with_address"],
        )
        return jsonify(ContactSchema(many=True).dump(contacts))

    @contacts_v1.route(
        f"{PRISONER_PATH}/approved/social/contacts/restrictions/banned/dateRange"
    )
    @requires_query_schema(BannedDateRangeQuerySchema)
    def _get_banned_date_range(prisoner_id: str) -> Response:
        return _banned_date_range_response(service, prisoner_id)

    @contacts_v1.route(f"{PRISONER_PATH}/approved/social/contacts/restrictions/closed")
    @requires_query_schema(VisitorsQuerySchema)
    def _get_closed_restriction_status(prisoner_id: str) -> Response:
        return _closed_restriction_response(service, prisoner_id)

    @contacts_v1.route(
        f"{PRISONER_PATH}/contacts/social/approved/<int:visitor_id>/restrictions/active"
    )
    def _get_visitor_active_restrictions(prisoner_id: str, visitor_id: int) -> Response:
        active_restrictions = service.get_active_restrictions(prisoner_id, visitor_id)
        return jsonify(
            VisitorActiveRestrictionsSchema().dump(
                {"active_restrictions": active_restrictions}
            )
        )

    return contacts_v1


def create_contacts_v2_blueprint(service: ContactRegistryService) -> Blueprint:
    """Creates the Blueprint for the v2 contact endpoints. Register it under the
    /v2 prefix."""
    contacts_v2 = Blueprint("contacts_v2", __name__)

    @contacts_v2.route(f"{PRISONER_PATH}/contacts/social")
    @requires_query_schema(SocialContactsV2QuerySchema)
    def _get_social_contacts(prisoner_id: str) -> Response:
        query = g.query_data
        contacts = service.get_social_contacts(
            prisoner_id,
            has_date_of_birth=query["has_date_of_birth"],
            with_address=query["with_address"],
            approved_visitors_only=False,
        )
        return jsonify(ContactSchema(many=True).dump(contacts))

    @contacts_v2.route(f"{PRISONER_PATH}/contacts/social/approved")
    @requires_query_schema(SocialContactsV2QuerySchema)
    def _get_approved_social_contacts(prisoner_id: str) -> Response:
        query = g.query_data
        contacts = service.get_approved_social_contacts(
            prisoner_id,
            has_date_of_birth=query["has_date_of_birth"],
            with_address=query["with_address"],
        )
        return jsonify(ContactSchema(many=True).dump(contacts))

    @contacts_v2.route(
        f"{PRISONER_PATH}/contacts/social/approved/restrictions/banned/dateRange"
    )
    @requires_query_schema(BannedDateRangeQuerySchema)
    def _get_banned_date_range(prisoner_id: str) -> Response:
        return _banned_date_range_response(service, prisoner_id)

    @contacts_v2.route(f"{PRISONER_PATH}/contacts/social/approved/restrictions/closed")
    @requires_query_schema(VisitorsQuerySchema)
    def _get_closed_restriction_status(prisoner_id: str) -> Response:
        return _closed_restriction_response(service, prisoner_id)

    @contacts_v2.route(
        f"{PRISONER_PATH}/contacts/social/approved/restrictions/visit-request/date-ranges",
        methods=["POST"],
    )
    @requires_api_schema(RequestVisitVisitorRestrictionsSchema)
    def _get_request_visit_date_ranges(
        prisoner_id: str,  # pylint: disable=unused-argument
    ) -> Response:
        body = g.api_data
        current_date_range = body["current_date_range"]
        # The body names the prisoner, the path only scopes the route
        date_ranges = service.get_request_visit_windows(
            body["prisoner_id"],
            body["visitor_ids"],
            set(body["supported_visitor_restrictions_codes_for_request_visits"]),
            DateRange(current_date_range["from_date"], current_date_range["to_date"]),
        )
        return jsonify(DateRangeResponseSchema(many=True).dump(date_ranges))

    return contacts_v2
