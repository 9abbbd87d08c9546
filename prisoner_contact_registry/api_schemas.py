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
"""Marshmallow schemas for the request parameters, request bodies and responses of
the contact registry API."""
from typing import Any, Dict, List

from marshmallow import ValidationError, fields, validate, validates_schema

from prisoner_contact_registry.api_schemas_utils import CamelCaseSchema


def non_blank_string(data: str) -> None:
    if not data or not data.strip():
        raise ValidationError("Field must be non-empty.")


class QueryBoolean(fields.Boolean):
    """Accepts only `true` or `false`, in any case."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(truthy={"true"}, falsy={"false"}, **kwargs)

    def _deserialize(self, value: Any, attr: Any, data: Any, **kwargs: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
        return super()._deserialize(value, attr, data, **kwargs)


class VisitorIdList(fields.Field):
    """A comma-separated list of visitor ids, e.g. `1234,5678`."""

    def _deserialize(
        self, value: Any, attr: Any, data: Any, **kwargs: Any
    ) -> List[int]:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("At least one visitor id is required.")
        try:
            return [int(part.strip()) for part in value.split(",")]
        except ValueError as e:
            raise ValidationError(f"Invalid visitor ids: {value}") from e


def _validate_date_order(data: Dict[str, Any]) -> None:
    if data["from_date"] > data["to_date"]:
        raise ValidationError(
            f"fromDate ({data['from_date']}) must not be after toDate ({data['to_date']})",
            field_name="fromDate",
        )


# Query parameters


class ContactListQuerySchema(CamelCaseSchema):
    type = fields.Str()
    id = fields.Int()
    with_address = QueryBoolean(load_default=True)


class SocialContactsQuerySchema(CamelCaseSchema):
    id = fields.Int()
    has_date_of_birth = QueryBoolean(load_default=False)
    not_banned_before_date = fields.Date()
    with_address = QueryBoolean(load_default=True)
    approved_visitors_only = QueryBoolean(load_default=True)


class ApprovedSocialContactsQuerySchema(CamelCaseSchema):
    id = fields.Int()
    has_date_of_birth = QueryBoolean(load_default=False)
    not_banned_before_date = fields.Date()
    with_address = QueryBoolean(load_default=True)


class SocialContactsV2QuerySchema(CamelCaseSchema):
    has_date_of_birth = QueryBoolean(load_default=False)
    with_address = QueryBoolean(load_default=False)


class VisitorsQuerySchema(CamelCaseSchema):
    visitors = VisitorIdList(required=True)


class BannedDateRangeQuerySchema(VisitorsQuerySchema):
    from_date = fields.Date(required=True)
    to_date = fields.Date(required=True)

    @validates_schema
    def validate_date_order(self, data: Dict[str, Any], **_kwargs: Any) -> None:
        _validate_date_order(data)


# Request bodies


class DateRangeSchema(CamelCaseSchema):
    from_date = fields.Date(required=True)
    to_date = fields.Date(required=True)

    @validates_schema
    def validate_date_order(self, data: Dict[str, Any], **_kwargs: Any) -> None:
        if "from_date" in data and "to_date" in data:
            _validate_date_order(data)


class RequestVisitVisitorRestrictionsSchema(CamelCaseSchema):
    prisoner_id = fields.Str(required=True, validate=non_blank_string)
    visitor_ids = fields.List(
        fields.Int(), required=True, validate=validate.Length(min=1)
    )
    supported_visitor_restrictions_codes_for_request_visits = fields.List(
        fields.Str(), required=True
    )
    current_date_range = fields.Nested(DateRangeSchema, required=True)


# Responses


class RestrictionSchema(CamelCaseSchema):
    restriction_id = fields.Int()
    restriction_type = fields.Str(attribute="type_code")
    restriction_type_description = fields.Str(attribute="type_description")
    start_date = fields.Date()
    expiry_date = fields.Date()
    global_restriction = fields.Function(lambda restriction: restriction.is_global)
    comment = fields.Str()


class TelephoneSchema(CamelCaseSchema):
    number = fields.Str()
    type = fields.Str()
    ext = fields.Str()


class AddressUsageSchema(CamelCaseSchema):
    address_usage = fields.Str()
    address_usage_description = fields.Str()
    active_flag = fields.Bool()


class AddressSchema(CamelCaseSchema):
    address_type = fields.Str()
    flat = fields.Str()
    premise = fields.Str()
    street = fields.Str()
    locality = fields.Str()
    town = fields.Str()
    postal_code = fields.Str()
    county = fields.Str()
    country = fields.Str()
    comment = fields.Str()
    primary = fields.Bool()
    no_fixed_address = fields.Bool()
    start_date = fields.Date()
    end_date = fields.Date()
    phones = fields.List(fields.Nested(TelephoneSchema))
    address_usages = fields.List(fields.Nested(AddressUsageSchema))


class ContactSchema(CamelCaseSchema):
    # Person id in NOMIS
    person_id = fields.Int(attribute="contact_id")
    first_name = fields.Str()
    middle_name = fields.Str()
    last_name = fields.Str()
    date_of_birth = fields.Date()
    relationship_code = fields.Str()
    relationship_description = fields.Str()
    contact_type = fields.Str()
    contact_type_description = fields.Str()
    approved_visitor = fields.Bool()
    emergency_contact = fields.Bool()
    next_of_kin = fields.Bool()
    restrictions = fields.List(fields.Nested(RestrictionSchema))
    addresses = fields.List(fields.Nested(AddressSchema))
    comment_text = fields.Str()


class DateRangeResponseSchema(CamelCaseSchema):
    from_date = fields.Date()
    to_date = fields.Date()


class HasClosedRestrictionSchema(CamelCaseSchema):
    value = fields.Bool()


class VisitorActiveRestrictionsSchema(CamelCaseSchema):
    active_restrictions = fields.List(fields.Str())
