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
""" Contains utils for API Marshmallow schemas"""
from functools import wraps
from typing import Any, Callable, Dict, List, Type

from flask import g, request
from marshmallow import EXCLUDE, RAISE, Schema
from marshmallow.fields import Field
from werkzeug.datastructures import MultiDict

from prisoner_contact_registry.exceptions import ContactRegistryBadRequestError


def snake_to_camel(s: str) -> str:
    """Converts a snake case string (e.g. "given_names") to a camel case string
    (e.g. "givenNames")."""
    parts = iter(s.split("_"))
    return next(parts) + "".join(i.title() for i in parts)


class CamelCaseSchema(Schema):
    """
    Schema that uses camel-case for its external representation
    and snake-case for its internal representation.
    """

    def on_bind_field(self, field_name: str, field_obj: Field) -> None:
        field_obj.data_key = snake_to_camel(field_obj.data_key or field_name)


def load_api_schema(api_schema: Type[Schema], source_data: Any) -> Any:
    if not isinstance(source_data, (dict, list)):
        raise ContactRegistryBadRequestError("Expected a JSON object in the request body")

    return api_schema(unknown=RAISE).load(source_data)


def load_query_schema(api_schema: Type[Schema], args: MultiDict) -> Any:
    """Loads query parameters. A parameter given more than once is joined with
    commas, so `visitors=1&visitors=2` reads the same as `visitors=1,2`.
    Parameters the schema does not know about are ignored."""
    data = {key: ",".join(values) for key, values in args.lists()}
    return api_schema(unknown=EXCLUDE).load(data)


def requires_api_schema(api_schema: Type[Schema]) -> Callable:
    def inner(route: Callable) -> Callable:
        @wraps(route)
        def decorated(*args: List[Any], **kwargs: Dict[str, Any]) -> Any:
            g.api_data = load_api_schema(api_schema, request.get_json(silent=True))

            return route(*args, **kwargs)

        return decorated

    return inner


def requires_query_schema(api_schema: Type[Schema]) -> Callable:
    def inner(route: Callable) -> Callable:
        @wraps(route)
        def decorated(*args: List[Any], **kwargs: Dict[str, Any]) -> Any:
            g.query_data = load_query_schema(api_schema, request.args)

            return route(*args, **kwargs)

        return decorated

    return inner
