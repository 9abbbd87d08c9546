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
"""Maps exceptions raised while serving a request onto JSON error responses."""
import logging
from http import HTTPStatus
from typing import Any, Optional

import requests
import sentry_sdk
from flask import Flask, Response, jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from prisoner_contact_registry.utils.flask_exception import FlaskException


def _error_response(
    status_code: int,
    code: str,
    user_message: Optional[str],
    developer_message: Any,
) -> Response:
    response = jsonify(
        {
            "status": int(status_code),
            "code": code,
            "userMessage": user_message,
            "developerMessage": developer_message,
        }
    )
    response.status_code = status_code
    return response


def handle_flask_exception(ex: FlaskException) -> Response:
    logging.debug("%s exception caught: %s", ex.code, ex.description)
    return _error_response(ex.status_code, ex.code, ex.user_message, ex.description)


def handle_validation_error(ex: ValidationError) -> Response:
    logging.info("Validation exception: %s", ex.messages)
    return _error_response(
        HTTPStatus.BAD_REQUEST,
        "bad_request",
        f"Validation failure: {ex.messages}",
        ex.messages,
    )


def handle_upstream_http_error(ex: requests.HTTPError) -> Response:
    """Relays the upstream status and body unchanged."""
    upstream_response = ex.response
    if upstream_response is None:
        return handle_upstream_request_exception(ex)

    if upstream_response.status_code < HTTPStatus.INTERNAL_SERVER_ERROR:
        logging.info("Unexpected client exception with message %s", ex)
    else:
        logging.error("Unexpected server exception: %s", ex, exc_info=True)
        sentry_sdk.capture_exception(ex)
    return Response(
        upstream_response.content,
        status=upstream_response.status_code,
        content_type=upstream_response.headers.get(
            "Content-Type", "application/json"
        ),
    )


def handle_upstream_request_exception(ex: requests.RequestException) -> Response:
    logging.error("Unexpected exception", exc_info=True)
    sentry_sdk.capture_exception(ex)
    return _error_response(
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "upstream_error",
        "Unexpected error",
        str(ex),
    )


def handle_http_exception(ex: HTTPException) -> Response:
    status_code = ex.code or HTTPStatus.INTERNAL_SERVER_ERROR
    return _error_response(
        status_code, ex.name.lower().replace(" ", "_"), ex.name, ex.description
    )


def handle_unexpected_exception(ex: Exception) -> Response:
    logging.error("Unexpected exception", exc_info=True)
    sentry_sdk.capture_exception(ex)
    return _error_response(
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "internal_server_error",
        "Unexpected error",
        str(ex),
    )


def register_error_handlers(app: Flask) -> None:
    """Registers error handlers"""
    app.errorhandler(FlaskException)(handle_flask_exception)
    app.errorhandler(ValidationError)(handle_validation_error)
    app.errorhandler(requests.HTTPError)(handle_upstream_http_error)
    app.errorhandler(requests.RequestException)(handle_upstream_request_exception)
    app.errorhandler(HTTPException)(handle_http_exception)
    app.errorhandler(Exception)(handle_unexpected_exception)
