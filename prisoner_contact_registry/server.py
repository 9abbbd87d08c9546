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
"""Backend entry point for the Prisoner Contact Registry API server.

Run with gunicorn:
    gunicorn -c gunicorn.conf.py "prisoner_contact_registry.server:create_app()"
"""
import logging
from typing import Optional

import sentry_sdk
from flask import Flask, Response
from sentry_sdk.integrations.flask import FlaskIntegration

from prisoner_contact_registry.config import ContactRegistryConfig
from prisoner_contact_registry.contact_registry_service import ContactRegistryService
from prisoner_contact_registry.contact_routes import (
    create_contacts_blueprint,
    create_contacts_v2_blueprint,
    health_blueprint,
)
from prisoner_contact_registry.error_handlers import register_error_handlers
from prisoner_contact_registry.utils import structured_logging
from prisoner_contact_registry.utils.environment import (
    get_version,
    in_development,
    in_test,
)


def create_app(
    config: Optional[ContactRegistryConfig] = None,
    service: Optional[ContactRegistryService] = None,
) -> Flask:
    """Builds the Flask app. Config is read from the environment when not given,
    and the service is built from the config when not given."""
    if not in_test():
        structured_logging.setup()

    if service is None:
        config = config or ContactRegistryConfig.from_env()
        service = ContactRegistryService.from_config(config)

    # Sentry setup
    if config and config.sentry_dsn:
        # pylint: disable=abstract-class-instantiated
        sentry_sdk.init(
            dsn=config.sentry_dsn,
            integrations=[FlaskIntegration()],
            release=get_version() or None,
            traces_sample_rate=0.1,
        )

    app = Flask(__name__)
    register_error_handlers(app)

    # Security headers
    @app.after_request
    def set_headers(response: Response) -> Response:
        if not in_development():
            response.headers[
                "Strict-Transport-Security"
            ] = "max-age=63072000"  # max age of 2 years
        response.headers["Content-Security-Policy"] = "frame-ancestors 'none'"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Current-Version"] = get_version()

        # Set cache control to no-store if it isn't already set
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"

        return response

    # Routes & Blueprints
    app.register_blueprint(health_blueprint)
    app.register_blueprint(create_contacts_blueprint(service))
    app.register_blueprint(create_contacts_v2_blueprint(service), url_prefix="/v2")

    logging.info("Prisoner Contact Registry started, version [%s]", get_version())
    return app
