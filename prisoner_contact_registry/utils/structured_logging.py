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
"""Configures logging setup."""

import logging
import sys

from prisoner_contact_registry.utils import environment

LOG_FORMAT = "[pid: %(process)d] %(module)s/%(funcName)s : %(message)s"


def setup() -> None:
    """Setup logging"""
    logger = logging.getLogger()

    if not logger.handlers:
        # Streams logs to stdout so they are picked up by the container runtime
        logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.setLevel(logging.DEBUG if environment.in_development() else logging.INFO)

    for handler in logger.handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Export gunicorn errors using the same handlers as other logs
    gunicorn_logger = logging.getLogger("gunicorn.error")
    gunicorn_logger.handlers = logger.handlers
