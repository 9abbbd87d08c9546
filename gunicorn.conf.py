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
"""Configures gunicorn"""
import logging
import multiprocessing
import os

from gunicorn.workers.base import Worker

# http://docs.gunicorn.org/en/stable/design.html#how-many-workers
workers = int(os.environ.get("GUNICORN_WORKERS", (2 * multiprocessing.cpu_count()) + 1))
# Requests mostly wait on the upstream APIs, so use a threaded worker
worker_class = "gthread"
threads = int(os.environ.get("GUNICORN_THREADS", 4))
bind = f"0.0.0.0:{os.environ.get('PORT', '8080')}"
timeout = 120
loglevel = "info"
accesslog = "-"
errorlog = "-"
keepalive = 650


def post_worker_init(worker: Worker) -> None:
    logging.info("Running post_worker_init for worker %s", worker)
