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
"""Utils for working with dates and inclusive date ranges."""
import datetime
from typing import Optional

import attr
import pytz

UK_TIMEZONE = pytz.timezone("Europe/London")


def current_date_uk() -> datetime.date:
    """Returns the current date in the Europe/London timezone."""
    return datetime.datetime.now(tz=UK_TIMEZONE).date()


def date_or_today_uk(date: Optional[datetime.date]) -> datetime.date:
    """Returns the date if set, otherwise today's date in the Europe/London timezone."""
    return date if date else current_date_uk()


@attr.s(frozen=True)
class DateRange:
    """Object representing a range of dates where both bounds are inclusive.

    Two ranges are equal only if both bounds are equal. Touching or overlapping
    ranges are never normalized into one another.
    """

    from_date: datetime.date = attr.ib(
        validator=attr.validators.instance_of(datetime.date)
    )
    to_date: datetime.date = attr.ib(
        validator=attr.validators.instance_of(datetime.date)
    )

    def __attrs_post_init__(self) -> None:
        if self.from_date > self.to_date:
            raise ValueError(
                f"Date range must be in chronological order. "
                f"Current order: {self.from_date}, {self.to_date}"
            )

    def with_from_date(self, from_date: datetime.date) -> "DateRange":
        return attr.evolve(self, from_date=from_date)
