"""Library of calendar arithmetic used to lay out appointments.

These are small helpers for the boundaries of days, weeks and months that
the segmenter, lane allocator and grid builder all share. Weeks always start
on Monday (ISO weekday numbering) regardless of the locale.

Iterating over a range of days is done with `DayRange` so that the inclusive
end of a range is handled in exactly one place.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import datetime
from typing import TYPE_CHECKING, Any

from dateutil.relativedelta import MO, relativedelta

from .util import DAYS_PER_WEEK, MIDNIGHT, ONE_DAY

if TYPE_CHECKING:
    from .appointment import Appointment

__all__ = [
    "DayRange",
    "Month",
    "MonthGridBounds",
    "effective_end_day",
    "month_grid_bounds",
    "week_bounds",
]


class DayRange(Iterable[datetime.date]):
    """A finite, restartable sequence of days between two inclusive bounds.

    The range is empty when the start day is after the end day.
    """

    def __init__(self, start: datetime.date, end: datetime.date) -> None:
        """Initialize DayRange."""
        self._start = start
        self._end = end

    @property
    def start(self) -> datetime.date:
        """Return the first day of the range."""
        return self._start

    @property
    def end(self) -> datetime.date:
        """Return the last day of the range (inclusive)."""
        return self._end

    def __iter__(self) -> Iterator[datetime.date]:
        """Return an iterator over each day in chronological order."""
        day = self._start
        while day <= self._end:
            yield day
            day += ONE_DAY

    def __len__(self) -> int:
        """Return the number of days in the range."""
        return max((self._end - self._start).days + 1, 0)

    def __contains__(self, value: Any) -> bool:
        """Return True if the value is a day within the range."""
        if not isinstance(value, datetime.date) or isinstance(
            value, datetime.datetime
        ):
            return False
        return self._start <= value <= self._end

    def __repr__(self) -> str:
        """Return a debug representation of the range."""
        return f"DayRange(start={self._start}, end={self._end})"


def effective_end_day(appointment: Appointment) -> datetime.date:
    """Return the last day an appointment occupies.

    An appointment ending exactly at midnight is treated as ending on the
    previous day, e.g. 20:00 until 00:00 the next day is a same day
    appointment.
    """
    end = appointment.local_end
    if end.time() == MIDNIGHT:
        return end.date() - ONE_DAY
    return end.date()


def week_bounds(day: datetime.date) -> tuple[datetime.date, datetime.date]:
    """Return the Monday and Sunday of the week containing the day."""
    monday = day + relativedelta(weekday=MO(-1))
    return (monday, monday + datetime.timedelta(days=DAYS_PER_WEEK - 1))


@dataclass(frozen=True, order=True)
class Month:
    """A calendar month of a specific year."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12 but was {self.month}")

    @classmethod
    def of(cls, day: datetime.date) -> Month:  # pylint: disable=invalid-name
        """Return the month containing the day."""
        return cls(day.year, day.month)

    @property
    def first_day(self) -> datetime.date:
        """Return the first day of the month."""
        return datetime.date(self.year, self.month, 1)

    @property
    def last_day(self) -> datetime.date:
        """Return the last day of the month."""
        return datetime.date(self.year, self.month, self.days_in_month)

    @property
    def days_in_month(self) -> int:
        """Return the number of days in the month."""
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def days(self) -> DayRange:
        """Return every day of the month."""
        return DayRange(self.first_day, self.last_day)

    def previous(self) -> Month:
        """Return the month before this one."""
        return Month.of(self.first_day - relativedelta(months=1))

    def next(self) -> Month:
        """Return the month after this one."""
        return Month.of(self.first_day + relativedelta(months=1))

    def __contains__(self, value: Any) -> bool:
        """Return True if the day falls within the month."""
        if not isinstance(value, datetime.date):
            return False
        return (value.year, value.month) == (self.year, self.month)

    def __str__(self) -> str:
        """Return the month as YYYY-MM."""
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class MonthGridBounds:
    """The shape of a Monday-start month grid."""

    first_day: datetime.date
    """The first day of the month."""

    last_day: datetime.date
    """The last day of the month."""

    leading_fillers: int
    """Number of cells borrowed from the previous month before the first day."""

    rows: int
    """Number of week rows needed to show the whole month."""

    @property
    def total_cells(self) -> int:
        """Return the number of cells in the grid."""
        return self.rows * DAYS_PER_WEEK

    @property
    def trailing_fillers(self) -> int:
        """Return the number of cells borrowed from the next month."""
        days_in_month = (self.last_day - self.first_day).days + 1
        return self.total_cells - self.leading_fillers - days_in_month

    @property
    def grid_start(self) -> datetime.date:
        """Return the first day shown in the grid (a Monday)."""
        return self.first_day - datetime.timedelta(days=self.leading_fillers)

    @property
    def grid_end(self) -> datetime.date:
        """Return the last day shown in the grid (a Sunday)."""
        return self.last_day + datetime.timedelta(days=self.trailing_fillers)


def month_grid_bounds(month: Month) -> MonthGridBounds:
    """Return the grid shape for the month."""
    first_day = month.first_day
    leading_fillers = (first_day.isoweekday() - 1) % DAYS_PER_WEEK
    rows = -(-(month.days_in_month + leading_fillers) // DAYS_PER_WEEK)
    return MonthGridBounds(
        first_day=first_day,
        last_day=month.last_day,
        leading_fillers=leading_fillers,
        rows=rows,
    )
