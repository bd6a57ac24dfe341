"""Building the days of a month grid or week strip.

The calendar screen shows either a full month, laid out as rows of Monday to
Sunday, or a single week. Each cell is a `CalendarDay` holding the segments
of appointments and the tasks on that day, ready to be drawn.

A month grid always has complete weeks, so days from the previous and next
month fill the first and last rows. These filler days are shown dimmed and
without any entries.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
import datetime
import logging

from .appointment import Appointment
from .calendar_math import DayRange, Month, month_grid_bounds, week_bounds
from .exceptions import DayNotFoundError
from .lanes import allocate_lanes
from .segment import DisplaySegment, segment_appointment
from .task import Task
from .util import ONE_DAY, today_factory

__all__ = [
    "CalendarDay",
    "build_month_grid",
    "build_week_days",
    "select_day",
]

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarDay:
    """A single day cell in a calendar view."""

    date: datetime.date
    is_current_month: bool
    is_today: bool = False

    segments: tuple[DisplaySegment, ...] = field(default_factory=tuple)
    """Appointment segments on this day, in lane order with lane-less last."""

    tasks: tuple[Task, ...] = field(default_factory=tuple)
    """Tasks due on this day."""

    @property
    def has_entries(self) -> bool:
        """Return True if there are any appointments or tasks on this day."""
        return bool(self.segments or self.tasks)

    @property
    def multi_day_segments(self) -> list[DisplaySegment]:
        """Return the segments drawn as bars."""
        return [segment for segment in self.segments if segment.is_multi_day]

    @property
    def single_day_segments(self) -> list[DisplaySegment]:
        """Return the segments drawn as indicator dots."""
        return [segment for segment in self.segments if not segment.is_multi_day]

    @property
    def lane_count(self) -> int:
        """Return the number of lanes needed to draw the bars on this day."""
        return max(
            (s.lane_index + 1 for s in self.segments if s.lane_index is not None),
            default=0,
        )


def _layout_segments(
    appointments: Iterable[Appointment],
    view_start: datetime.date,
    view_end: datetime.date,
) -> list[DisplaySegment]:
    """Segment, classify and assign lanes to all appointments in the view."""
    segments: list[DisplaySegment] = []
    for appointment in sorted(appointments, key=lambda a: a.start):
        segments.extend(segment_appointment(appointment, view_start, view_end))
    return allocate_lanes(segments)


def _filler_day(day: datetime.date) -> CalendarDay:
    return CalendarDay(date=day, is_current_month=False)


class _DayBuckets:
    """Segments and tasks grouped by the day they are displayed on."""

    def __init__(
        self, segments: Iterable[DisplaySegment], tasks: Iterable[Task]
    ) -> None:
        self._segments: dict[datetime.date, list[DisplaySegment]] = {}
        for segment in segments:
            self._segments.setdefault(segment.date, []).append(segment)
        self._tasks: dict[datetime.date, list[Task]] = {}
        for task in tasks:
            if task.due is not None:
                self._tasks.setdefault(task.due, []).append(task)

    def day(
        self, day: datetime.date, is_current_month: bool, today: datetime.date
    ) -> CalendarDay:
        """Return the calendar day with all of its entries."""
        return CalendarDay(
            date=day,
            is_current_month=is_current_month,
            is_today=day == today,
            segments=tuple(self._segments.get(day, [])),
            tasks=tuple(self._tasks.get(day, [])),
        )


def build_month_grid(
    month: Month,
    appointments: Iterable[Appointment],
    tasks: Iterable[Task],
    *,
    today: datetime.date | None = None,
) -> list[CalendarDay]:
    """Return the days of a month grid, including filler days.

    The result always contains complete weeks starting on Monday.
    """
    if today is None:
        today = today_factory()
    bounds = month_grid_bounds(month)
    buckets = _DayBuckets(
        _layout_segments(appointments, bounds.first_day, bounds.last_day), tasks
    )

    days = [
        _filler_day(day)
        for day in DayRange(bounds.grid_start, bounds.first_day - ONE_DAY)
    ]
    days.extend(buckets.day(day, True, today) for day in month.days)
    days.extend(
        _filler_day(day)
        for day in DayRange(bounds.last_day + ONE_DAY, bounds.grid_end)
    )
    _LOGGER.debug("Built grid for %s with %d rows", month, bounds.rows)
    return days


def build_week_days(
    reference_day: datetime.date,
    appointments: Iterable[Appointment],
    tasks: Iterable[Task],
    *,
    today: datetime.date | None = None,
) -> list[CalendarDay]:
    """Return the seven days from Monday to Sunday of the reference day's week.

    Days are marked as part of the current month relative to the reference
    day, so a week crossing into another month has some days dimmed.
    """
    if today is None:
        today = today_factory()
    monday, sunday = week_bounds(reference_day)
    month = Month.of(reference_day)
    buckets = _DayBuckets(_layout_segments(appointments, monday, sunday), tasks)
    return [buckets.day(day, day in month, today) for day in DayRange(monday, sunday)]


def select_day(days: Sequence[CalendarDay], day: datetime.date) -> CalendarDay:
    """Return the calendar day for the date from a built view."""
    for calendar_day in days:
        if calendar_day.date == day:
            return calendar_day
    raise DayNotFoundError(day)
