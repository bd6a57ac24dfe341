"""Assigning lanes to the bars of multi-day appointments.

Multi-day appointments are drawn as horizontal bars that continue from one
day cell to the next. Each appointment gets a lane (a row index within the
day cell) that is shared by all of its segments so the bar is continuous,
and two appointments that are active on the same day never share a lane.

Lanes are assigned greedily in a fixed order: appointments that start earlier
claim lower lanes first and, when two appointments start at the same time,
the longer one goes first. The order is part of the result, since a
different order produces different (still valid) lane numbers.
"""

from __future__ import annotations

from collections.abc import Iterable
import dataclasses
from dataclasses import dataclass, field
import datetime
import functools
import itertools
import logging

from .appointment import Appointment
from .calendar_math import DayRange, effective_end_day
from .segment import DisplaySegment

__all__ = [
    "LaneAssignment",
    "allocate_lanes",
    "assign_lanes",
]

_LOGGER = logging.getLogger(__name__)

_NO_LANE = float("inf")


@dataclass
class LaneAssignment:
    """The lanes assigned so far while folding over a sequence of appointments.

    An assignment is the accumulator passed between the steps of
    `assign_lanes`. Each step claims lanes on the days of one appointment only,
    so the cost of a step depends on the length of that appointment and not
    on the days already occupied.
    """

    lanes: dict[str, int] = field(default_factory=dict)
    """The lane assigned to each appointment uid."""

    occupancy: dict[datetime.date, dict[int, str]] = field(default_factory=dict)
    """The appointment uid occupying each lane, per day."""

    @property
    def lane_count(self) -> int:
        """Return the number of lanes in use."""
        return max(self.lanes.values(), default=-1) + 1

    def is_free(self, lane: int, uid: str, days: Iterable[datetime.date]) -> bool:
        """Return True if no other appointment holds the lane on any of the days."""
        for day in days:
            holder = self.occupancy.get(day, {}).get(lane)
            if holder is not None and holder != uid:
                return False
        return True

    def claim(self, appointment: Appointment) -> LaneAssignment:
        """Claim the first free lane for the appointment and return the assignment.

        An appointment that already has a lane keeps it.
        """
        if appointment.uid in self.lanes:
            return self
        days = DayRange(appointment.start_day, effective_end_day(appointment))
        lane = next(
            lane
            for lane in itertools.count()
            if self.is_free(lane, appointment.uid, days)
        )
        for day in days:
            self.occupancy.setdefault(day, {})[lane] = appointment.uid
        self.lanes[appointment.uid] = lane
        return self


def _lane_order(appointment: Appointment) -> tuple[datetime.datetime, int]:
    """Sort key placing earlier, then longer, appointments first."""
    return (appointment.start, -appointment.day_span)


def assign_lanes(appointments: Iterable[Appointment]) -> LaneAssignment:
    """Assign a lane to each appointment for its whole span of days.

    Lanes are checked against the true days of the appointment and not the
    days of any particular view, so the result is the same whichever month
    or week is being shown.
    """
    ordered = sorted(appointments, key=_lane_order)
    return functools.reduce(LaneAssignment.claim, ordered, LaneAssignment())


def _display_order(segment: DisplaySegment) -> tuple[datetime.date, float]:
    lane = segment.lane_index
    return (segment.date, _NO_LANE if lane is None else lane)


def allocate_lanes(segments: Iterable[DisplaySegment]) -> list[DisplaySegment]:
    """Set the lane of every multi-day segment.

    Segments of single-day appointments are not considered when finding a
    free lane and are returned without a lane. Any lane already present on
    the input is ignored. The result is sorted by day and then by lane, with
    segments that have no lane last.
    """
    items = list(segments)
    appointments: dict[str, Appointment] = {}
    for segment in items:
        if segment.is_multi_day:
            appointments.setdefault(segment.appointment.uid, segment.appointment)

    assignment = assign_lanes(appointments.values())
    _LOGGER.debug(
        "Assigned %d lanes to %d multi-day appointments",
        assignment.lane_count,
        len(appointments),
    )

    result = [
        dataclasses.replace(
            segment,
            lane_index=(
                assignment.lanes[segment.appointment.uid]
                if segment.is_multi_day
                else None
            ),
        )
        for segment in items
    ]
    return sorted(result, key=_display_order)
