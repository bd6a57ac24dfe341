"""Splitting appointments into the days they are displayed on.

A single appointment may span several days, for example a weekend trip. A
calendar view draws one `DisplaySegment` for each day the appointment
touches within the range of days being shown. Segments of an appointment
that spans more than one day are drawn as a continuous bar and are marked
as the start, middle or end of that bar. A segment of an appointment that
starts and ends on the same day is drawn as an indicator dot instead.
"""

from __future__ import annotations

from collections.abc import Iterable
import dataclasses
from dataclasses import dataclass
import datetime
import logging
from typing import Optional

from .appointment import Appointment
from .calendar_math import DayRange, effective_end_day
from .util import ONE_DAY, start_of_day

__all__ = [
    "DisplaySegment",
    "classify_span",
    "segment_appointment",
]

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplaySegment:
    """The portion of an appointment that falls on a single calendar day."""

    appointment: Appointment
    """The original appointment this segment is a view of."""

    start: datetime.datetime
    """The start of the segment, clipped to the start of the day."""

    end: datetime.datetime
    """The end of the segment, clipped to the start of the next day."""

    date: datetime.date
    """The calendar day the segment is displayed on."""

    starts_here: bool
    """True if the appointment starts on this day."""

    ends_here: bool
    """True if the appointment ends on this day."""

    is_multi_day_start: bool = False
    is_multi_day_middle: bool = False
    is_multi_day_end: bool = False

    lane_index: Optional[int] = None
    """Row used to draw the bar of a multi-day appointment.

    This is only set for multi-day segments after lanes are allocated.
    """

    @property
    def is_multi_day(self) -> bool:
        """Return True if the segment is part of a multi-day appointment."""
        return (
            self.is_multi_day_start or self.is_multi_day_middle or self.is_multi_day_end
        )


def classify_span(segments: Iterable[DisplaySegment]) -> list[DisplaySegment]:
    """Mark the position of each segment within its appointment.

    A segment where the appointment both starts and ends gets no flags set.
    """
    return [
        dataclasses.replace(
            segment,
            is_multi_day_start=segment.starts_here and not segment.ends_here,
            is_multi_day_end=segment.ends_here and not segment.starts_here,
            is_multi_day_middle=not segment.starts_here and not segment.ends_here,
        )
        for segment in segments
    ]


def segment_appointment(
    appointment: Appointment,
    view_start: datetime.date,
    view_end: datetime.date,
) -> list[DisplaySegment]:
    """Return a segment for each day of the appointment within the view.

    The view is an inclusive range of days. Whether a segment starts or ends
    the appointment is determined from the full appointment, so a segment
    cut off at the edge of the view is still a continuation.
    """
    first_day = appointment.start_day
    last_day = effective_end_day(appointment)
    tzinfo = appointment.start.tzinfo

    segments: list[DisplaySegment] = []
    for day in DayRange(max(first_day, view_start), min(last_day, view_end)):
        segment_start = max(appointment.start, start_of_day(day, tzinfo))
        segment_end = min(
            appointment.local_end, start_of_day(day + ONE_DAY, tzinfo)
        )
        if segment_start >= segment_end:
            continue
        segments.append(
            DisplaySegment(
                appointment=appointment,
                start=segment_start,
                end=segment_end,
                date=day,
                starts_here=day == first_day,
                ends_here=day == last_day,
            )
        )
    _LOGGER.debug(
        "Appointment %s has %d segments between %s and %s",
        appointment.uid,
        len(segments),
        view_start,
        view_end,
    )
    return classify_span(segments)
