"""An appointment on the shared household calendar.

An appointment blocks a span of time for some of the flat-mates, for
example a cleaning slot from 10:00 to 12:00, or a holiday that runs from
Friday evening to Monday morning. An appointment that ends exactly at
midnight does not occupy the day that starts at that midnight.

Appointments are owned by the surrounding application and are only read by
the layout engine, so the model is frozen.
"""

from __future__ import annotations

import datetime
import logging
from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .util import uid_factory

__all__ = ["Appointment"]

_LOGGER = logging.getLogger(__name__)


class Appointment(BaseModel):
    """A single appointment with a start and end time.

    Example:
    ```python
    import datetime
    from flatcal.appointment import Appointment

    appointment = Appointment(
        title="Bathroom cleaning",
        start=datetime.datetime(2025, 1, 4, 10, 0),
        end=datetime.datetime(2025, 1, 4, 12, 0),
    )
    print("The appointment duration is: ", appointment.duration)
    ```
    """

    model_config = ConfigDict(frozen=True)

    uid: str = Field(default_factory=lambda: uid_factory())
    """A unique identifier for the appointment."""

    title: str = ""
    """A short summary of the appointment."""

    start: datetime.datetime
    """The instant the appointment starts (inclusive)."""

    end: datetime.datetime
    """The instant the appointment ends.

    An end of exactly midnight is exclusive of the day starting at that time.
    """

    color: str = ""
    """The color the appointment is marked with."""

    participants: frozenset[str] = Field(default_factory=frozenset)
    """Ids of the flat-mates taking part in the appointment."""

    description: Optional[str] = None
    """A more complete description than provided by the title."""

    @property
    def start_day(self) -> datetime.date:
        """Return the calendar day the appointment starts on."""
        return self.start.date()

    @property
    def local_end(self) -> datetime.datetime:
        """Return the end in the timezone of the start.

        Days are always counted in the timezone the appointment starts in.
        """
        if self.start.tzinfo is None:
            return self.end
        return self.end.astimezone(self.start.tzinfo)

    @property
    def duration(self) -> datetime.timedelta:
        """Return the appointment duration."""
        return self.end - self.start

    @property
    def day_span(self) -> int:
        """Return the number of calendar days between start and end date."""
        return (self.local_end.date() - self.start.date()).days

    @model_validator(mode="after")
    def _validate_start_end(self) -> Self:
        """Validate the start and end values describe a range of time.

        Both values must have the same kind of timezone information, and the
        appointment may not end before it starts.
        """
        if self.start.tzinfo is None and self.end.tzinfo is not None:
            raise ValueError(
                f"Expected end datetime value in localtime but was {self.end}"
            )
        if self.start.tzinfo is not None and self.end.tzinfo is None:
            raise ValueError(f"Expected end datetime with timezone but was {self.end}")
        if self.start > self.end:
            _LOGGER.debug("Invalid appointment range: %s > %s", self.start, self.end)
            raise ValueError(
                f"Unexpected end value '{self.end}' before start value '{self.start}'"
            )
        return self
