"""Exceptions for flatcal library."""


class CalendarLayoutError(Exception):
    """Base exception for all flatcal errors."""


class DayNotFoundError(CalendarLayoutError, LookupError):
    """Exception raised when a day is not part of a built calendar view.

    A week strip or month grid only covers a fixed range of days, so asking
    for the details of a day outside of it is a programming error in the
    caller (e.g. the view was not rebuilt after navigating).
    """

    def __init__(self, day: object) -> None:
        """Initialize DayNotFoundError with the requested day."""
        super().__init__(f"Day {day} is not part of the calendar view")
        self.day = day
