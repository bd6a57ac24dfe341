"""Utility methods used by multiple components."""

from __future__ import annotations

import datetime
import uuid

__all__ = [
    "today_factory",
    "uid_factory",
]


MIDNIGHT = datetime.time()
ONE_DAY = datetime.timedelta(days=1)
DAYS_PER_WEEK = 7


def today_factory() -> datetime.date:
    """Factory method for the current day to facilitate mocking."""
    return datetime.date.today()


def uid_factory() -> str:
    """Factory method for new uids to facilitate mocking."""
    return str(uuid.uuid1())


def start_of_day(
    day: datetime.date, tzinfo: datetime.tzinfo | None = None
) -> datetime.datetime:
    """Return the first instant of the day, optionally in the timezone."""
    return datetime.datetime.combine(day, MIDNIGHT, tzinfo=tzinfo)
