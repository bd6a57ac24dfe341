"""Test fixtures."""

from collections.abc import Callable, Generator
import datetime
import itertools
from unittest.mock import patch

import pytest

from flatcal.appointment import Appointment

AppointmentFactory = Callable[..., Appointment]


@pytest.fixture(autouse=True)
def mock_uid() -> Generator[None, None, None]:
    """Mock out the uid used for appointments and tasks in tests."""
    counter = itertools.count(1)
    with patch(
        "flatcal.appointment.uid_factory", side_effect=lambda: f"uid-{next(counter)}"
    ), patch("flatcal.task.uid_factory", side_effect=lambda: f"task-{next(counter)}"):
        yield


@pytest.fixture(name="make_appointment")
def make_appointment_fixture() -> AppointmentFactory:
    """Fixture for creating appointments from a title and start/end values."""

    def _make(
        title: str,
        start: datetime.datetime,
        end: datetime.datetime,
        **kwargs: object,
    ) -> Appointment:
        return Appointment(uid=title, title=title, start=start, end=end, **kwargs)

    return _make
