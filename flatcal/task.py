"""A task assigned to flat-mates on the shared household calendar."""

from __future__ import annotations

import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .util import uid_factory

__all__ = ["Task"]


class Task(BaseModel):
    """A task that is either due on a single day or not scheduled at all."""

    model_config = ConfigDict(frozen=True)

    uid: str = Field(default_factory=lambda: uid_factory())
    title: str = ""

    due: Optional[datetime.date] = None
    """The day the task is due, if any. A task has no time or duration."""

    color: str = ""
    participants: frozenset[str] = Field(default_factory=frozenset)
    completed: bool = False
    description: Optional[str] = None

    @field_validator("due", mode="before")
    @classmethod
    def _validate_due_is_date(cls, value: Any) -> Any:
        """Reject a datetime for the due value since a task has no time."""
        if isinstance(value, datetime.datetime):
            raise ValueError(f"Expected due value to be a date but was {value}")
        return value
