"""
Event Pydantic Schemas
"""

import datetime as dt
from typing import Optional, Union

from pydantic import field_validator

from eventdesk.schemas.common import RecordModel, as_utc


EVENT_REQUIRED_FIELDS = ("title", "description", "date", "time", "location")


class EventInput(RecordModel):
    """
    Fields supplied by callers when creating or updating an event.

    Everything is optional here so that missing fields can be reported
    together by the store; text values are trimmed.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[Union[dt.date, str]] = None
    time: Optional[Union[dt.time, str]] = None
    location: Optional[str] = None

    @field_validator("title", "description", "location", "date", "time", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class Event(RecordModel):
    """A stored community event."""

    id: int
    title: str
    description: str
    date: dt.date
    time: dt.time
    location: str
    created_by: str
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def timestamps_are_utc(cls, v):
        return as_utc(v)

    @property
    def scheduled_at(self) -> dt.datetime:
        """Naive local datetime the event takes place at."""
        return dt.datetime.combine(self.date, self.time)
