"""
Event Repository

Data access layer for community events: creation, lookup, update, deletion
and range/text queries over the persisted event collection.
"""

import datetime as dt
import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel

from eventdesk.core.exceptions import ValidationException
from eventdesk.core.validators import missing_fields
from eventdesk.integrations.persistence import PersistenceAdapter
from eventdesk.repositories.base import CollectionRepository
from eventdesk.schemas.common import parse_model, utcnow
from eventdesk.schemas.event import Event, EventInput, EVENT_REQUIRED_FIELDS

logger = logging.getLogger("EVENT_REPOSITORY")

DateLike = Union[str, dt.date]


def _iso_date(value: DateLike) -> str:
    if isinstance(value, dt.date):
        return value.isoformat()
    return str(value).strip()


class EventStore(CollectionRepository[Event]):
    """
    Repository owning the event collection.

    Extends CollectionRepository to provide:
    - Validated creation and update
    - Deletion returning the removed record
    - Text, date-range, creator and schedule queries
    """

    def __init__(self, adapter: PersistenceAdapter, collection_name: str = "events"):
        """
        Initialize the event store.

        Args:
            adapter: Persistence adapter holding the event collection
            collection_name: Key of the event collection
        """
        super().__init__(Event, adapter, collection_name)
        logger.info(f"Loaded {self.count()} events from '{collection_name}'")

    def _validated_fields(self, data: Union[Mapping[str, Any], BaseModel]) -> dict:
        fields = parse_model(EventInput, data).model_dump()
        missing = missing_fields(fields, EVENT_REQUIRED_FIELDS)
        if missing:
            raise ValidationException("All fields are required", {"fields": missing})
        return fields

    def create(self, data: Union[Mapping[str, Any], BaseModel], created_by: Optional[str] = None) -> Event:
        """
        Create a new event.

        Args:
            data: title, description, date, time and location
            created_by: Username of the creating account

        Returns:
            Created Event with id and created_at populated

        Raises:
            ValidationException: If a required field is missing, blank or malformed
        """
        fields = self._validated_fields(data)
        event = parse_model(Event, {
            **fields,
            "id": self._next_id,
            "created_by": created_by or "Unknown",
            "created_at": utcnow(),
            "updated_at": None,
        })
        self.next_id()
        created = self.add(event)
        logger.info(f"Event created: {created.id} by {created.created_by}")
        return created

    def get_by_id(self, id: Any) -> Optional[Event]:
        """Event with the given id, or None."""
        return self.get(id)

    def update(self, id: Any, data: Union[Mapping[str, Any], BaseModel]) -> Optional[Event]:
        """
        Update an existing event.

        id, created_by and created_at are preserved; updated_at is refreshed.

        Args:
            id: Event id
            data: Replacement title, description, date, time and location

        Returns:
            Updated Event, or None if no event has that id

        Raises:
            ValidationException: If a required field is missing, blank or malformed
        """
        existing = self.get(id)
        if existing is None:
            logger.warning(f"Event {id} not found for update")
            return None

        fields = self._validated_fields(data)
        merged = parse_model(Event, {
            **existing.model_dump(),
            **fields,
            "updated_at": utcnow(),
        })
        updated = self.replace(merged)
        logger.info(f"Event updated: {existing.id}")
        return updated

    def delete(self, id: Any) -> Optional[Event]:
        """
        Delete an event.

        Returns:
            The deleted Event, or None if not found
        """
        removed = self.remove(id)
        if removed is not None:
            logger.info(f"Event deleted: {removed.id}")
        return removed

    def search(self, term: str) -> List[Event]:
        """Events whose title or description contains term, case-insensitively."""
        needle = (term or "").lower()
        return self.filter(
            lambda event: needle in event.title.lower() or needle in event.description.lower()
        )

    def by_date_range(self, start: DateLike, end: DateLike) -> List[Event]:
        """Events dated within [start, end], comparing ISO date text."""
        start_iso, end_iso = _iso_date(start), _iso_date(end)
        return self.filter(lambda event: start_iso <= event.date.isoformat() <= end_iso)

    def by_creator(self, username: str) -> List[Event]:
        """Events whose created_by equals username exactly."""
        return self.filter(lambda event: event.created_by == username)

    def upcoming(self, now: Optional[dt.datetime] = None) -> List[Event]:
        """Events scheduled after now (naive local time)."""
        now = now or dt.datetime.now()
        return self.filter(lambda event: event.scheduled_at > now)

    def past(self, now: Optional[dt.datetime] = None) -> List[Event]:
        """Events scheduled at or before now (naive local time)."""
        now = now or dt.datetime.now()
        return self.filter(lambda event: event.scheduled_at <= now)

    def clear(self) -> None:
        super().clear()
        logger.info("All events cleared")
