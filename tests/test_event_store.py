from __future__ import annotations

import json
import logging
from datetime import date, datetime, time, timezone

import pytest

from eventdesk.core.exceptions import ValidationException
from eventdesk.integrations.persistence import InMemoryPersistenceAdapter
from eventdesk.repositories.event_repository import EventStore


def test_create_then_get_by_id_returns_input_plus_identity(events: EventStore, event_data: dict) -> None:
    created = events.create(event_data, "alice123")
    fetched = events.get_by_id(created.id)

    assert fetched == created
    assert fetched.id == 1
    assert fetched.title == "T"
    assert fetched.description == "D"
    assert fetched.location == "L"
    assert fetched.date == date(2025, 1, 1)
    assert fetched.time == time(10, 0)
    assert fetched.created_by == "alice123"
    assert fetched.created_at is not None
    assert fetched.updated_at is None


def test_create_trims_text_fields(events: EventStore, event_data: dict) -> None:
    created = events.create({**event_data, "title": "  Picnic  ", "location": " Park "}, "bob")
    assert created.title == "Picnic"
    assert created.location == "Park"


def test_create_without_creator_uses_unknown(events: EventStore, event_data: dict) -> None:
    assert events.create(event_data).created_by == "Unknown"


@pytest.mark.parametrize("field", ["title", "description", "date", "time", "location"])
def test_create_rejects_missing_or_blank_field(events: EventStore, event_data: dict, field: str) -> None:
    missing = {k: v for k, v in event_data.items() if k != field}
    with pytest.raises(ValidationException) as exc:
        events.create(missing, "alice123")
    assert exc.value.details["fields"] == [field]

    with pytest.raises(ValidationException):
        events.create({**event_data, field: "   "}, "alice123")

    assert events.count() == 0


def test_create_rejects_malformed_date(events: EventStore, event_data: dict) -> None:
    with pytest.raises(ValidationException):
        events.create({**event_data, "date": "tomorrow"}, "alice123")
    assert events.count() == 0


def test_ids_are_monotonic_and_not_reused_after_delete(events: EventStore, event_data: dict) -> None:
    first = events.create(event_data, "a")
    second = events.create(event_data, "a")
    assert (first.id, second.id) == (1, 2)

    events.delete(second.id)
    third = events.create(event_data, "a")
    assert third.id == 3


def test_get_by_id_coerces_and_signals_absence(events: EventStore, event_data: dict) -> None:
    created = events.create(event_data, "a")
    assert events.get_by_id(str(created.id)) == created
    assert events.get_by_id("abc") is None
    assert events.get_by_id(None) is None
    assert events.get_by_id(99) is None


def test_get_all_returns_defensive_copies(events: EventStore, event_data: dict) -> None:
    events.create(event_data, "a")

    snapshot = events.get_all()
    snapshot[0].title = "changed"
    snapshot.clear()

    assert events.count() == 1
    assert events.get_by_id(1).title == "T"


def test_update_preserves_identity_fields_and_stamps_updated_at(events: EventStore, event_data: dict) -> None:
    created = events.create(event_data, "alice123")

    updated = events.update(created.id, {
        **event_data,
        "title": "New title",
        "date": "2025-02-02",
        "created_by": "mallory",
        "id": 42,
    })

    assert updated.id == created.id
    assert updated.created_by == "alice123"
    assert updated.created_at == created.created_at
    assert updated.updated_at is not None
    assert updated.title == "New title"
    assert updated.date == date(2025, 2, 2)
    assert events.get_by_id(created.id) == updated


def test_update_refreshes_updated_at_every_time(events: EventStore, event_data: dict) -> None:
    created = events.create(event_data, "a")
    first = events.update(created.id, event_data)
    second = events.update(created.id, event_data)
    assert second.updated_at >= first.updated_at


def test_update_unknown_id_returns_none(events: EventStore, event_data: dict) -> None:
    assert events.update(7, event_data) is None


def test_update_with_blank_title_leaves_record_unchanged(events: EventStore, event_data: dict) -> None:
    created = events.create(event_data, "alice123")

    with pytest.raises(ValidationException):
        events.update(created.id, {**event_data, "title": ""})

    assert events.get_by_id(created.id) == created


def test_delete_returns_record_then_not_found(events: EventStore, event_data: dict) -> None:
    created = events.create(event_data, "a")

    assert events.delete(created.id) == created
    assert events.get_by_id(created.id) is None
    assert events.delete(created.id) is None


def test_search_matches_title_and_description_case_insensitively(events: EventStore, event_data: dict) -> None:
    events.create({**event_data, "title": "Jazz Night", "description": "Live music"}, "a")
    events.create({**event_data, "title": "Book club", "description": "Reading JAZZ history"}, "a")
    events.create({**event_data, "title": "Yoga", "description": "Stretching"}, "a")

    assert [e.title for e in events.search("jazz")] == ["Jazz Night", "Book club"]
    assert events.search("piano") == []


def test_by_date_range_is_inclusive(events: EventStore, event_data: dict) -> None:
    for day in ("2025-01-01", "2025-01-15", "2025-01-31", "2025-02-01"):
        events.create({**event_data, "date": day}, "a")

    in_range = events.by_date_range("2025-01-01", "2025-01-31")
    assert [e.date.isoformat() for e in in_range] == ["2025-01-01", "2025-01-15", "2025-01-31"]
    assert len(events.by_date_range(date(2025, 2, 1), date(2025, 12, 31))) == 1


def test_by_creator_is_exact(events: EventStore, event_data: dict) -> None:
    events.create(event_data, "alice")
    events.create(event_data, "Alice")
    events.create(event_data, "bob")

    assert [e.created_by for e in events.by_creator("alice")] == ["alice"]


def test_upcoming_and_past_split_on_schedule(events: EventStore, event_data: dict) -> None:
    events.create({**event_data, "date": "2025-06-01", "time": "09:00"}, "a")
    events.create({**event_data, "date": "2025-06-01", "time": "18:00"}, "a")

    now = datetime(2025, 6, 1, 12, 0)
    assert [e.time for e in events.upcoming(now)] == [time(18, 0)]
    assert [e.time for e in events.past(now)] == [time(9, 0)]


def test_clear_resets_collection_and_ids(events: EventStore, event_data: dict) -> None:
    events.create(event_data, "a")
    events.create(event_data, "a")
    events.clear()

    assert events.count() == 0
    assert events.create(event_data, "a").id == 1


def test_persisted_blob_uses_flat_camel_case_records(adapter: InMemoryPersistenceAdapter, events: EventStore, event_data: dict) -> None:
    events.create(event_data, "alice123")

    records = json.loads(adapter.read("events"))
    assert len(records) == 1
    record = records[0]
    assert record["createdBy"] == "alice123"
    assert record["updatedAt"] is None
    assert record["date"] == "2025-01-01"
    assert record["time"] == "10:00:00"
    assert all(not isinstance(value, (dict, list)) for value in record.values())


def test_reload_round_trip_is_field_for_field_equal(adapter: InMemoryPersistenceAdapter, events: EventStore, event_data: dict) -> None:
    first = events.create(event_data, "a")
    events.create({**event_data, "title": "Second"}, "b")
    events.update(first.id, {**event_data, "title": "First, edited"})

    reloaded = EventStore(adapter)
    assert reloaded.get_all() == events.get_all()
    assert reloaded.create(event_data, "c").id == 3


def test_loads_collection_written_by_earlier_clients() -> None:
    blob = json.dumps([{
        "id": 5,
        "title": "Summer Festival",
        "description": "Music",
        "date": "2025-08-20",
        "time": "10:00",
        "location": "Central Park",
        "createdBy": "admin",
        "createdAt": "2025-07-01T10:00:00.000Z",
        "updatedAt": None,
    }])
    store = EventStore(InMemoryPersistenceAdapter({"events": blob}))

    event = store.get_by_id(5)
    assert event.title == "Summer Festival"
    assert event.created_by == "admin"
    assert store.next_id() == 6


def test_corrupt_blob_starts_empty(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        store = EventStore(InMemoryPersistenceAdapter({"events": "{not json"}))
    assert store.count() == 0
    assert "Error loading events" in caplog.text


def _stored_event(id: int, **overrides) -> dict:
    record = {
        "id": id,
        "title": f"Event {id}",
        "description": "D",
        "date": "2025-08-20",
        "time": "10:00",
        "location": "L",
        "createdBy": "admin",
        "createdAt": "2025-07-01T10:00:00.000Z",
        "updatedAt": None,
    }
    record.update(overrides)
    return record


def test_unreadable_record_is_skipped_and_written_back(event_data: dict, caplog: pytest.LogCaptureFixture) -> None:
    broken = _stored_event(3, time="")
    adapter = InMemoryPersistenceAdapter({
        "events": json.dumps([_stored_event(1), _stored_event(2), broken]),
    })

    with caplog.at_level(logging.ERROR):
        store = EventStore(adapter)
    assert [e.id for e in store.get_all()] == [1, 2]
    assert "Error loading events" in caplog.text

    created = store.create(event_data, "a")
    assert created.id == 4

    persisted = json.loads(adapter.read("events"))
    assert [record["id"] for record in persisted] == [1, 2, 4, 3]
    assert broken in persisted


def test_unreadable_blob_is_not_overwritten_until_cleared(event_data: dict, caplog: pytest.LogCaptureFixture) -> None:
    adapter = InMemoryPersistenceAdapter({"events": "{not json"})
    store = EventStore(adapter)

    with caplog.at_level(logging.ERROR):
        created = store.create(event_data, "a")

    assert store.get_by_id(created.id) == created
    assert adapter.read("events") == "{not json"
    assert "Error saving events" in caplog.text

    store.clear()
    assert adapter.read("events") == "[]"
    store.create(event_data, "a")
    assert len(json.loads(adapter.read("events"))) == 1


def test_timestamps_without_offset_load_as_utc() -> None:
    adapter = InMemoryPersistenceAdapter({
        "events": json.dumps([_stored_event(1, createdAt="2025-07-01T10:00:00", updatedAt="2025-07-02T08:30:00")]),
    })

    event = EventStore(adapter).get_by_id(1)

    assert event.created_at == datetime(2025, 7, 1, 10, 0, tzinfo=timezone.utc)
    assert event.updated_at.tzinfo is not None


def test_write_failure_is_logged_and_memory_stays_authoritative(failing_adapter, event_data: dict, caplog: pytest.LogCaptureFixture) -> None:
    store = EventStore(failing_adapter)

    with caplog.at_level(logging.ERROR):
        created = store.create(event_data, "a")

    assert store.get_by_id(created.id) == created
    assert "Error saving events" in caplog.text
