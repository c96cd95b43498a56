from __future__ import annotations

from datetime import datetime

import pytest

from eventdesk.container import build_stores
from eventdesk.core.config import Settings
from eventdesk.core.exceptions import AuthorizationException
from eventdesk.db.seed import SAMPLE_EVENTS, seed_sample_events
from eventdesk.integrations.persistence import InMemoryPersistenceAdapter


@pytest.fixture
def stores(settings: Settings):
    return build_stores(settings, adapter=InMemoryPersistenceAdapter())


def test_build_stores_shares_one_adapter(stores) -> None:
    assert stores.events.adapter is stores.adapter
    assert stores.accounts.adapter is stores.adapter
    assert stores.reports.events is stores.events


def test_seed_sample_events(stores) -> None:
    created = seed_sample_events(stores.events)

    assert [e.title for e in created] == [data["title"] for data in SAMPLE_EVENTS]
    assert [e.title for e in stores.events.by_creator("admin")] == ["Summer Festival"]


def test_dashboard_requires_admin(stores) -> None:
    with pytest.raises(AuthorizationException):
        stores.reports.dashboard()

    stores.accounts.authenticate("user", "123456")
    with pytest.raises(AuthorizationException):
        stores.reports.dashboard()


def test_dashboard_counts(stores) -> None:
    seed_sample_events(stores.events)
    stores.events.create({
        "title": "Late summer picnic",
        "description": "Bring food",
        "date": "2025-08-30",
        "time": "12:00",
        "location": "Riverside",
    }, "admin")
    stores.accounts.authenticate("admin", "password")

    stats = stores.reports.dashboard(now=datetime(2025, 8, 1, 9, 0))

    assert stats.total_events == 3
    assert stats.upcoming_events == 2
    assert stats.past_events == 1
    assert stats.events_this_month == 2
    assert stats.total_users == 2
