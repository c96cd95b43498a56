from __future__ import annotations

import pytest

from eventdesk.core.config import Settings
from eventdesk.core.exceptions import PersistenceException
from eventdesk.integrations.persistence import InMemoryPersistenceAdapter, PersistenceAdapter
from eventdesk.repositories.event_repository import EventStore
from eventdesk.services.account_service import AccountStore


class FailingWriteAdapter(PersistenceAdapter):
    """Reads from memory, refuses every write."""

    def __init__(self) -> None:
        self.inner = InMemoryPersistenceAdapter()

    def read(self, name):
        return self.inner.read(name)

    def write(self, name, blob):
        raise PersistenceException(f"disk full while writing {name}")

    def remove(self, name):
        raise PersistenceException(f"disk full while removing {name}")


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def adapter() -> InMemoryPersistenceAdapter:
    return InMemoryPersistenceAdapter()


@pytest.fixture
def failing_adapter() -> FailingWriteAdapter:
    return FailingWriteAdapter()


@pytest.fixture
def events(adapter: InMemoryPersistenceAdapter) -> EventStore:
    return EventStore(adapter)


@pytest.fixture
def accounts(adapter: InMemoryPersistenceAdapter, settings: Settings) -> AccountStore:
    return AccountStore(adapter, settings)


@pytest.fixture
def admin_accounts(accounts: AccountStore) -> AccountStore:
    assert accounts.authenticate("admin", "password") is not None
    return accounts


@pytest.fixture
def user_accounts(accounts: AccountStore) -> AccountStore:
    assert accounts.authenticate("user", "123456") is not None
    return accounts


@pytest.fixture
def event_data() -> dict:
    return {
        "title": "T",
        "description": "D",
        "date": "2025-01-01",
        "time": "10:00",
        "location": "L",
    }


@pytest.fixture
def alice_data() -> dict:
    return {
        "username": "alice123",
        "password": "secret1",
        "email": "a@x.com",
        "fullName": "Alice A",
    }


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'eventdesk.db'}"
