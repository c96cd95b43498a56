"""
Repositories package.

This package contains the data access layer. Each repository extends
CollectionRepository and owns one persisted collection.

Usage:
    from eventdesk.integrations import InMemoryPersistenceAdapter
    from eventdesk.repositories import EventStore

    events = EventStore(InMemoryPersistenceAdapter())
    events.create({...}, created_by="admin")
"""

from eventdesk.repositories.base import CollectionRepository, coerce_id
from eventdesk.repositories.event_repository import EventStore
from eventdesk.repositories.account_repository import AccountRepository

__all__ = [
    "CollectionRepository",
    "coerce_id",
    "EventStore",
    "AccountRepository",
]
