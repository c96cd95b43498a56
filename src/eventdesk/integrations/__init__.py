"""
Persistence integrations package.

This package contains the adapters the stores persist through:
- In-memory: dict-backed, for tests and demos
- Database: SQLAlchemy, one row per collection
- Redis: one key per collection

The database and Redis adapters are imported lazily by
create_persistence_adapter() so that their drivers are only touched
when selected.

Usage:
    from eventdesk.integrations import create_persistence_adapter

    adapter = create_persistence_adapter()
    adapter.write("events", "[]")
"""

from eventdesk.integrations.persistence import (
    PersistenceAdapter,
    InMemoryPersistenceAdapter,
    create_persistence_adapter,
)

__all__ = [
    "PersistenceAdapter",
    "InMemoryPersistenceAdapter",
    "create_persistence_adapter",
]
