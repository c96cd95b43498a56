"""
SQLAlchemy-backed persistence adapter.

Stores each collection as one row of the ``stored_collections`` table.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from eventdesk.core.config import Settings
from eventdesk.core.database import create_database_engine, create_session_factory, get_database_health
from eventdesk.core.exceptions import DatabaseException
from eventdesk.db.session import session_scope
from eventdesk.integrations.persistence import PersistenceAdapter
from eventdesk.models import Base, StoredCollection

logger = logging.getLogger("DATABASE_ADAPTER")


class DatabasePersistenceAdapter(PersistenceAdapter):
    """
    Persistence adapter writing collection blobs through SQLAlchemy.

    Example:
        adapter = DatabasePersistenceAdapter("sqlite:///eventdesk.db")
        adapter.write("events", "[]")
        adapter.read("events")  # "[]"
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        engine: Optional[Engine] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the adapter and ensure the table exists.

        Args:
            database_url: SQLAlchemy URL, used when no engine is given
            engine: Existing engine to reuse
            settings: Settings providing engine options
        """
        self.engine = engine or create_database_engine(database_url, settings=settings)
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise DatabaseException("Failed to create stored_collections table") from e
        self._session_factory = create_session_factory(self.engine)
        logger.info("Database persistence ready")

    def read(self, name: str) -> Optional[str]:
        with session_scope(self._session_factory) as db:
            row = db.get(StoredCollection, name)
            return row.payload if row is not None else None

    def write(self, name: str, blob: str) -> None:
        with session_scope(self._session_factory) as db:
            row = db.get(StoredCollection, name)
            if row is None:
                db.add(StoredCollection(name=name, payload=blob))
            else:
                row.payload = blob

    def remove(self, name: str) -> None:
        with session_scope(self._session_factory) as db:
            row = db.get(StoredCollection, name)
            if row is not None:
                db.delete(row)

    def get_health_status(self) -> Dict[str, Any]:
        return get_database_health(self.engine)

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self.engine.dispose()
