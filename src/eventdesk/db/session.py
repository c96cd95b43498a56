"""
Database session management utilities and context managers.

This module provides session helpers for working with SQLAlchemy sessions
in a safe and consistent manner.
"""

from contextlib import contextmanager
from typing import Generator
from sqlalchemy.orm import Session, sessionmaker

from eventdesk.core.exceptions import DatabaseException


@contextmanager
def session_scope(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for database sessions with automatic cleanup.

    Provides a database session that automatically commits on success
    and rolls back on exceptions.

    Yields:
        Session: SQLAlchemy database session

    Raises:
        DatabaseException: If database operation fails

    Example:
        with session_scope(factory) as db:
            row = db.get(StoredCollection, "events")
            row.payload = "[]"
            # Automatically commits on exit
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        raise DatabaseException(f"Database operation failed: {str(e)}") from e
    finally:
        db.close()
