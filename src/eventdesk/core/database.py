"""
Database connection and session management.

This module handles:
- Database engine creation with connection pooling
- Session factory setup
- Connection health checks
- Retry logic for database initialization

Nothing is created at import time; the composition root builds one engine
per DatabasePersistenceAdapter.
"""

import time
import logging
from typing import Dict, Any, Optional, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from eventdesk.core.config import Settings, get_settings
from eventdesk.core.exceptions import DatabaseException

logger = logging.getLogger('CORE_DATABASE')

RETRY_DELAYS = (1, 2, 3, 5, 8)


def _mask_url(url: str) -> str:
    if "@" not in url or "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    username = credentials.split(":", 1)[0]
    return f"{scheme}://{username}:***@{host}"


def is_sqlite_url(url: str) -> bool:
    """Whether url points at SQLite, which takes no pool options."""
    return url.startswith("sqlite")


def create_database_engine(
    database_url: Optional[str] = None,
    settings: Optional[Settings] = None,
    retry_delays: Sequence[int] = RETRY_DELAYS,
) -> Engine:
    """
    Create an engine and verify the connection, retrying while the server starts.

    Args:
        database_url: SQLAlchemy URL (defaults to settings)
        settings: Settings providing pool options
        retry_delays: Seconds to wait between connection attempts

    Returns:
        Engine: Connected SQLAlchemy engine

    Raises:
        DatabaseException: If no connection could be established
    """
    settings = settings or get_settings()
    url = database_url or settings.database_url

    engine_config: Dict[str, Any] = {"echo": settings.db_echo}
    if not is_sqlite_url(url):
        engine_config.update({
            'pool_size': settings.db_pool_size,
            'max_overflow': settings.db_max_overflow,
            'pool_pre_ping': settings.db_pool_pre_ping,
        })

    logger.info(f"Initializing database connection to: {_mask_url(url)}")

    attempts = max(len(retry_delays), 1)
    for i in range(attempts):
        try:
            engine = create_engine(url, **engine_config)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info(f"Database connection established successfully on attempt {i+1}")
            return engine
        except OperationalError as e:
            logger.error(f"Database not ready (attempt {i+1}/{attempts}): {e}")
            if i < attempts - 1:
                delay = retry_delays[i]
                logger.info(f"Retrying in {delay} seconds...")
                time.sleep(delay)
            else:
                raise DatabaseException(
                    f"Could not connect to the database after {attempts} attempts"
                ) from e
    raise DatabaseException("Database engine could not be created")


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_database_health(engine: Engine) -> Dict[str, Any]:
    """
    Check database connection health and return status.

    Returns:
        dict: Health status with connection pool information

    Example:
        {
            "status": "healthy",
            "connection_pool": "Pool size: 5  Connections in pool: 0 ..."
        }
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
            return {
                "status": "healthy",
                "connection_pool": engine.pool.status(),
                "url": _mask_url(str(engine.url)),
            }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "url": _mask_url(str(engine.url)),
        }
