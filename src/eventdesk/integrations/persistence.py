"""
Persistence adapter interface and the in-memory implementation.

A persistence adapter stores one opaque serialized blob per collection name.
Adapters are synchronous; read() returns None when nothing was ever written
under a name, and write()/remove() raise PersistenceException on failure.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import logging

from eventdesk.core.config import Settings, get_settings
from eventdesk.core.exceptions import ConfigurationException, PersistenceException

logger = logging.getLogger(__name__)


class PersistenceAdapter(ABC):
    """Abstract key-value store of serialized collections."""

    @abstractmethod
    def read(self, name: str) -> Optional[str]:
        """Return the blob stored under name, or None if absent."""

    @abstractmethod
    def write(self, name: str, blob: str) -> None:
        """Store blob under name, replacing any previous value."""

    @abstractmethod
    def remove(self, name: str) -> None:
        """Delete the blob stored under name; no-op when absent."""


class InMemoryPersistenceAdapter(PersistenceAdapter):
    """Dict-backed adapter; durable only for the lifetime of the object."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._blobs: Dict[str, str] = dict(initial or {})

    def read(self, name: str) -> Optional[str]:
        return self._blobs.get(name)

    def write(self, name: str, blob: str) -> None:
        if not isinstance(blob, str):
            raise PersistenceException(f"Blob for '{name}' must be a string")
        self._blobs[name] = blob

    def remove(self, name: str) -> None:
        self._blobs.pop(name, None)

    def snapshot(self) -> Dict[str, str]:
        """Copy of every stored blob."""
        return dict(self._blobs)


def create_persistence_adapter(settings: Optional[Settings] = None) -> PersistenceAdapter:
    """
    Build the adapter selected by Settings.storage_backend.

    Args:
        settings: Application settings (defaults to get_settings())

    Returns:
        PersistenceAdapter for memory, database or redis

    Raises:
        ConfigurationException: If the backend name is unknown
    """
    settings = settings or get_settings()
    backend = settings.storage_backend

    if backend == "memory":
        return InMemoryPersistenceAdapter()
    if backend == "database":
        from eventdesk.integrations.database_adapter import DatabasePersistenceAdapter
        return DatabasePersistenceAdapter(settings.database_url, settings=settings)
    if backend == "redis":
        from eventdesk.integrations.redis_client import RedisPersistenceAdapter
        return RedisPersistenceAdapter(settings.redis_url, key_prefix=settings.redis_key_prefix)

    raise ConfigurationException(
        f"Unknown storage backend: {backend}",
        {"storage_backend": backend},
    )
