"""
Base repository with generic collection operations.

This module provides a generic CollectionRepository class that keeps an
ordered in-memory collection of pydantic records, assigns integer ids and
writes the whole collection through a PersistenceAdapter after every
mutation. All domain-specific repositories should extend this base class.
"""

import json
import logging
from typing import Any, Callable, Generic, List, Optional, Type, TypeVar

from pydantic import ValidationError

from eventdesk.core.exceptions import PersistenceException
from eventdesk.integrations.persistence import PersistenceAdapter
from eventdesk.schemas.common import RecordModel

logger = logging.getLogger("BASE_REPOSITORY")

# Generic type bound to stored records
RecordType = TypeVar("RecordType", bound=RecordModel)


def coerce_id(id: Any) -> Optional[int]:
    """Integer form of id, or None when it cannot be interpreted as one."""
    if isinstance(id, bool):
        return None
    try:
        return int(id)
    except (TypeError, ValueError):
        return None


class CollectionRepository(Generic[RecordType]):
    """
    Generic base repository over one persisted collection.

    The in-memory list is the authority between writes. Records handed out
    are deep copies, so callers cannot mutate repository state through them.

    Type Parameters:
        RecordType: The record schema this repository manages

    Example:
        class NoteRepository(CollectionRepository[Note]):
            def __init__(self, adapter: PersistenceAdapter):
                super().__init__(Note, adapter, "notes")

            def by_author(self, author: str) -> List[Note]:
                return self.filter(lambda note: note.author == author)
    """

    def __init__(self, model: Type[RecordType], adapter: PersistenceAdapter, collection_name: str):
        """
        Initialize the repository and load the persisted collection.

        Args:
            model: The record schema class
            adapter: Persistence adapter holding the collection blob
            collection_name: Key of the collection in the adapter
        """
        self.model = model
        self.adapter = adapter
        self.collection_name = collection_name
        # False only when the adapter has never held this collection
        self.storage_initialized = True
        # Raw items that failed validation; written back unchanged
        self._unreadable: List[Any] = []
        # Set when the stored collection could not be read at all
        self._write_blocked = False
        self._records: List[RecordType] = self._load()
        self._next_id = self._compute_next_id()

    # ========================================================================
    # Persistence
    # ========================================================================

    def _load(self) -> List[RecordType]:
        try:
            blob = self.adapter.read(self.collection_name)
        except PersistenceException as e:
            logger.error(f"Error loading {self.collection_name}: {e.message}")
            self._write_blocked = True
            return []

        if blob is None:
            self.storage_initialized = False
            return []

        try:
            raw = json.loads(blob)
            if not isinstance(raw, list):
                raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
        except ValueError as e:
            logger.error(f"Error loading {self.collection_name}: {e}")
            self._write_blocked = True
            return []

        records: List[RecordType] = []
        for position, item in enumerate(raw):
            try:
                records.append(self.model.model_validate(item))
            except ValidationError as e:
                logger.error(
                    f"Error loading {self.collection_name}: skipping record at position "
                    f"{position}: {e.error_count()} invalid field(s)"
                )
                self._unreadable.append(item)
        return records

    def serialize(self) -> str:
        """Collection as the JSON array written to the adapter; unreadable records are kept as found."""
        return json.dumps([record.to_record() for record in self._records] + self._unreadable)

    def persist(self) -> bool:
        """
        Write the collection to the adapter.

        Failures are logged and absorbed; the in-memory collection stays
        authoritative for the rest of the session. Nothing is written while
        the stored collection could not be read, until clear() rewrites it.

        Returns:
            True if the write succeeded
        """
        if self._write_blocked:
            logger.error(
                f"Error saving {self.collection_name}: stored collection could not be read, "
                f"not overwriting it"
            )
            return False
        try:
            self.adapter.write(self.collection_name, self.serialize())
            return True
        except PersistenceException as e:
            logger.error(f"Error saving {self.collection_name}: {e.message}")
            return False

    def _compute_next_id(self) -> int:
        ids = [record.id for record in self._records]
        ids.extend(
            coerce_id(item.get("id")) or 0
            for item in self._unreadable if isinstance(item, dict)
        )
        return max(ids, default=0) + 1

    def next_id(self) -> int:
        """Reserve and return the next unused id."""
        id = self._next_id
        self._next_id += 1
        return id

    # ========================================================================
    # Reads
    # ========================================================================

    def _index_of(self, id: Any) -> Optional[int]:
        key = coerce_id(id)
        if key is None:
            return None
        for index, record in enumerate(self._records):
            if record.id == key:
                return index
        return None

    def get(self, id: Any) -> Optional[RecordType]:
        """
        Get a single record by ID.

        Args:
            id: Record id; strings holding integers are accepted

        Returns:
            Copy of the record or None if not found
        """
        index = self._index_of(id)
        if index is None:
            return None
        return self._records[index].model_copy(deep=True)

    def get_all(self) -> List[RecordType]:
        """Copies of every record, in insertion order."""
        return [record.model_copy(deep=True) for record in self._records]

    def find(self, predicate: Callable[[RecordType], bool]) -> Optional[RecordType]:
        """Copy of the first record matching predicate, or None."""
        for record in self._records:
            if predicate(record):
                return record.model_copy(deep=True)
        return None

    def filter(self, predicate: Callable[[RecordType], bool]) -> List[RecordType]:
        """Copies of every record matching predicate, order-preserving."""
        return [record.model_copy(deep=True) for record in self._records if predicate(record)]

    def count(self, predicate: Optional[Callable[[RecordType], bool]] = None) -> int:
        if predicate is None:
            return len(self._records)
        return sum(1 for record in self._records if predicate(record))

    # ========================================================================
    # Writes
    # ========================================================================

    def add(self, record: RecordType) -> RecordType:
        """
        Append a record and persist.

        Args:
            record: Record with its id already assigned

        Returns:
            Copy of the stored record
        """
        self._records.append(record.model_copy(deep=True))
        self._next_id = max(self._next_id, record.id + 1)
        self.persist()
        return record.model_copy(deep=True)

    def replace(self, record: RecordType) -> Optional[RecordType]:
        """
        Replace the stored record with the same id and persist.

        Returns:
            Copy of the stored record, or None if no record has that id
        """
        index = self._index_of(record.id)
        if index is None:
            return None
        self._records[index] = record.model_copy(deep=True)
        self.persist()
        return record.model_copy(deep=True)

    def update_fields(self, id: Any, **changes: Any) -> Optional[RecordType]:
        """
        Set attributes on the stored record with the given id and persist.

        Returns:
            Copy of the updated record, or None if not found
        """
        index = self._index_of(id)
        if index is None:
            return None
        self._records[index] = self._records[index].model_copy(update=changes)
        self.persist()
        return self._records[index].model_copy(deep=True)

    def remove(self, id: Any) -> Optional[RecordType]:
        """
        Remove a record by ID and persist.

        Returns:
            The removed record, or None if not found
        """
        index = self._index_of(id)
        if index is None:
            return None
        removed = self._records.pop(index)
        self.persist()
        return removed

    def clear(self) -> None:
        """
        Remove every record, reset id assignment to 1 and persist.

        This deliberately replaces whatever is stored, including records that
        could not be read.
        """
        self._records = []
        self._unreadable = []
        self._write_blocked = False
        self._next_id = 1
        self.persist()
