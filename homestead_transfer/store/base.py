"""Abstract base class for collection storage backends."""

from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any

Record = Dict[str, Any]


class CollectionStore(ABC):
    """
    Abstract base class defining the interface for collection storage backends.

    Records are JSON-compatible dicts keyed by ``(collection, record["id"])``.
    Collection names are open strings; a store never rejects a collection
    just because it has not seen it before. Implementations hand out copies,
    so callers never hold references into persisted state.

    Puts are idempotent upserts. There are no transactions: concurrent
    callers writing the same collection interleave record by record.
    """

    @abstractmethod
    async def get(self, collection: str, record_id: str) -> Optional[Record]:
        """
        Retrieve a single record.

        Args:
            collection: Collection name.
            record_id: Record id.

        Returns:
            The record, or None if it does not exist.

        Raises:
            StorageError: If the read fails.
        """
        pass

    @abstractmethod
    async def get_all(self, collection: str) -> List[Record]:
        """
        Retrieve every record of a collection, ordered by id.

        Returns an empty list for an unknown or empty collection.
        """
        pass

    @abstractmethod
    async def get_all_by_index(
        self,
        collection: str,
        index_field: str,
        value: Any,
    ) -> List[Record]:
        """
        Retrieve records whose ``index_field`` equals ``value``.

        Records that lack the field never match.
        """
        pass

    @abstractmethod
    async def put(self, collection: str, record: Record) -> None:
        """
        Insert or replace a record by its id.

        Raises:
            StorageError: If the record has no id or the write fails.
        """
        pass

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> bool:
        """
        Delete a record by its id.

        Returns:
            bool: True if deleted, False if not found.
        """
        pass

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the storage backend (create tables, open connections)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close connections and clean up resources."""
        pass

    async def health_check(self) -> bool:
        """Check if the storage backend is healthy and accessible."""
        return True

    async def count(self, collection: str) -> int:
        """Count records in a collection."""
        return len(await self.get_all(collection))
