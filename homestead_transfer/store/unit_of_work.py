"""Write boundary for multi-record store operations."""

import logging
from typing import List

from homestead_transfer.store.base import CollectionStore, Record

logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Groups the writes of one logical operation (for example one import).

    Writes pass straight through to the store as they are made. When the
    block raises, records already written stay written: the unit logs how far
    it got and lets the exception propagate. There is no isolation from other
    writers either. Commit and rollback hooks belong here if the store ever
    grows transactions.
    """

    def __init__(self, store: CollectionStore, label: str = "unit-of-work"):
        """
        Initialize unit of work.

        Args:
            store: Store receiving the writes
            label: Name used in log messages
        """
        self.store = store
        self.label = label
        self.written = 0
        self._collections: List[str] = []

    @property
    def collections(self) -> List[str]:
        """Collections written to, in first-write order."""
        return list(self._collections)

    async def put(self, collection: str, record: Record) -> None:
        """Write a record through to the store and track it."""
        await self.store.put(collection, record)
        self.written += 1
        if collection not in self._collections:
            self._collections.append(collection)

    async def __aenter__(self):
        """Async context manager entry."""
        logger.debug(f"{self.label}: started")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if exc_type is not None:
            logger.error(
                f"{self.label}: aborted after {self.written} writes "
                f"({', '.join(self._collections) or 'no collections'}); "
                f"written records are not rolled back"
            )
        else:
            logger.debug(f"{self.label}: finished with {self.written} writes")
        return False
