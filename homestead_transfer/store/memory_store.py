"""In-process collection store backed by plain dicts."""

import copy
import logging
from typing import Any, Dict, List, Optional

from homestead_transfer.store.base import CollectionStore, Record
from homestead_transfer.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class InMemoryCollectionStore(CollectionStore):
    """
    Dict-backed implementation of the CollectionStore interface.

    Nothing survives the process. Records are deep-copied on the way in and
    on the way out, matching the structured-clone behaviour of browser
    storage.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, Record]] = {}

    async def initialize(self) -> None:
        logger.debug("In-memory store initialized")

    async def get(self, collection: str, record_id: str) -> Optional[Record]:
        record = self._collections.get(collection, {}).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    async def get_all(self, collection: str) -> List[Record]:
        records = self._collections.get(collection, {})
        return [copy.deepcopy(records[key]) for key in sorted(records)]

    async def get_all_by_index(
        self,
        collection: str,
        index_field: str,
        value: Any,
    ) -> List[Record]:
        return [
            record for record in await self.get_all(collection)
            if index_field in record and record[index_field] == value
        ]

    async def put(self, collection: str, record: Record) -> None:
        record_id = record.get("id") if isinstance(record, dict) else None
        if not isinstance(record_id, str) or not record_id:
            raise StorageError(f"Cannot store record without a string id in {collection}")
        self._collections.setdefault(collection, {})[record_id] = copy.deepcopy(record)

    async def delete(self, collection: str, record_id: str) -> bool:
        deleted = self._collections.get(collection, {}).pop(record_id, None) is not None
        if deleted:
            logger.debug(f"Deleted record: {collection}/{record_id}")
        return deleted

    async def close(self) -> None:
        pass

