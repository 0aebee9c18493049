"""Append-only ledger of completed exports and imports."""

import logging
from typing import List, Optional, Type, TypeVar

import pydantic

from homestead_transfer.config import TransferConfig
from homestead_transfer.core.exceptions import StorageError
from homestead_transfer.core.models import CamelModel, ExportRecord, ImportRecord
from homestead_transfer.store.base import CollectionStore

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=CamelModel)


class TransferHistoryLog:
    """
    Export and import history kept in two store collections.

    Entries are written once and never updated or deleted; the log exposes
    no operation that could do either.
    """

    def __init__(self, store: CollectionStore, config: Optional[TransferConfig] = None):
        """
        Initialize history log.

        Args:
            store: Store holding the history collections
            config: Transfer configuration. If None, uses global config.
        """
        if config is None:
            from homestead_transfer.config import get_config
            config = get_config()

        self.store = store
        self.export_collection = config.export_history_collection
        self.import_collection = config.import_history_collection

    async def record_export(self, entry: ExportRecord) -> ExportRecord:
        """Append an export entry."""
        await self._append(self.export_collection, entry)
        logger.info(
            f"Recorded export {entry.id}: scope={entry.scope.value} "
            f"format={entry.format.value} records={entry.record_count}"
        )
        return entry

    async def record_import(self, entry: ImportRecord) -> ImportRecord:
        """Append an import entry."""
        await self._append(self.import_collection, entry)
        logger.info(
            f"Recorded import {entry.id}: strategy={entry.conflict_strategy.value} "
            f"records={entry.record_count}"
        )
        return entry

    async def get_export_history(self, limit: Optional[int] = None) -> List[ExportRecord]:
        """Export entries, newest first."""
        return await self._read(self.export_collection, ExportRecord, limit)

    async def get_import_history(self, limit: Optional[int] = None) -> List[ImportRecord]:
        """Import entries, newest first."""
        return await self._read(self.import_collection, ImportRecord, limit)

    async def _append(self, collection: str, entry: CamelModel) -> None:
        if await self.store.get(collection, entry.id) is not None:
            raise StorageError(
                f"History entry {entry.id} already exists in {collection}; "
                f"history entries are append-only"
            )
        await self.store.put(collection, entry.to_document())

    async def _read(
        self,
        collection: str,
        model: Type[EntryT],
        limit: Optional[int],
    ) -> List[EntryT]:
        entries = []
        for document in await self.store.get_all(collection):
            try:
                entries.append(model.model_validate(document))
            except pydantic.ValidationError as e:
                logger.warning(f"Skipping malformed history entry {document.get('id')} in {collection}: {e}")

        entries.sort(key=lambda entry: entry.created_at, reverse=True)
        if limit is not None:
            entries = entries[:limit]
        return entries
