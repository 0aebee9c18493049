"""Public entry point for exports, imports and their history."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from homestead_transfer.backup.exporter import DataExporter
from homestead_transfer.backup.history import TransferHistoryLog
from homestead_transfer.backup.importer import DataImporter
from homestead_transfer.config import TransferConfig
from homestead_transfer.core.models import (
    ConflictStrategy, ExportFormat, ExportRecord, ExportResult, ExportScope,
    ImportRecord, ImportResult, TransferArtifact,
)
from homestead_transfer.store.base import CollectionStore
from homestead_transfer.store.factory import create_store

logger = logging.getLogger(__name__)


class DataTransferService:
    """
    Export, import and history over one collection store.

    Calls are not isolated from each other: two imports, or an import and
    ordinary app writes, may interleave on the same collection.
    """

    def __init__(self, store: CollectionStore, config: Optional[TransferConfig] = None):
        if config is None:
            from homestead_transfer.config import get_config
            config = get_config()

        self.store = store
        self.config = config
        self.history = TransferHistoryLog(store, config)
        self.exporter = DataExporter(store, self.history, config)
        self.importer = DataImporter(store, self.history, config)

    @classmethod
    async def create(cls, config: Optional[TransferConfig] = None) -> "DataTransferService":
        """Build a service on the store the configuration selects."""
        if config is None:
            from homestead_transfer.config import get_config
            config = get_config()
        store = await create_store(config)
        return cls(store, config)

    async def export_data(
        self,
        scope: Union[ExportScope, str] = ExportScope.FULL,
        format: Union[ExportFormat, str] = ExportFormat.JSON,
        user_id: Optional[str] = None,
    ) -> ExportResult:
        return await self.exporter.export_data(scope, format, user_id or self.config.default_user_id)

    async def import_data(
        self,
        artifact: TransferArtifact,
        strategy: Union[ConflictStrategy, str] = ConflictStrategy.SKIP,
        user_id: Optional[str] = None,
        dry_run: bool = False,
    ) -> ImportResult:
        return await self.importer.import_data(artifact, strategy, user_id, dry_run)

    async def import_file(
        self,
        path: Union[Path, str],
        strategy: Union[ConflictStrategy, str] = ConflictStrategy.SKIP,
        user_id: Optional[str] = None,
        dry_run: bool = False,
    ) -> ImportResult:
        return await self.importer.import_file(path, strategy, user_id, dry_run)

    async def get_export_history(self, limit: Optional[int] = None) -> List[ExportRecord]:
        return await self.history.get_export_history(limit)

    async def get_import_history(self, limit: Optional[int] = None) -> List[ImportRecord]:
        return await self.history.get_import_history(limit)

    async def close(self) -> None:
        await self.store.close()
