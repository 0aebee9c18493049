"""Data import: merge a bundle back into the local store."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from homestead_transfer.backup.history import TransferHistoryLog
from homestead_transfer.config import TransferConfig
from homestead_transfer.core.exceptions import ParseError, StorageError, UnsupportedFormatError
from homestead_transfer.log_utils import get_logger
from homestead_transfer.core.models import (
    ConflictStrategy, ExportFormat, ImportRecord, ImportResult, SyncStatus,
    TransferArtifact, now_ms,
)
from homestead_transfer.store.base import CollectionStore, Record
from homestead_transfer.store.unit_of_work import UnitOfWork

logger = get_logger(__name__)

PARSE_FAILURE_MESSAGE = "Failed to parse file."


class DataImporter:
    """Restore JSON bundles into the local store under a conflict strategy."""

    def __init__(
        self,
        store: CollectionStore,
        history: Optional[TransferHistoryLog] = None,
        config: Optional[TransferConfig] = None,
    ):
        """
        Initialize data importer.

        Args:
            store: Collection store to import into
            history: History log receiving import entries
            config: Transfer configuration. If None, uses global config.
        """
        if config is None:
            from homestead_transfer.config import get_config
            config = get_config()

        self.store = store
        self.config = config
        self.history = history or TransferHistoryLog(store, config)

    async def import_data(
        self,
        artifact: TransferArtifact,
        strategy: Union[ConflictStrategy, str] = ConflictStrategy.SKIP,
        user_id: Optional[str] = None,
        dry_run: bool = False,
    ) -> ImportResult:
        """
        Import every collection found in a bundle.

        The whole bundle is parsed and validated before the first write, so a
        malformed file never leaves partial data behind. Once writing starts,
        a storage failure stops the import; records already written stay.

        Args:
            artifact: Uploaded or previously exported artifact
            strategy: How to treat records whose id already exists
            user_id: User recorded in the history entry
            dry_run: If True, count what would be written without writing

        Returns:
            ImportResult; never raises
        """
        user_id = user_id or self.config.default_user_id
        try:
            strategy = ConflictStrategy(strategy)
        except ValueError:
            valid = ", ".join(s.value for s in ConflictStrategy)
            return ImportResult(
                success=False,
                message=f"Unknown conflict strategy: {strategy}. Valid strategies: {valid}",
            )

        logger.info(
            f"Starting import of {artifact.filename} "
            f"(strategy={strategy.value}, dry_run={dry_run}, {artifact.size} bytes)"
        )

        try:
            collections = self._parse_bundle(artifact)
        except UnsupportedFormatError as e:
            logger.warning_ctx("Import rejected", file=artifact.filename, format=e.format_label)
            return ImportResult(success=False, message=e.message)
        except ParseError as e:
            logger.error_ctx("Import failed to parse", file=artifact.filename, reason=e.message)
            return ImportResult(success=False, message=PARSE_FAILURE_MESSAGE)

        unit = UnitOfWork(self.store, label=f"import {artifact.filename}")
        stats = {"imported": 0, "skipped": 0}
        try:
            async with unit:
                await self._merge(collections, strategy, unit, stats, dry_run)
        except StorageError:
            logger.error_ctx(
                "Import aborted",
                file=artifact.filename,
                written=unit.written,
                exc_info=True,
            )
            return ImportResult(
                success=False,
                message=f"Import aborted after {unit.written} records: storage write failed.",
                record_count=unit.written,
                skipped=stats["skipped"],
            )

        if dry_run:
            return ImportResult(
                success=True,
                message=f"Dry run: {stats['imported']} records would be imported.",
                record_count=stats["imported"],
                skipped=stats["skipped"],
                dry_run=True,
                collections=list(collections),
            )

        try:
            await self.history.record_import(ImportRecord(
                user_id=user_id,
                file_name=artifact.filename,
                record_count=stats["imported"],
                conflict_strategy=strategy,
            ))
        except StorageError:
            logger.error_ctx(
                "Import history entry not saved",
                file=artifact.filename,
                imported=stats["imported"],
                exc_info=True,
            )
            return ImportResult(
                success=False,
                message=(
                    f"Imported {stats['imported']} records, "
                    f"but the import could not be recorded in history."
                ),
                record_count=stats["imported"],
                skipped=stats["skipped"],
                collections=unit.collections,
            )

        logger.info_ctx(
            "Import complete",
            file=artifact.filename,
            strategy=strategy.value,
            imported=stats["imported"],
            skipped=stats["skipped"],
        )
        return ImportResult(
            success=True,
            message=f"Successfully imported {stats['imported']} records.",
            record_count=stats["imported"],
            skipped=stats["skipped"],
            collections=unit.collections,
        )

    async def import_file(
        self,
        path: Union[Path, str],
        strategy: Union[ConflictStrategy, str] = ConflictStrategy.SKIP,
        user_id: Optional[str] = None,
        dry_run: bool = False,
    ) -> ImportResult:
        """Read a file fully into memory, then import it."""
        path = Path(path).expanduser()
        try:
            artifact = TransferArtifact.from_path(path)
        except OSError as e:
            logger.error_ctx("Cannot read import file", path=str(path), reason=str(e))
            return ImportResult(success=False, message=f"Cannot read file: {path.name}")
        return await self.import_data(artifact, strategy, user_id, dry_run)

    async def _merge(
        self,
        collections: Dict[str, List[Record]],
        strategy: ConflictStrategy,
        unit: UnitOfWork,
        stats: Dict[str, int],
        dry_run: bool,
    ) -> None:
        """Apply the conflict strategy record by record, collection by collection."""
        effective = strategy.effective()
        if effective is not strategy:
            logger.info(
                f"Strategy '{strategy.value}' keeps record ids and is applied as "
                f"'{effective.value}'"
            )

        for collection, records in collections.items():
            for record in records:
                existing = await self.store.get(collection, record["id"])

                if existing is not None and effective is ConflictStrategy.SKIP:
                    stats["skipped"] += 1
                    continue

                stats["imported"] += 1
                if dry_run:
                    continue

                record["syncStatus"] = SyncStatus.PENDING.value
                record["updatedAt"] = now_ms()
                await unit.put(collection, record)

    def _parse_bundle(self, artifact: TransferArtifact) -> Dict[str, List[Record]]:
        """
        Decode and validate an artifact into collection name -> records.

        Raises:
            UnsupportedFormatError: If the artifact is not JSON
            ParseError: If the content is not a valid bundle
        """
        try:
            content = artifact.text()
        except UnicodeDecodeError as e:
            raise ParseError(f"Artifact is not UTF-8 text: {e}") from e

        detected = detect_format(artifact.filename, content)
        if detected is not ExportFormat.JSON:
            label = detected.value.upper() if detected else (artifact.suffix.upper() or "Unrecognized")
            raise UnsupportedFormatError(label)

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON: {e}") from e
        except RecursionError as e:
            raise ParseError("JSON nesting too deep to decode") from e

        if not isinstance(data, dict):
            raise ParseError(f"Bundle must be a JSON object, got {type(data).__name__}")

        meta = data.pop("meta", None)
        self._check_meta(meta)

        # History is only ever appended through TransferHistoryLog
        history_collections = {
            self.config.export_history_collection,
            self.config.import_history_collection,
        }

        collections: Dict[str, List[Record]] = {}
        for collection, records in data.items():
            if collection in history_collections:
                logger.warning_ctx(
                    "Ignoring history collection in bundle",
                    collection=collection,
                    records=len(records) if isinstance(records, list) else None,
                )
                continue
            if not isinstance(records, list):
                logger.debug(f"Ignoring non-list entry '{collection}' in bundle")
                continue
            for position, record in enumerate(records):
                if not isinstance(record, dict):
                    raise ParseError(f"{collection}[{position}] is not an object")
                record_id = record.get("id")
                if not isinstance(record_id, str) or not record_id:
                    raise ParseError(f"{collection}[{position}] has no string id")
            collections[collection] = records

        return collections

    def _check_meta(self, meta: Any) -> None:
        """Log bundle metadata. It never reaches the store."""
        if not isinstance(meta, dict):
            logger.debug("Bundle has no meta block")
            return

        version = meta.get("version")
        if version != self.config.bundle_version:
            logger.warning_ctx(
                "Bundle version differs; importing without migration",
                bundle_version=version,
                expected_version=self.config.bundle_version,
            )
        logger.info(
            f"Bundle exported at {meta.get('exportedAt')} "
            f"(scope={meta.get('scope')}, user={meta.get('userId')})"
        )


def detect_format(filename: str, content: str) -> Optional[ExportFormat]:
    """
    Narrow format sniffing: a .json name or a leading '{' means JSON,
    a .csv name means CSV, anything else is unrecognized.
    """
    name = filename.lower()
    if name.endswith(".json") or content.lstrip().startswith("{"):
        return ExportFormat.JSON
    if name.endswith(".csv"):
        return ExportFormat.CSV
    return None
