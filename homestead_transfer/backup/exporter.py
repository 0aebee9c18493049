"""Data export: bundle a scope's collections into a portable artifact."""

import csv
import io
import json
from typing import Any, Dict, List, Optional, Union
from datetime import datetime, UTC

from homestead_transfer.backup.history import TransferHistoryLog
from homestead_transfer.backup.scopes import collections_for, resolve_scope
from homestead_transfer.config import TransferConfig
from homestead_transfer.core.exceptions import HomesteadError
from homestead_transfer.log_utils import get_logger
from homestead_transfer.core.models import (
    BundleMeta, ExportFormat, ExportRecord, ExportResult, ExportScope, TransferArtifact,
)
from homestead_transfer.store.base import CollectionStore, Record

logger = get_logger(__name__)


class DataExporter:
    """Export collections of the local store as JSON bundles or CSV tables."""

    def __init__(
        self,
        store: CollectionStore,
        history: Optional[TransferHistoryLog] = None,
        config: Optional[TransferConfig] = None,
    ):
        """
        Initialize data exporter.

        Args:
            store: Collection store to export from
            history: History log receiving export entries
            config: Transfer configuration. If None, uses global config.
        """
        if config is None:
            from homestead_transfer.config import get_config
            config = get_config()

        self.store = store
        self.config = config
        self.history = history or TransferHistoryLog(store, config)

    async def export_data(
        self,
        scope: Union[ExportScope, str],
        format: Union[ExportFormat, str],
        user_id: str,
    ) -> ExportResult:
        """
        Export every populated collection of a scope.

        Args:
            scope: Export scope; unknown values fall back to 'full'
            format: json (complete bundle) or csv (first populated collection only)
            user_id: User recorded in the bundle meta and history entry

        Returns:
            ExportResult holding the artifact and its filename. Failures are
            returned with success=False rather than raised.
        """
        scope = resolve_scope(scope)
        try:
            format = ExportFormat(format)
        except ValueError:
            logger.warning_ctx("Unsupported export format", format=str(format))
            return ExportResult(success=False, message=f"Unsupported export format: {format}")

        try:
            logger.info(f"Starting {format.value} export (scope={scope.value}, user={user_id})")

            bundle, record_count = await self._gather(scope)

            if format is ExportFormat.JSON:
                bundle["meta"] = BundleMeta(
                    version=self.config.bundle_version,
                    scope=scope,
                    user_id=user_id,
                ).to_document()
                content = self._to_json(bundle)
            else:
                content = self._to_csv(bundle)

            filename = self.build_filename(scope, format)
            artifact = TransferArtifact(
                filename=filename,
                content=content.encode("utf-8"),
                mime_type=format.mime_type,
            )

            await self.history.record_export(ExportRecord(
                user_id=user_id,
                scope=scope,
                format=format,
                record_count=record_count,
                file_size=artifact.size,
                file_name=filename,
            ))

            logger.info_ctx(
                "Export complete",
                scope=scope.value,
                format=format.value,
                records=record_count,
                bytes=artifact.size,
                filename=filename,
            )
            return ExportResult(
                success=True,
                message=f"Exported {record_count} records.",
                artifact=artifact,
                filename=filename,
                bundle=bundle,
                record_count=record_count,
            )

        except HomesteadError:
            logger.error_ctx("Export failed", scope=scope.value, format=format.value, exc_info=True)
            return ExportResult(success=False, message="Export failed.")
        except (TypeError, ValueError):
            # A stored record holds a value json cannot encode
            logger.error_ctx(
                "Export failed to serialize records",
                scope=scope.value,
                format=format.value,
                exc_info=True,
            )
            return ExportResult(success=False, message="Export failed.")

    async def _gather(self, scope: ExportScope) -> tuple[Dict[str, Any], int]:
        """Read every collection of the scope, omitting empty ones."""
        bundle: Dict[str, Any] = {}
        record_count = 0

        for collection in collections_for(scope):
            records = await self.store.get_all(collection)
            if records:
                bundle[collection] = records
                record_count += len(records)
                logger.debug(f"Gathered {len(records)} records from {collection}")

        return bundle, record_count

    def _to_json(self, bundle: Dict[str, Any]) -> str:
        indent = self.config.json_indent or None
        return json.dumps(bundle, indent=indent, ensure_ascii=False)

    def _to_csv(self, bundle: Dict[str, Any]) -> str:
        """
        Flatten the first populated collection into a CSV table.

        Only one collection fits a flat table; every other collection in the
        bundle is left out of the CSV artifact.
        """
        collection = next(iter(bundle), None)
        if collection is None:
            return ""

        rows: List[Record] = bundle[collection]
        dropped = [name for name in bundle if name != collection]
        if dropped:
            logger.info(f"CSV export covers '{collection}' only; left out: {', '.join(dropped)}")

        headers = list(rows[0].keys())
        buffer = io.StringIO()
        buffer.write(",".join(headers) + "\n")

        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for row in rows:
            writer.writerow([_csv_cell(row.get(header)) for header in headers])

        return buffer.getvalue().rstrip("\n")

    @staticmethod
    def build_filename(
        scope: ExportScope,
        format: ExportFormat,
        when: Optional[datetime] = None,
    ) -> str:
        """Filename of the form homestead_<scope>_<YYYY-MM-DD>.<ext> (UTC date)."""
        when = when or datetime.now(UTC)
        return f"homestead_{scope.value}_{when.strftime('%Y-%m-%d')}.{format.value}"


def _csv_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)
