"""Export, import and transfer history."""

from homestead_transfer.backup.exporter import DataExporter
from homestead_transfer.backup.importer import DataImporter
from homestead_transfer.backup.history import TransferHistoryLog
from homestead_transfer.backup.service import DataTransferService
from homestead_transfer.core.models import ConflictStrategy

__all__ = [
    "DataExporter",
    "DataImporter",
    "TransferHistoryLog",
    "DataTransferService",
    "ConflictStrategy",
]
