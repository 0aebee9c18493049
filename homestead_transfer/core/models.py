"""Core data models for Homestead Transfer.

Models serialize with camelCase keys so stored documents and bundles keep
the wire format shared with the rest of the homestead app.
"""

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime, UTC
from enum import Enum
from pathlib import Path
from typing import List, Optional, Dict, Any
from uuid import uuid4


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(datetime.now(UTC).timestamp() * 1000)


class ExportScope(str, Enum):
    """Named subsets of collections eligible for export."""

    FULL = "full"
    GARDEN = "garden"
    LIVESTOCK = "livestock"
    TASKS = "tasks"
    FINANCES = "finances"
    ORCHARD = "orchard"
    APIARY = "apiary"


class ExportFormat(str, Enum):
    """Artifact formats."""

    JSON = "json"  # Full fidelity, all collections, restorable
    CSV = "csv"  # Single-collection projection, export only

    @property
    def mime_type(self) -> str:
        return "application/json" if self is ExportFormat.JSON else "text/csv"


class ConflictStrategy(str, Enum):
    """Strategy for handling imported records whose id already exists locally."""

    SKIP = "skip"  # Keep the existing record untouched
    OVERWRITE = "overwrite"  # Replace the existing record with the imported one
    COPY = "copy"  # Currently resolved as OVERWRITE, see effective()

    @property
    def description(self) -> str:
        """User-facing description of the strategy."""
        return _STRATEGY_DESCRIPTIONS[self]

    def effective(self) -> "ConflictStrategy":
        """
        Strategy actually applied to colliding records.

        COPY would need fresh ids, and fresh ids break every foreign key other
        collections hold (sire/dam, herd, bed, tree and hive references). There
        is no remapping of those references, so COPY keeps ids and overwrites.
        """
        if self is ConflictStrategy.COPY:
            return ConflictStrategy.OVERWRITE
        return self


_STRATEGY_DESCRIPTIONS = {
    ConflictStrategy.SKIP: "Skip if ID exists (safe). Existing records are left untouched.",
    ConflictStrategy.OVERWRITE: "Overwrite existing (restore). Local records are replaced by file records.",
    ConflictStrategy.COPY: (
        "Create copies (not recommended). Ids are kept to protect references "
        "between records, so this currently behaves like overwrite."
    ),
}


class TransferStatus(str, Enum):
    """Status of a transfer history entry."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class SyncStatus(str, Enum):
    """Whether a record has been reconciled with an external system."""

    PENDING = "pending"
    SYNCED = "synced"


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_document(self) -> Dict[str, Any]:
        """JSON-compatible dict with camelCase keys, as stored or serialized."""
        return self.model_dump(mode="json", by_alias=True)


class BundleMeta(CamelModel):
    """Metadata block embedded in a JSON bundle under the `meta` key."""

    version: int = 1
    exported_at: int = Field(default_factory=now_ms)
    scope: ExportScope = ExportScope.FULL
    user_id: str


class TransferArtifact(CamelModel):
    """A serialized bundle plus the name it is saved or uploaded under."""

    filename: str
    content: bytes
    mime_type: str = "application/json"

    @property
    def size(self) -> int:
        """Artifact size in bytes."""
        return len(self.content)

    @property
    def suffix(self) -> str:
        """Lower-cased file extension without the dot."""
        return Path(self.filename).suffix.lower().lstrip(".")

    def text(self) -> str:
        """Decode content as UTF-8, tolerating a byte order mark."""
        return self.content.decode("utf-8-sig")

    @classmethod
    def from_path(cls, path: Path) -> "TransferArtifact":
        """Read an artifact from disk. The whole file is loaded into memory."""
        path = Path(path)
        mime_type = "text/csv" if path.suffix.lower() == ".csv" else "application/json"
        return cls(filename=path.name, content=path.read_bytes(), mime_type=mime_type)

    def write_to(self, directory: Path) -> Path:
        """Write the artifact into directory and return the file path."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        output_path = directory / self.filename
        output_path.write_bytes(self.content)
        return output_path


class ExportRecord(CamelModel):
    """Immutable history entry for a completed export."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    scope: ExportScope
    format: ExportFormat
    record_count: int = Field(ge=0)
    file_size: int = Field(ge=0)
    file_name: str
    status: TransferStatus = TransferStatus.COMPLETED
    created_at: int = Field(default_factory=now_ms)
    updated_at: int = Field(default_factory=now_ms)
    sync_status: SyncStatus = SyncStatus.PENDING


class ImportRecord(CamelModel):
    """Immutable history entry for a completed import."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    file_name: str
    scope: ExportScope = ExportScope.FULL
    record_count: int = Field(ge=0)
    conflict_strategy: ConflictStrategy
    status: TransferStatus = TransferStatus.COMPLETED
    created_at: int = Field(default_factory=now_ms)
    updated_at: int = Field(default_factory=now_ms)
    sync_status: SyncStatus = SyncStatus.PENDING


class ExportResult(CamelModel):
    """Outcome of an export call. Download or save is left to the caller."""

    success: bool
    message: str
    artifact: Optional[TransferArtifact] = None
    filename: Optional[str] = None
    bundle: Dict[str, Any] = Field(default_factory=dict)
    record_count: int = 0


class ImportResult(CamelModel):
    """Outcome of an import call."""

    success: bool
    message: str
    record_count: int = 0
    skipped: int = 0
    dry_run: bool = False
    collections: List[str] = Field(default_factory=list)
