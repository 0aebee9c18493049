"""Tests for core data models."""

import pytest
from pydantic import ValidationError

from homestead_transfer.core.models import (
    BundleMeta, ConflictStrategy, ExportFormat, ExportRecord, ExportScope,
    ImportRecord, ImportResult, TransferArtifact,
)


class TestConflictStrategy:
    """Conflict strategy semantics."""

    def test_copy_is_applied_as_overwrite(self):
        assert ConflictStrategy.COPY.effective() is ConflictStrategy.OVERWRITE

    @pytest.mark.parametrize("strategy", [ConflictStrategy.SKIP, ConflictStrategy.OVERWRITE])
    def test_other_strategies_apply_as_labelled(self, strategy):
        assert strategy.effective() is strategy

    def test_copy_description_admits_overwrite_behaviour(self):
        assert "behaves like overwrite" in ConflictStrategy.COPY.description

    def test_every_strategy_has_a_description(self):
        for strategy in ConflictStrategy:
            assert strategy.description


class TestHistoryEntries:
    """ExportRecord / ImportRecord."""

    def test_export_record_document_uses_camel_case(self):
        entry = ExportRecord(
            user_id="main_user",
            scope=ExportScope.GARDEN,
            format=ExportFormat.CSV,
            record_count=4,
            file_size=120,
            file_name="homestead_garden_2025-01-01.csv",
        )
        document = entry.to_document()

        assert document["userId"] == "main_user"
        assert document["scope"] == "garden"
        assert document["format"] == "csv"
        assert document["recordCount"] == 4
        assert document["fileSize"] == 120
        assert document["fileName"] == "homestead_garden_2025-01-01.csv"
        assert document["status"] == "completed"
        assert document["syncStatus"] == "pending"
        assert isinstance(document["createdAt"], int)

    def test_entries_are_immutable(self):
        entry = ImportRecord(
            user_id="u",
            file_name="backup.json",
            record_count=1,
            conflict_strategy=ConflictStrategy.SKIP,
        )
        with pytest.raises(ValidationError):
            entry.record_count = 99

    def test_import_record_round_trips_through_document(self):
        entry = ImportRecord(
            user_id="u",
            file_name="backup.json",
            record_count=3,
            conflict_strategy=ConflictStrategy.COPY,
        )
        restored = ImportRecord.model_validate(entry.to_document())

        assert restored == entry
        assert restored.scope is ExportScope.FULL

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            ImportRecord(
                user_id="u",
                file_name="x.json",
                record_count=-1,
                conflict_strategy=ConflictStrategy.SKIP,
            )


class TestTransferArtifact:
    """TransferArtifact helpers."""

    def test_size_and_suffix(self):
        artifact = TransferArtifact(filename="Backup.JSON", content="{}".encode())
        assert artifact.size == 2
        assert artifact.suffix == "json"

    def test_text_strips_bom(self):
        artifact = TransferArtifact(filename="a.json", content=b"\xef\xbb\xbf{}")
        assert artifact.text() == "{}"

    def test_write_and_read_back(self, tmp_path):
        artifact = TransferArtifact(filename="homestead_full_2025-01-01.csv", content=b"id\n\"1\"", mime_type="text/csv")

        path = artifact.write_to(tmp_path / "out")
        restored = TransferArtifact.from_path(path)

        assert restored.filename == artifact.filename
        assert restored.content == artifact.content
        assert restored.mime_type == "text/csv"


def test_bundle_meta_document():
    meta = BundleMeta(scope=ExportScope.TASKS, user_id="main_user").to_document()

    assert set(meta) == {"version", "exportedAt", "scope", "userId"}
    assert meta["version"] == 1
    assert meta["scope"] == "tasks"


def test_import_result_leads_with_success_and_message():
    result = ImportResult(success=True, message="Successfully imported 0 records.")
    assert list(result.model_dump())[:2] == ["success", "message"]
