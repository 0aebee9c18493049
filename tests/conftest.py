"""Test configuration and shared fixtures."""

import json
import pytest
import pytest_asyncio
from typing import Any, Callable, Dict

from homestead_transfer.config import TransferConfig, set_config
from homestead_transfer.backup.service import DataTransferService
from homestead_transfer.core.models import TransferArtifact
from homestead_transfer.store.memory_store import InMemoryCollectionStore
from homestead_transfer.store.sqlite_store import SQLiteCollectionStore


@pytest.fixture(autouse=True)
def transfer_config(tmp_path):
    """Point every test at throwaway paths so nothing touches ~/.homestead."""
    config = TransferConfig(
        storage_backend="memory",
        sqlite_path=str(tmp_path / "homestead.db"),
        export_dir=str(tmp_path / "exports"),
        log_level="DEBUG",
    )
    set_config(config)
    yield config
    set_config(None)


@pytest_asyncio.fixture
async def memory_store():
    """Fresh in-memory collection store."""
    store = InMemoryCollectionStore()
    await store.initialize()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def sqlite_store(transfer_config):
    """SQLite collection store in the test's temp directory."""
    store = SQLiteCollectionStore(transfer_config)
    await store.initialize()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def service(memory_store, transfer_config):
    """Transfer service over the in-memory store."""
    return DataTransferService(memory_store, transfer_config)


@pytest.fixture
def make_record() -> Callable[..., Dict[str, Any]]:
    """Factory for records shaped like the app's stored entities."""

    def _make(record_id: str, **fields) -> Dict[str, Any]:
        record = {
            "id": record_id,
            "createdAt": 1_700_000_000_000,
            "updatedAt": 1_700_000_000_000,
            "syncStatus": "synced",
        }
        record.update(fields)
        return record

    return _make


@pytest.fixture
def make_artifact() -> Callable[..., TransferArtifact]:
    """Factory for artifacts built from a bundle dict or raw text."""

    def _make(payload: Any, filename: str = "backup.json") -> TransferArtifact:
        text = payload if isinstance(payload, str) else json.dumps(payload)
        return TransferArtifact(filename=filename, content=text.encode("utf-8"))

    return _make
