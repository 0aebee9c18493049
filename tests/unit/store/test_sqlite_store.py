"""SQLite-specific tests for SQLiteCollectionStore."""

import pytest
from unittest.mock import MagicMock

from homestead_transfer.config import TransferConfig
from homestead_transfer.core.exceptions import ConfigurationError, StorageError
from homestead_transfer.store.factory import create_store
from homestead_transfer.store.memory_store import InMemoryCollectionStore
from homestead_transfer.store.sqlite_store import SQLiteCollectionStore


@pytest.mark.asyncio
async def test_records_persist_across_connections(transfer_config, make_record):
    store = SQLiteCollectionStore(transfer_config)
    await store.initialize()
    await store.put("hives", make_record("hv1", name="North hive"))
    await store.close()

    reopened = SQLiteCollectionStore(transfer_config)
    await reopened.initialize()
    try:
        assert (await reopened.get("hives", "hv1"))["name"] == "North hive"
    finally:
        await reopened.close()


@pytest.mark.asyncio
async def test_lazy_initialize_on_first_use(transfer_config, make_record):
    store = SQLiteCollectionStore(transfer_config)
    try:
        await store.put("hives", make_record("hv1"))
        assert await store.count("hives") == 1
    finally:
        await store.close()


@pytest.mark.asyncio
async def test_unserializable_record_raises_storage_error(sqlite_store):
    with pytest.raises(StorageError):
        await sqlite_store.put("hives", {"id": "hv1", "opened": object()})


@pytest.mark.asyncio
async def test_uses_global_config_when_none_given(transfer_config):
    store = SQLiteCollectionStore()
    assert store.db_path == transfer_config.sqlite_path_expanded


@pytest.mark.asyncio
async def test_factory_builds_sqlite_store(tmp_path):
    config = TransferConfig(storage_backend="sqlite", sqlite_path=str(tmp_path / "f.db"))
    store = await create_store(config)
    try:
        assert isinstance(store, SQLiteCollectionStore)
        assert await store.health_check() is True
    finally:
        await store.close()


@pytest.mark.asyncio
async def test_factory_builds_memory_store():
    store = await create_store(TransferConfig(storage_backend="memory"))
    assert isinstance(store, InMemoryCollectionStore)


@pytest.mark.asyncio
async def test_factory_rejects_unknown_backend():
    config = MagicMock()
    config.storage_backend = "indexeddb"

    with pytest.raises(ConfigurationError, match="indexeddb"):
        await create_store(config)
