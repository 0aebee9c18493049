"""Behavioural tests shared by every CollectionStore implementation."""

import pytest
import pytest_asyncio

from homestead_transfer.core.exceptions import StorageError
from homestead_transfer.store.memory_store import InMemoryCollectionStore
from homestead_transfer.store.sqlite_store import SQLiteCollectionStore


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def store(request, transfer_config):
    """Each test runs once against each backend."""
    if request.param == "memory":
        store = InMemoryCollectionStore()
    else:
        store = SQLiteCollectionStore(transfer_config)
    await store.initialize()
    yield store
    await store.close()


@pytest.mark.asyncio
async def test_get_missing_returns_none(store):
    assert await store.get("animals", "nope") is None


@pytest.mark.asyncio
async def test_put_then_get(store, make_record):
    await store.put("animals", make_record("a1", name="Daisy", species="goat"))

    record = await store.get("animals", "a1")
    assert record["name"] == "Daisy"
    assert record["species"] == "goat"


@pytest.mark.asyncio
async def test_put_is_an_upsert(store, make_record):
    await store.put("animals", make_record("a1", name="Daisy"))
    await store.put("animals", make_record("a1", name="Daisy II"))

    assert (await store.get("animals", "a1"))["name"] == "Daisy II"
    assert await store.count("animals") == 1


@pytest.mark.asyncio
async def test_collections_are_independent(store, make_record):
    await store.put("animals", make_record("x1"))

    assert await store.get("herds", "x1") is None
    assert await store.get_all("herds") == []


@pytest.mark.asyncio
async def test_get_all_is_ordered_by_id(store, make_record):
    for record_id in ["c", "a", "b"]:
        await store.put("tasks", make_record(record_id))

    assert [r["id"] for r in await store.get_all("tasks")] == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_get_all_by_index(store, make_record):
    await store.put("animals", make_record("a1", herdId="h1"))
    await store.put("animals", make_record("a2", herdId="h2"))
    await store.put("animals", make_record("a3", herdId="h1"))
    await store.put("animals", make_record("a4"))

    matches = await store.get_all_by_index("animals", "herdId", "h1")
    assert [r["id"] for r in matches] == ["a1", "a3"]


@pytest.mark.asyncio
async def test_delete(store, make_record):
    await store.put("plants", make_record("p1"))

    assert await store.delete("plants", "p1") is True
    assert await store.delete("plants", "p1") is False
    assert await store.get("plants", "p1") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_record", [{"name": "no id"}, {"id": ""}, {"id": 42}])
async def test_put_requires_string_id(store, bad_record):
    with pytest.raises(StorageError):
        await store.put("plants", bad_record)


@pytest.mark.asyncio
async def test_returned_records_are_copies(store, make_record):
    await store.put("seeds", make_record("s1", tags=["heirloom"]))

    record = await store.get("seeds", "s1")
    record["tags"].append("hybrid")
    record["name"] = "changed"

    stored = await store.get("seeds", "s1")
    assert stored["tags"] == ["heirloom"]
    assert "name" not in stored


@pytest.mark.asyncio
async def test_nested_values_round_trip(store, make_record):
    record = make_record("b1", layout={"rows": 3, "cells": [[1, 2], [3, 4]]}, active=True, notes=None)
    await store.put("garden_beds", record)

    assert await store.get("garden_beds", "b1") == record


@pytest.mark.asyncio
async def test_health_check(store):
    assert await store.health_check() is True
