"""Collection storage backends."""

from homestead_transfer.store.base import CollectionStore, Record
from homestead_transfer.store.memory_store import InMemoryCollectionStore
from homestead_transfer.store.sqlite_store import SQLiteCollectionStore
from homestead_transfer.store.unit_of_work import UnitOfWork
from homestead_transfer.store.factory import create_store

__all__ = [
    "CollectionStore",
    "Record",
    "InMemoryCollectionStore",
    "SQLiteCollectionStore",
    "UnitOfWork",
    "create_store",
]
