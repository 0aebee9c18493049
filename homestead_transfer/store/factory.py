"""Factory for creating store instances based on configuration."""

import logging
from homestead_transfer.config import TransferConfig
from homestead_transfer.core.exceptions import ConfigurationError
from homestead_transfer.store.base import CollectionStore

logger = logging.getLogger(__name__)


async def create_store(config: TransferConfig) -> CollectionStore:
    """
    Create and initialize a collection store based on configuration.

    Args:
        config: Transfer configuration

    Returns:
        Initialized collection store instance

    Raises:
        ConfigurationError: If an unsupported storage backend is specified
    """
    if config.storage_backend == "sqlite":
        from homestead_transfer.store.sqlite_store import SQLiteCollectionStore

        store = SQLiteCollectionStore(config)
    elif config.storage_backend == "memory":
        from homestead_transfer.store.memory_store import InMemoryCollectionStore

        store = InMemoryCollectionStore()
    else:
        raise ConfigurationError(
            f"Unsupported storage backend: {config.storage_backend}",
            solution="Set HOMESTEAD_STORAGE_BACKEND to 'sqlite' or 'memory'.",
        )

    await store.initialize()
    logger.info(f"Using {config.storage_backend} collection store")
    return store
