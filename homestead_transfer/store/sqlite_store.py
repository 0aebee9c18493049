"""SQLite collection store: one JSON document per record."""

import sqlite3
import json
import logging
from typing import Any, List, Optional

from homestead_transfer.store.base import CollectionStore, Record
from homestead_transfer.core.exceptions import StorageError
from homestead_transfer.config import TransferConfig

logger = logging.getLogger(__name__)


class SQLiteCollectionStore(CollectionStore):
    """
    SQLite implementation of the CollectionStore interface.

    Every collection shares a single ``records`` table keyed by
    ``(collection, id)``; the record itself is kept as a JSON document.
    Index lookups decode the collection and filter in Python, so any field
    can be queried without declaring indices up front.
    """

    def __init__(self, config: Optional[TransferConfig] = None):
        """
        Initialize SQLite collection store.

        Args:
            config: Transfer configuration. If None, uses global config.
        """
        if config is None:
            from homestead_transfer.config import get_config
            config = get_config()

        self.config = config
        self.db_path = config.sqlite_path_expanded
        self.conn: Optional[sqlite3.Connection] = None

        logger.info(f"SQLite store configured at {self.db_path}")

    async def initialize(self) -> None:
        """Open the database and create the records table."""
        try:
            self.conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
            self.conn.row_factory = sqlite3.Row

            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS records (
                    collection TEXT NOT NULL,
                    id TEXT NOT NULL,
                    data TEXT NOT NULL,
                    PRIMARY KEY (collection, id)
                )
            """)
            self.conn.commit()
            logger.info("SQLite store initialized")

        except sqlite3.Error as e:
            raise StorageError(
                f"Failed to initialize SQLite store at {self.db_path}: {e}",
                solution="Check that the directory is writable or set HOMESTEAD_SQLITE_PATH.",
            ) from e

    async def _connection(self) -> sqlite3.Connection:
        if self.conn is None:
            await self.initialize()
        return self.conn

    async def get(self, collection: str, record_id: str) -> Optional[Record]:
        conn = await self._connection()
        try:
            cursor = conn.execute(
                "SELECT data FROM records WHERE collection = ? AND id = ?",
                (collection, record_id),
            )
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read {collection}/{record_id}: {e}") from e

        if row is None:
            return None
        return json.loads(row["data"])

    async def get_all(self, collection: str) -> List[Record]:
        conn = await self._connection()
        try:
            cursor = conn.execute(
                "SELECT data FROM records WHERE collection = ? ORDER BY id",
                (collection,),
            )
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read collection {collection}: {e}") from e

        return [json.loads(row["data"]) for row in rows]

    async def get_all_by_index(
        self,
        collection: str,
        index_field: str,
        value: Any,
    ) -> List[Record]:
        return [
            record for record in await self.get_all(collection)
            if index_field in record and record[index_field] == value
        ]

    async def put(self, collection: str, record: Record) -> None:
        record_id = record.get("id") if isinstance(record, dict) else None
        if not isinstance(record_id, str) or not record_id:
            raise StorageError(f"Cannot store record without a string id in {collection}")

        conn = await self._connection()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO records (collection, id, data) VALUES (?, ?, ?)",
                (collection, record_id, json.dumps(record, ensure_ascii=False)),
            )
            conn.commit()
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write {collection}/{record_id}: {e}") from e

    async def delete(self, collection: str, record_id: str) -> bool:
        conn = await self._connection()
        try:
            cursor = conn.execute(
                "DELETE FROM records WHERE collection = ? AND id = ?",
                (collection, record_id),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to delete {collection}/{record_id}: {e}") from e

        deleted = cursor.rowcount > 0
        if deleted:
            logger.debug(f"Deleted record: {collection}/{record_id}")
        return deleted

    async def count(self, collection: str) -> int:
        conn = await self._connection()
        try:
            cursor = conn.execute(
                "SELECT COUNT(*) FROM records WHERE collection = ?", (collection,)
            )
            return cursor.fetchone()[0]
        except sqlite3.Error as e:
            raise StorageError(f"Failed to count collection {collection}: {e}") from e

    async def health_check(self) -> bool:
        try:
            conn = await self._connection()
            conn.execute("SELECT 1")
            return True
        except (sqlite3.Error, StorageError):
            return False

    async def close(self) -> None:
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.info("SQLite store closed")
