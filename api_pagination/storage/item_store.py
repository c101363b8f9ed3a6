"""
CRUD operations for the items table.

Reads that should be paginated go through query(), which hands back a
SqliteQuery mapping rows to Item objects. The pagers never see SQL
directly.

All methods accept an optional db_path for testability.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from api_pagination.storage.connection import get_connection
from api_pagination.storage.models import Item, to_db_timestamp
from api_pagination.storage.query import SqliteQuery

logger = logging.getLogger(__name__)

_INSERT_SQL = """
    INSERT INTO items
        (user_id, title, active, disabled, created_at, updated_at)
    VALUES
        (?, ?, ?, ?, ?, ?)
"""


def _item_params(item: Item) -> tuple:
    return (
        item.user_id,
        item.title,
        int(item.active),
        int(item.disabled),
        to_db_timestamp(item.created_at),
        to_db_timestamp(item.updated_at),
    )


class ItemStore:
    """CRUD interface for the items table."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self._db_path = db_path

    @property
    def _conn(self):
        return get_connection(self._db_path)

    # ----- Write operations -----

    def insert(self, item: Item) -> Item:
        """Insert a single item and set its id."""
        with self._conn:
            cursor = self._conn.execute(_INSERT_SQL, _item_params(item))
            item.id = cursor.lastrowid
            logger.debug("Inserted item: %s", item.id)
            return item

    def insert_many(self, items: list[Item]) -> int:
        """
        Insert multiple items in one transaction. Returns the number of rows
        written. Ids are not set on the passed objects.
        """
        rows = [_item_params(item) for item in items]
        with self._conn:
            cursor = self._conn.executemany(_INSERT_SQL, rows)
            count = cursor.rowcount
            logger.info("Bulk insert: %d items", count)
            return count

    # ----- Read operations -----

    def get_by_id(self, item_id: int) -> Optional[Item]:
        row = self._conn.execute(
            "SELECT * FROM items WHERE id = ?", (item_id,)
        ).fetchone()
        return Item.from_row(row) if row else None

    def count(self, user_id: Optional[int] = None) -> int:
        """Count items, optionally for one user."""
        if user_id is not None:
            row = self._conn.execute(
                "SELECT COUNT(*) as cnt FROM items WHERE user_id = ?", (user_id,)
            ).fetchone()
        else:
            row = self._conn.execute("SELECT COUNT(*) as cnt FROM items").fetchone()
        return row["cnt"]

    def count_disabled(self) -> int:
        row = self._conn.execute(
            "SELECT COUNT(*) as cnt FROM items WHERE disabled = 1"
        ).fetchone()
        return row["cnt"]

    def query(self) -> SqliteQuery:
        """An unbounded, unordered query over all items."""
        return SqliteQuery("items", row_factory=Item.from_row, db_path=self._db_path)
