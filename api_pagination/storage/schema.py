"""
SQLite schema definitions (DDL).

The schema is versioned via the `user_version` pragma.

Tables:
    items: timestamped records served by the demo API
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from api_pagination.storage.connection import get_connection

logger = logging.getLogger(__name__)

# Current schema version. Bump when adding migrations.
SCHEMA_VERSION = 1

# Timestamps are TEXT in a fixed-width UTC format (see models.to_db_timestamp)
# so that string comparison matches time order.
_ITEMS_DDL = """
CREATE TABLE IF NOT EXISTS items (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     INTEGER,
    title       TEXT,
    active      INTEGER DEFAULT 0,
    disabled    INTEGER DEFAULT 0,
    created_at  TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);
"""

_ITEMS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_items_created_at ON items(created_at);",
    "CREATE INDEX IF NOT EXISTS idx_items_updated_at ON items(updated_at);",
    "CREATE INDEX IF NOT EXISTS idx_items_user_id ON items(user_id);",
]


def initialize_database(db_path: Optional[Path] = None) -> None:
    """
    Create all tables and indexes if they don't exist.

    Safe to call multiple times. All statements use IF NOT EXISTS.
    """
    conn = get_connection(db_path)

    logger.info("Initializing database schema (version %d)...", SCHEMA_VERSION)

    with conn:
        conn.execute(_ITEMS_DDL)
        for idx_sql in _ITEMS_INDEXES:
            conn.execute(idx_sql)
        conn.execute(f"PRAGMA user_version={SCHEMA_VERSION}")


def get_schema_version(db_path: Optional[Path] = None) -> int:
    """Return the current schema version of the database."""
    conn = get_connection(db_path)
    row = conn.execute("PRAGMA user_version").fetchone()
    return row[0] if row else 0
