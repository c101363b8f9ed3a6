"""
SQLite connection factory.

All database access in the project goes through get_connection().

- WAL mode: concurrent reads while a write is in progress.
- check_same_thread=False: the demo API serves requests from a thread pool.
- Row factory: rows are returned as sqlite3.Row (dict-like access).
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Optional

from api_pagination.config.settings import get_settings

logger = logging.getLogger(__name__)

# Module-level lock for connection creation
_lock = threading.Lock()

# Singleton connection per database path
_connections: dict[str, sqlite3.Connection] = {}


def get_connection(db_path: Optional[Path] = None) -> sqlite3.Connection:
    """
    Get a shared SQLite connection for `db_path`.

    Returns the same connection object for the same path.

    Args:
        db_path: Path to the SQLite database file. If None, uses
                 the default path from settings.
    """
    settings = get_settings()
    if db_path is None:
        db_path = settings.db_path

    db_key = str(db_path)

    with _lock:
        if db_key in _connections:
            return _connections[db_key]

        db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Opening SQLite database: %s", db_path)

        conn = sqlite3.connect(
            str(db_path),
            check_same_thread=False,
            timeout=settings.storage.busy_timeout_ms / 1000,
        )
        conn.execute(f"PRAGMA journal_mode={settings.storage.journal_mode}")
        conn.execute(f"PRAGMA busy_timeout={settings.storage.busy_timeout_ms}")
        conn.execute("PRAGMA synchronous=NORMAL")  # Safe with WAL
        conn.row_factory = sqlite3.Row

        _connections[db_key] = conn
        return conn


def close_connection(db_path: Optional[Path] = None) -> None:
    """Close the connection for a given db_path (or the default)."""
    if db_path is None:
        db_path = get_settings().db_path

    with _lock:
        conn = _connections.pop(str(db_path), None)
        if conn is not None:
            conn.close()
            logger.info("Database connection closed: %s", db_path)


def close_all_connections() -> None:
    """Close all open connections. Used during shutdown."""
    with _lock:
        for key, conn in list(_connections.items()):
            conn.close()
            logger.info("Database connection closed: %s", key)
        _connections.clear()
