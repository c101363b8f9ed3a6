"""
Shared test fixtures for the api_pagination test suite.

Provides an isolated SQLite database per test via a temporary file, plus
small record factories for the in-memory query.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import pytest

from api_pagination.config.settings import PaginationSettings
from api_pagination.storage.connection import close_connection, get_connection
from api_pagination.storage.item_store import ItemStore
from api_pagination.storage.models import Item
from api_pagination.storage.schema import initialize_database

# Fixed reference time; generated records count backwards from it in days
TIME = datetime(2012, 10, 20, tzinfo=timezone.utc)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Provide a temporary SQLite database path."""
    return tmp_path / "test_api_pagination.db"


@pytest.fixture
def db(db_path: Path):
    """
    Provide an initialized database connection.

    Creates all tables, yields the connection, then cleans up.
    """
    initialize_database(db_path)
    conn = get_connection(db_path)
    yield conn
    close_connection(db_path)


@pytest.fixture
def item_store(db, db_path: Path) -> ItemStore:
    """Provide an ItemStore connected to the test database."""
    return ItemStore(db_path)


@pytest.fixture
def settings() -> PaginationSettings:
    return PaginationSettings()


# ---------------------------------------------------------------------------
# Sample data factories
# ---------------------------------------------------------------------------


def make_item(days_ago: int = 0, **kwargs) -> Item:
    """Create an Item created `days_ago` days before TIME. Override any field via kwargs."""
    created = TIME - timedelta(days=days_ago)
    defaults = dict(
        user_id=1,
        title=f"item {days_ago}",
        active=True,
        disabled=False,
        created_at=created,
        updated_at=created,
    )
    defaults.update(kwargs)
    return Item(**defaults)


@dataclass
class Record:
    """Plain record for MemoryQuery tests."""

    id: int
    created_at: Optional[datetime]
    title: str = ""
    disabled: bool = False

    def is_filtered(self) -> bool:
        return self.disabled or self.title.startswith("filtered")


def make_records(count: int, overrides: Optional[dict] = None) -> list[Record]:
    """
    Records 1..count, record i created i-1 days before TIME (newest first).

    `overrides` maps a record id to field values.
    """
    overrides = overrides or {}
    records = []
    for i in range(1, count + 1):
        kwargs = dict(id=i, created_at=TIME - timedelta(days=i - 1), title=f"record {i}")
        kwargs.update(overrides.get(i, {}))
        records.append(Record(**kwargs))
    return records


@pytest.fixture
def seeded_store(item_store: ItemStore) -> ItemStore:
    """
    Nine items, item i created i-1 days before TIME.

    Items 2 and 6 carry a "filtered" title, items 3 and 8 are disabled.
    """
    for i in range(1, 10):
        title = f"filtered {i}" if i in (2, 6) else f"item {i}"
        item_store.insert(make_item(i - 1, title=title, disabled=i in (3, 8), user_id=i % 2))
    return item_store
