"""
Data models for the storage layer.

Plain dataclasses, no ORM. Each field maps 1:1 to a column of the `items`
table. Timestamps are aware UTC datetimes in Python and fixed-width UTC
text in SQLite.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional

from api_pagination.core.filters import FilterableMixin

# Sorts lexicographically in time order; microsecond precision.
DB_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_db_timestamp(value: date) -> str:
    """Render a date/datetime as stored text. Naive datetimes are taken as UTC."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(DB_TIMESTAMP_FORMAT)


def from_db_timestamp(text: Optional[str]) -> Optional[datetime]:
    """Inverse of to_db_timestamp. NULL stays None."""
    if text is None:
        return None
    return datetime.strptime(text, DB_TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


@dataclass
class Item(FilterableMixin):
    """
    A row of the `items` table.

    Disabled items are hidden from filtered feeds (see is_filtered).
    """

    # Auto-incremented primary key (None before insertion)
    id: Optional[int] = None

    # Owning user, if any
    user_id: Optional[int] = None

    title: Optional[str] = None

    # Narrowed on at the query level (scope builders)
    active: bool = False

    # Filtered out after fetching (client-side)
    disabled: bool = False

    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def is_filtered(self) -> bool:
        return self.disabled

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Item":
        """Convert a sqlite3.Row to an Item."""
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            active=bool(row["active"]),
            disabled=bool(row["disabled"]),
            created_at=from_db_timestamp(row["created_at"]),
            updated_at=from_db_timestamp(row["updated_at"]),
        )
