"""
SQLite-backed Queryable.

SqliteQuery composes a single-table SELECT from immutable parts and only
touches the database in count()/fetch(). Column references reaching SQL
are always sanitized ColumnRef values, and every value is a bound
parameter.
"""

from __future__ import annotations

import dataclasses
import logging
import re
import sqlite3
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Callable, Hashable, Optional, Union

from api_pagination.core.options import ColumnRef, Order, sanitize_column
from api_pagination.query.base import check_parts
from api_pagination.storage.connection import get_connection
from api_pagination.storage.models import to_db_timestamp

logger = logging.getLogger(__name__)

_TABLE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

Column = Union[str, ColumnRef]


def _column(column: Column) -> ColumnRef:
    return column if isinstance(column, ColumnRef) else sanitize_column(column)


def _bind(value: Any) -> Any:
    """Adapt Python values to what is stored."""
    if isinstance(value, date):
        return to_db_timestamp(value)
    if isinstance(value, bool):
        return int(value)
    return value


def _literal(value: Any) -> str:
    """Render a bound value for to_sql(). Display only, never executed."""
    if value is None:
        return "NULL"
    if isinstance(value, (int, float)):
        return str(value)
    return "'" + str(value).replace("'", "''") + "'"


@dataclass(frozen=True)
class SqliteQuery:
    """An immutable SELECT over one table."""

    table: str
    row_factory: Callable[[sqlite3.Row], Any] = dict
    db_path: Optional[Path] = None
    conditions: tuple[tuple[str, tuple[Any, ...]], ...] = ()
    ordering: tuple[str, ...] = ()
    limit_value: Optional[int] = None
    offset_value: Optional[int] = None

    def __post_init__(self) -> None:
        if not _TABLE_NAME.fullmatch(self.table):
            raise ValueError(f"Invalid table name {self.table!r}")

    # ----- Builders -----

    def limit(self, n: int) -> "SqliteQuery":
        return dataclasses.replace(self, limit_value=int(n))

    def offset(self, n: int) -> "SqliteQuery":
        return dataclasses.replace(self, offset_value=int(n))

    def order(self, column: Column, direction: Order = Order.ASC) -> "SqliteQuery":
        term = f"{_column(column).qualified(self.table)} {Order(direction).value.upper()}"
        return dataclasses.replace(self, ordering=self.ordering + (term,))

    def where(self, column: Column, value: Any) -> "SqliteQuery":
        """Equality condition, for narrowing scopes (`active = 1`, ...)."""
        return self._condition(column, "=", value)

    def where_lt(self, column: Column, value: Any) -> "SqliteQuery":
        return self._condition(column, "<", value)

    def where_gt(self, column: Column, value: Any) -> "SqliteQuery":
        return self._condition(column, ">", value)

    def _condition(self, column: Column, op: str, value: Any) -> "SqliteQuery":
        fragment = f"{_column(column).qualified(self.table)} {op} ?"
        return dataclasses.replace(
            self, conditions=self.conditions + ((fragment, (_bind(value),)),)
        )

    def without(self, *parts: str) -> "SqliteQuery":
        """Drop limit, offset and/or order."""
        check_parts(parts)
        changes: dict[str, Any] = {}
        if "limit" in parts:
            changes["limit_value"] = None
        if "offset" in parts:
            changes["offset_value"] = None
        if "order" in parts:
            changes["ordering"] = ()
        return dataclasses.replace(self, **changes)

    # ----- SQL -----

    def _compile(self) -> tuple[str, tuple[Any, ...]]:
        sql = f"SELECT * FROM {self.table}"
        params: list[Any] = []

        if self.conditions:
            sql += " WHERE " + " AND ".join(fragment for fragment, _ in self.conditions)
            for _, values in self.conditions:
                params.extend(values)

        if self.ordering:
            sql += " ORDER BY " + ", ".join(self.ordering)

        if self.limit_value is not None:
            sql += " LIMIT ?"
            params.append(self.limit_value)
        elif self.offset_value is not None:
            sql += " LIMIT -1"

        if self.offset_value is not None:
            sql += " OFFSET ?"
            params.append(self.offset_value)

        return sql, tuple(params)

    def to_sql(self) -> str:
        """SQL with parameters inlined, for logging and assertions."""
        sql, params = self._compile()
        pieces = sql.split("?")
        rendered = [pieces[0]]
        for value, piece in zip(params, pieces[1:]):
            rendered.append(_literal(value))
            rendered.append(piece)
        return "".join(rendered)

    def signature(self) -> Hashable:
        return self._compile()

    # ----- Execution -----

    @property
    def _conn(self) -> sqlite3.Connection:
        return get_connection(self.db_path)

    def count(self) -> int:
        sql, params = self._compile()
        row = self._conn.execute(f"SELECT COUNT(*) AS cnt FROM ({sql})", params).fetchone()
        return row["cnt"]

    def fetch(self) -> list[Any]:
        sql, params = self._compile()
        logger.debug("Fetching: %s %s", sql, params)
        rows = self._conn.execute(sql, params).fetchall()
        return [self.row_factory(row) for row in rows]

    def first(self) -> Any:
        records = self.fetch()
        return records[0] if records else None

    def last(self) -> Any:
        records = self.fetch()
        return records[-1] if records else None

    def size(self) -> int:
        return len(self.fetch())
