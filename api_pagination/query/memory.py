"""In-memory Queryable over a sequence of records."""

from __future__ import annotations

import dataclasses
import operator
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Hashable, Iterable, Optional, Union

from api_pagination.core.cursor import as_datetime, read_field
from api_pagination.core.options import ColumnRef, Order, sanitize_column
from api_pagination.query.base import check_parts

_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "=": operator.eq,
    "<": operator.lt,
    ">": operator.gt,
}

Column = Union[str, ColumnRef]


def _field(column: Column) -> str:
    return (column if isinstance(column, ColumnRef) else sanitize_column(column)).name


def _comparable(value: Any) -> Any:
    # Mixed date / naive / aware values compare as aware UTC datetimes
    return as_datetime(value) if isinstance(value, date) else value


@dataclass(frozen=True)
class MemoryQuery:
    """
    Applies the Queryable operations to a Python sequence.

    Records are read with attribute access (falling back to mapping keys).
    Rows whose field is None never satisfy a comparison, like SQL NULL.
    """

    records: tuple[Any, ...]
    conditions: tuple[tuple[str, str, Any], ...] = ()
    ordering: tuple[tuple[str, Order], ...] = ()
    limit_value: Optional[int] = None
    offset_value: Optional[int] = None

    @classmethod
    def of(cls, records: Iterable[Any]) -> "MemoryQuery":
        return cls(records=tuple(records))

    # ----- Builders -----

    def limit(self, n: int) -> "MemoryQuery":
        return dataclasses.replace(self, limit_value=int(n))

    def offset(self, n: int) -> "MemoryQuery":
        return dataclasses.replace(self, offset_value=int(n))

    def order(self, column: Column, direction: Order = Order.ASC) -> "MemoryQuery":
        return dataclasses.replace(
            self, ordering=self.ordering + ((_field(column), Order(direction)),)
        )

    def where(self, column: Column, value: Any) -> "MemoryQuery":
        return self._condition(column, "=", value)

    def where_lt(self, column: Column, value: Any) -> "MemoryQuery":
        return self._condition(column, "<", value)

    def where_gt(self, column: Column, value: Any) -> "MemoryQuery":
        return self._condition(column, ">", value)

    def _condition(self, column: Column, op: str, value: Any) -> "MemoryQuery":
        return dataclasses.replace(
            self, conditions=self.conditions + ((_field(column), op, value),)
        )

    def without(self, *parts: str) -> "MemoryQuery":
        check_parts(parts)
        changes: dict[str, Any] = {}
        if "limit" in parts:
            changes["limit_value"] = None
        if "offset" in parts:
            changes["offset_value"] = None
        if "order" in parts:
            changes["ordering"] = ()
        return dataclasses.replace(self, **changes)

    # ----- Description -----

    def to_sql(self) -> str:
        """Pseudo-SQL describing the query, for logs."""
        sql = "SELECT * FROM memory"
        if self.conditions:
            sql += " WHERE " + " AND ".join(
                f"{name} {op} {value!r}" for name, op, value in self.conditions
            )
        if self.ordering:
            sql += " ORDER BY " + ", ".join(
                f"{name} {direction.value.upper()}" for name, direction in self.ordering
            )
        if self.limit_value is not None:
            sql += f" LIMIT {self.limit_value}"
        if self.offset_value is not None:
            sql += f" OFFSET {self.offset_value}"
        return sql

    def signature(self) -> Hashable:
        # Derived queries share the records tuple, so its identity is enough
        return (
            id(self.records),
            self.conditions,
            self.ordering,
            self.limit_value,
            self.offset_value,
        )

    # ----- Execution -----

    def _matches(self, record: Any) -> bool:
        for name, op, value in self.conditions:
            field_value = read_field(record, name)
            if field_value is None or value is None:
                return False
            if not _OPERATORS[op](_comparable(field_value), _comparable(value)):
                return False
        return True

    def _rows(self) -> list[Any]:
        rows = [record for record in self.records if self._matches(record)]
        # Stable sorts applied last key first give a multi-key ordering
        for name, direction in reversed(self.ordering):
            rows.sort(
                key=lambda r, n=name: (
                    read_field(r, n) is not None,
                    _comparable(read_field(r, n)),
                ),
                reverse=direction is Order.DESC,
            )
        start = self.offset_value or 0
        stop = None if self.limit_value is None else start + self.limit_value
        return rows[start:stop]

    def count(self) -> int:
        return len(self._rows())

    def fetch(self) -> list[Any]:
        return self._rows()

    def first(self) -> Any:
        rows = self._rows()
        return rows[0] if rows else None

    def last(self) -> Any:
        rows = self._rows()
        return rows[-1] if rows else None

    def size(self) -> int:
        return len(self._rows())
