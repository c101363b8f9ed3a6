"""
Pagination options.

PageOptions is built once per pagination call from loose request params and
passed alongside the query through every pager. It is never attached to
the query object itself.
"""

from __future__ import annotations

import dataclasses
import enum
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from api_pagination.config.settings import PaginationSettings
from api_pagination.core.page_math import clamp_per_page, coerce_int
from api_pagination.errors import InvalidColumnError

# Anything that is not a word character or the table separator
_INVALID_COLUMN_CHARS = re.compile(r"[^\w.]+", re.ASCII)


class Order(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ColumnRef:
    """A sanitized column reference, optionally qualified by a table."""

    name: str
    table: Optional[str] = None

    def qualified(self, default_table: Optional[str] = None) -> str:
        """Render as `table.column`, using `default_table` for bare columns."""
        table = self.table or default_table
        return f"{table}.{self.name}" if table else self.name


def sanitize_column(raw: Any) -> ColumnRef:
    """
    Strip everything but word characters and dots from a caller-supplied column.

    Characters are removed, never substituted. When the result holds a table
    and a column, exactly one `.` separates them; further segments are
    dropped.

    Raises:
        InvalidColumnError: nothing usable is left.
    """
    cleaned = _INVALID_COLUMN_CHARS.sub("", str(raw))
    parts = [part for part in cleaned.split(".") if part]
    if not parts:
        raise InvalidColumnError(raw)
    if len(parts) == 1:
        return ColumnRef(name=parts[0])
    return ColumnRef(name=parts[1], table=parts[0])


def present(value: Any) -> bool:
    """None, False and blank strings count as absent."""
    if value is None or value is False:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


@dataclass(frozen=True)
class PageOptions:
    """Immutable options for one pagination call."""

    column: ColumnRef
    order: Order
    per_page: int
    page: int = 1
    before: Any = None
    after: Any = None
    filter: Optional[Callable[[Any], bool]] = None
    page_value: Optional[Callable[[Any], Any]] = None
    lazy: bool = False

    @classmethod
    def from_params(
        cls,
        params: Optional[Mapping[str, Any]],
        settings: PaginationSettings,
    ) -> "PageOptions":
        """
        Normalize request params.

        A present `after` makes the order ascending; otherwise it is
        descending. `per_page` is clamped here, before anything is fetched.
        """
        params = dict(params or {})
        after = params.get("after")
        before = params.get("before")
        return cls(
            column=sanitize_column(params.get("column") or settings.default_column),
            order=Order.ASC if present(after) else Order.DESC,
            per_page=clamp_per_page(
                params.get("per_page"), settings.per_page_default, settings.per_page_max
            ),
            page=max(coerce_int(params.get("page", 1)), 1),
            before=before,
            after=after,
            filter=params.get("filter"),
            page_value=params.get("page_value"),
            lazy=bool(params.get("lazy", False)),
        )

    @property
    def field_name(self) -> str:
        """Attribute read off records for cursors."""
        return self.column.name

    @property
    def cursor(self) -> Any:
        """The bound in effect for the current direction."""
        return self.after if self.order is Order.ASC else self.before

    @property
    def has_bound(self) -> bool:
        return present(self.before) or present(self.after)

    @property
    def cursor_params(self) -> tuple[str, str]:
        """(forward key, inverse key) for page_param."""
        if self.order is Order.ASC:
            return "after", "before"
        return "before", "after"

    def with_cursor(self, value: Any) -> "PageOptions":
        """Copy with the bound for the current direction replaced."""
        key, _ = self.cursor_params
        return dataclasses.replace(self, **{key: value})
