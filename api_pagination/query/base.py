"""
The Queryable collaborator contract.

A Queryable is an ordered, lazily executed collection. Builder methods
never mutate the receiver: each returns a new Queryable, so a base query
can be reused to derive any number of independent pages.
"""

from __future__ import annotations

from typing import Any, Hashable, Optional, Protocol, TypeVar, runtime_checkable

from api_pagination.core.options import ColumnRef, Order

Q = TypeVar("Q", bound="Queryable")

# Parts that `without()` can drop
QUERY_PARTS = frozenset({"limit", "offset", "order"})


@runtime_checkable
class Queryable(Protocol):
    """What the pagers need from a data source."""

    @property
    def limit_value(self) -> Optional[int]: ...

    @property
    def offset_value(self) -> Optional[int]: ...

    def limit(self: Q, n: int) -> Q: ...

    def offset(self: Q, n: int) -> Q: ...

    def order(self: Q, column: ColumnRef, direction: Order) -> Q: ...

    def where_lt(self: Q, column: ColumnRef, value: Any) -> Q: ...

    def where_gt(self: Q, column: ColumnRef, value: Any) -> Q: ...

    def without(self: Q, *parts: str) -> Q: ...

    def count(self) -> int: ...

    def fetch(self) -> list[Any]: ...

    def first(self) -> Any: ...

    def last(self) -> Any: ...

    def size(self) -> int: ...

    def to_sql(self) -> str: ...

    def signature(self) -> Hashable:
        """Structural identity; equal signatures mean the same rows would be fetched."""
        ...


def check_parts(parts: tuple[str, ...]) -> None:
    """Reject unknown names passed to `without()`."""
    unknown = set(parts) - QUERY_PARTS
    if unknown:
        raise ValueError(f"Cannot remove {sorted(unknown)}, expected any of {sorted(QUERY_PARTS)}")
