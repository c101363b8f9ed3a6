"""
Client-side record filters for filtered cursor pagination.

A filter is resolved once per pagination call into one of two variants:

    ExplicitFilter      the caller passed a callable (function, lambda,
                        or an object with __call__); True means "exclude".
    RecordCapability    no callable given; each record must answer
                        is_filtered() itself.

A record without is_filtered() raises MissingFilterMethodError the first
time it is checked, not when the page is requested.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from api_pagination.errors import MissingFilterMethodError


class FilterableMixin:
    """Default is_filtered() for models that opt into filtered pagination."""

    def is_filtered(self) -> bool:
        raise MissingFilterMethodError(type(self).__name__)


@dataclass(frozen=True)
class ExplicitFilter:
    predicate: Callable[[Any], bool]

    def __call__(self, record: Any) -> bool:
        return bool(self.predicate(record))


@dataclass(frozen=True)
class RecordCapability:
    def __call__(self, record: Any) -> bool:
        method = getattr(record, "is_filtered", None)
        if not callable(method):
            raise MissingFilterMethodError(type(record).__name__)
        return bool(method())


RecordFilter = Union[ExplicitFilter, RecordCapability]


def resolve_filter(option: Optional[Any]) -> RecordFilter:
    """Pick the filter variant for a `filter` option value."""
    if callable(option):
        return ExplicitFilter(option)
    return RecordCapability()
