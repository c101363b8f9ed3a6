"""
Timestamp cursor pagination.

Pages are bounded by a comparison on the ordering column instead of an
offset: `column < cursor` walking backwards in time (the default), or
`column > cursor` walking forwards when `after` is given. Filtering lives
in the query, so totals can still be counted.
"""

from __future__ import annotations

import dataclasses
import logging
from functools import cached_property
from typing import Any, Mapping, Optional

from api_pagination.config.settings import PaginationSettings, get_settings
from api_pagination.core import page_math
from api_pagination.core.cursor import parse_cursor, serialize_cursor
from api_pagination.core.interface import PaginatedPage, cursor_page_param
from api_pagination.core.options import Order, PageOptions
from api_pagination.errors import TIMESTAMP_FORMAT
from api_pagination.query.base import Queryable

logger = logging.getLogger(__name__)


def bound_query(
    query: Queryable,
    options: PageOptions,
    expected_format: str = TIMESTAMP_FORMAT,
) -> Queryable:
    """
    Apply the cursor bound and ordering of `options` to `query`.

    Sentinel and unparseable cursors add no bound.

    Raises:
        InvalidTimestampError: the cursor is a non-time, non-string value.
    """
    parsed = parse_cursor(options.cursor, expected_format)
    if parsed.is_bound:
        if options.order is Order.ASC:
            query = query.where_gt(options.column, parsed.value)
        else:
            query = query.where_lt(options.column, parsed.value)
    return query.order(options.column, options.order)


class CursorPage(PaginatedPage):
    """A single bounded page; rows are fetched on first access."""

    def __init__(
        self,
        base: Queryable,
        query: Queryable,
        options: PageOptions,
        settings: PaginationSettings,
    ) -> None:
        self.base = base
        self.query = query
        self.options = options
        self._settings = settings

    @property
    def limit_value(self) -> int:
        return self.query.limit_value

    def per(self, num: Any) -> "CursorPage":
        """Change the page size only; the bound stays where it is."""
        size = page_math.coerce_int(num)
        if size <= 0:
            return self
        size = min(size, self._settings.per_page_max)
        return CursorPage(
            self.base,
            self.query.limit(size),
            dataclasses.replace(self.options, per_page=size),
            self._settings,
        )

    def to_sql(self) -> str:
        return self.query.to_sql()

    @cached_property
    def results(self) -> list[Any]:
        return self.query.fetch()

    # ----- Counts -----

    @cached_property
    def total_count(self) -> int:
        return self.base.without("limit", "offset", "order").count()

    @cached_property
    def total_remaining(self) -> int:
        """Rows from the start of this page to the end of the sequence."""
        return self.query.without("limit").count()

    @cached_property
    def total_pages(self) -> int:
        return page_math.total_pages(self.total_count, self.limit_value)

    @cached_property
    def total_pages_remaining(self) -> int:
        return page_math.cursor_pages_remaining(self.total_remaining, self.limit_value)

    # ----- Determiners -----

    @cached_property
    def is_first_page(self) -> bool:
        return self.total_remaining >= self.total_count

    @cached_property
    def is_last_page(self) -> bool:
        return self.total_remaining <= self.limit_value

    # ----- Param values -----

    @property
    def first_page_value(self) -> bool:
        return True

    @property
    def last_page_value(self) -> bool:
        return True

    @cached_property
    def prev_page_value(self) -> Any:
        if not self.results:
            return True if self.options.has_bound else None
        return serialize_cursor(self.first(), self.options.field_name, self.options.page_value)

    @cached_property
    def next_page_value(self) -> Any:
        if self.is_last_page:
            return None
        return serialize_cursor(self.last(), self.options.field_name, self.options.page_value)

    def page_param(self, params: Mapping[str, Any], page_value: Any, rel: str) -> dict[str, Any]:
        return cursor_page_param(self.options, params, page_value, rel)


class CursorPager:
    """Builds CursorPage objects; one query per page."""

    def __init__(self, settings: Optional[PaginationSettings] = None) -> None:
        self._settings = settings or get_settings().pagination

    def page_by(
        self, query: Queryable, params: Optional[Mapping[str, Any]] = None
    ) -> CursorPage:
        """
        Bound, order and limit `query` according to `params`.

        Recognized params: before, after, per_page, column, page_value.
        """
        options = PageOptions.from_params(params, self._settings)
        bounded = bound_query(
            query.limit(options.per_page), options, self._settings.timestamp_format
        )
        logger.debug("Cursor page: %s", bounded.to_sql())
        return CursorPage(query, bounded, options, self._settings)
