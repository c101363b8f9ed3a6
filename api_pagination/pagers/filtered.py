"""
Cursor pagination with client-side filtering.

Some predicates cannot be written as SQL. To still hand back `per_page`
records, FilteredPage over-fetches batches of
`per_page * pessimistic_multiplier` rows, drops the filtered ones, and, when
the page is not full yet, moves the bound to the last fetched row and
fetches again. It stops when the page is full, the source is exhausted, or
the next query would be identical to the previous one (the bound did not
move, e.g. on duplicate timestamps).

Nothing about the size of the filtered universe is known, so every count
is None and the last page can never be proven.
"""

from __future__ import annotations

import logging
from functools import cached_property
from typing import Any, Callable, Mapping, Optional

from api_pagination.config.settings import PaginationSettings, get_settings
from api_pagination.core.cursor import is_sentinel, read_field, serialize_cursor
from api_pagination.core.filters import resolve_filter
from api_pagination.core.interface import PaginatedPage, cursor_page_param
from api_pagination.core.options import PageOptions
from api_pagination.pagers.cursor import bound_query
from api_pagination.query.base import Queryable

logger = logging.getLogger(__name__)

Scope = Callable[[Queryable], Queryable]


class FilteredPage(PaginatedPage):
    """
    Accumulates unfiltered records up to `per_page`.

    Eager pages load in the constructor. Lazy pages load when the results
    are first observed (iteration, len, indexing, `results`). Either way
    the first bounded query is built up front, so a bad cursor fails before
    anything is fetched.
    """

    def __init__(
        self,
        query: Queryable,
        options: PageOptions,
        settings: PaginationSettings,
    ) -> None:
        self.query = query
        self.options = options
        self._settings = settings
        self._filter = resolve_filter(options.filter)
        self._results: list[Any] = []
        self._loaded = False
        self._initial = bound_query(query, options, settings.timestamp_format)

        if not options.lazy:
            self._load()

    @property
    def limit_value(self) -> int:
        return self.query.limit_value

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def to_sql(self) -> str:
        """SQL of the first batch."""
        return self._initial.to_sql()

    @property
    def results(self) -> list[Any]:
        if not self._loaded:
            self._load()
        return self._results

    # ----- Loading -----

    def _load(self) -> None:
        per_page = self.options.per_page
        accepted: list[Any] = []
        options = self.options
        current = self._initial
        previous_signature = None
        batches = 0

        while True:
            signature = current.signature()
            if signature == previous_signature:
                logger.debug("Bound did not advance, stopping after %d batches", batches)
                break
            previous_signature = signature

            records = current.fetch()
            batches += 1
            if not records:
                break

            for record in records:
                if self._filter(record):
                    continue
                accepted.append(record)
                if len(accepted) >= per_page:
                    break

            logger.debug(
                "Batch %d: fetched %d, accepted %d/%d", batches, len(records), len(accepted), per_page
            )
            if len(accepted) >= per_page:
                break

            last_value = read_field(records[-1], options.field_name)
            if last_value is None:
                logger.debug("Last row has no %s, cannot advance", options.field_name)
                break
            options = options.with_cursor(last_value)
            current = bound_query(self.query, options, self._settings.timestamp_format)

        self._results = accepted
        self._loaded = True

    # ----- Determiners -----

    @property
    def is_first_page(self) -> bool:
        """Only when the caller explicitly asked for the start of the sequence."""
        return is_sentinel(self.options.cursor)

    @property
    def is_last_page(self) -> bool:
        return False

    # ----- Param values -----

    @property
    def first_page_value(self) -> bool:
        return True

    @property
    def last_page_value(self) -> bool:
        return True

    @cached_property
    def prev_page_value(self) -> Any:
        value = serialize_cursor(self.first(), self.options.field_name, self.options.page_value)
        if value is None and self.options.has_bound:
            return True
        return value

    @cached_property
    def next_page_value(self) -> Any:
        return serialize_cursor(self.last(), self.options.field_name, self.options.page_value)

    def page_param(self, params: Mapping[str, Any], page_value: Any, rel: str) -> dict[str, Any]:
        return cursor_page_param(self.options, params, page_value, rel)


class FilteredCursorPager:
    """Builds FilteredPage objects."""

    def __init__(self, settings: Optional[PaginationSettings] = None) -> None:
        self._settings = settings or get_settings().pagination

    def filtered_page_by(
        self,
        query: Queryable,
        params: Optional[Mapping[str, Any]] = None,
        scope: Optional[Scope] = None,
    ) -> FilteredPage:
        """
        Page `query`, dropping records the filter rejects.

        Recognized params: before, after, per_page, column, filter,
        page_value, lazy. `scope` narrows the query before paging
        (e.g. `lambda q: q.where("active", True)`).
        """
        options = PageOptions.from_params(params, self._settings)
        if scope is not None:
            query = scope(query)
        batch_size = options.per_page * self._settings.pessimistic_multiplier
        return FilteredPage(query.limit(batch_size), options, self._settings)
