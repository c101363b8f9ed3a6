"""Numbered (offset/limit) pagination."""

from __future__ import annotations

import dataclasses
import logging
from functools import cached_property
from typing import Any, Mapping, Optional, Union

from api_pagination.config.settings import PaginationSettings, get_settings
from api_pagination.core import page_math
from api_pagination.core.interface import PaginatedPage
from api_pagination.core.options import PageOptions
from api_pagination.query.base import Queryable

logger = logging.getLogger(__name__)


class OffsetPage(PaginatedPage):
    """One numbered page. Rows are fetched on first access."""

    def __init__(
        self,
        query: Queryable,
        options: PageOptions,
        settings: PaginationSettings,
    ) -> None:
        self.query = query
        self.options = options
        self._settings = settings

    @property
    def limit_value(self) -> int:
        return self.query.limit_value

    @property
    def offset_value(self) -> int:
        return self.query.offset_value or 0

    @property
    def current_page(self) -> int:
        return self.offset_value // self.limit_value + 1

    def per(self, num: Any) -> "OffsetPage":
        """Change the page size, staying on the page that holds the current offset."""
        size = page_math.coerce_int(num)
        if size <= 0:
            return self
        size = min(size, self._settings.per_page_max)
        query = self.query.limit(size).offset(self.offset_value // self.limit_value * size)
        return OffsetPage(query, dataclasses.replace(self.options, per_page=size), self._settings)

    def to_sql(self) -> str:
        return self.query.to_sql()

    @cached_property
    def results(self) -> list[Any]:
        return self.query.fetch()

    # ----- Counts -----

    @cached_property
    def total_count(self) -> int:
        return self.query.without("offset", "limit", "order").count()

    @cached_property
    def total_pages(self) -> int:
        return page_math.total_pages(self.total_count, self.limit_value)

    @property
    def total_pages_remaining(self) -> int:
        return page_math.offset_pages_remaining(self.total_pages, self.current_page)

    # ----- Determiners -----

    @property
    def is_first_page(self) -> bool:
        return self.current_page == 1

    @property
    def is_last_page(self) -> bool:
        return self.current_page >= self.total_pages

    # ----- Param values -----

    @property
    def first_page_value(self) -> int:
        return 1

    @property
    def last_page_value(self) -> int:
        return self.total_pages

    @property
    def prev_page_value(self) -> Optional[int]:
        return None if self.is_first_page else self.current_page - 1

    @property
    def next_page_value(self) -> Optional[int]:
        return None if self.is_last_page else self.current_page + 1

    def page_param(self, params: Mapping[str, Any], page_value: Any, rel: str) -> dict[str, Any]:
        result = {k: v for k, v in params.items() if k not in ("page", "before", "after")}
        result["page"] = page_value
        return result


class OffsetPager:
    """Builds OffsetPage objects from a page number or a params mapping."""

    def __init__(self, settings: Optional[PaginationSettings] = None) -> None:
        self._settings = settings or get_settings().pagination

    def page(
        self,
        query: Queryable,
        request: Union[int, str, Mapping[str, Any], None] = 1,
    ) -> OffsetPage:
        """
        Page `query` by number.

        `request` is a page number (coerced; non-positive means 1) or a
        mapping with `page` and `per_page`.
        """
        params = dict(request) if isinstance(request, Mapping) else {"page": request}
        options = PageOptions.from_params(params, self._settings)
        default = self._settings.per_page_default
        scope = query.limit(default).offset(default * (options.page - 1))
        page = OffsetPage(scope, dataclasses.replace(options, per_page=default), self._settings)
        page = page.per(params.get("per_page"))
        logger.debug("Offset page %d (per_page=%d)", page.current_page, page.limit_value)
        return page
