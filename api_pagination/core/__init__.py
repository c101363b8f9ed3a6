"""Pagination primitives: page math, cursor codec, options, filters, page interface."""

from api_pagination.core.cursor import (
    CursorKind,
    ParsedCursor,
    format_timestamp,
    is_sentinel,
    parse_cursor,
    serialize_cursor,
)
from api_pagination.core.filters import FilterableMixin, resolve_filter
from api_pagination.core.interface import RELATIONS, PaginatedPage
from api_pagination.core.options import ColumnRef, Order, PageOptions, sanitize_column
from api_pagination.core.page_math import clamp_per_page, coerce_int, total_pages

__all__ = [
    "CursorKind",
    "ParsedCursor",
    "format_timestamp",
    "is_sentinel",
    "parse_cursor",
    "serialize_cursor",
    "FilterableMixin",
    "resolve_filter",
    "RELATIONS",
    "PaginatedPage",
    "ColumnRef",
    "Order",
    "PageOptions",
    "sanitize_column",
    "clamp_per_page",
    "coerce_int",
    "total_pages",
]
