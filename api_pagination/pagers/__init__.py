"""Offset, cursor and filtered-cursor pagers."""

from api_pagination.pagers.cursor import CursorPage, CursorPager, bound_query
from api_pagination.pagers.filtered import FilteredCursorPager, FilteredPage
from api_pagination.pagers.offset import OffsetPage, OffsetPager

__all__ = [
    "CursorPage",
    "CursorPager",
    "bound_query",
    "FilteredCursorPager",
    "FilteredPage",
    "OffsetPage",
    "OffsetPager",
]
