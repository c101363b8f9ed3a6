"""Pydantic response models for the demo API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel

# Offset pages navigate by number, cursor pages by token or the `true` sentinel
PageValue = Union[bool, int, str]


class ItemResponse(BaseModel):
    """A single item."""

    id: int
    user_id: Optional[int] = None
    title: Optional[str] = None
    active: bool = False
    disabled: bool = False
    created_at: datetime
    updated_at: datetime


class PageLinks(BaseModel):
    """Navigation URLs; a missing relation is null."""

    first: Optional[str] = None
    prev: Optional[str] = None
    next: Optional[str] = None
    last: Optional[str] = None


class ItemPageResponse(BaseModel):
    """
    One page of items plus whatever the pager knows about its position.

    Filtered feeds cannot count, so their totals are null.
    """

    items: list[ItemResponse]
    per_page: int
    total_count: Optional[int] = None
    total_pages: Optional[int] = None
    total_pages_remaining: Optional[int] = None
    is_first_page: Optional[bool] = None
    is_last_page: Optional[bool] = None
    prev_page: Optional[PageValue] = None
    next_page: Optional[PageValue] = None
    links: PageLinks


class StatsResponse(BaseModel):
    """Database statistics."""

    item_count: int
    disabled_count: int
    schema_version: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
