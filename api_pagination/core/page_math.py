"""Page arithmetic shared by all pagers. Pure functions, no I/O."""

from __future__ import annotations

import math
import re
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_int(value: Any) -> int:
    """
    Loosely convert a request value to an int.

    Strings are read up to the first non-digit ("12abc" -> 12, "x" -> 0),
    numbers are truncated, anything else is 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return 0 if math.isnan(value) or math.isinf(value) else int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def clamp_per_page(requested: Any, default: int, maximum: int) -> int:
    """Return `default` for non-positive requests, otherwise cap at `maximum`."""
    size = coerce_int(requested)
    if size <= 0:
        return default
    return min(size, maximum)


def total_pages(count: int, per_page: int) -> int:
    """Number of pages needed to show `count` rows, `per_page` at a time."""
    if per_page <= 0:
        return 0
    return math.ceil(count / per_page)


def offset_pages_remaining(pages: int, current_page: int) -> int:
    """Pages after the current one for numbered pagination."""
    return max(pages - current_page, 0)


def cursor_pages_remaining(remaining_count: int, per_page: int) -> int:
    """
    Pages after the current one for cursor pagination.

    `remaining_count` includes the rows of the current page, hence the - 1.
    """
    return max(total_pages(remaining_count, per_page) - 1, 0)
