"""
Cursor token parsing and serialization.

A cursor is the ordering-column value of the first or last record on a
page, written in a fixed wire format:

    2012-10-18T00:00:00.000000000+0000

Inputs are deliberately lenient. The literal `True` (or the string
"true") is a sentinel meaning "start of the sequence", time-like strings
are parsed loosely, and strings that cannot be resolved to a time are
treated as "no bound". Typed values that are not times (numbers, lists,
...) are rejected with InvalidTimestampError before any query runs.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

from dateutil import parser as date_parser

from api_pagination.errors import TIMESTAMP_FORMAT, InvalidTimestampError

logger = logging.getLogger(__name__)

SENTINEL = True
SENTINEL_STRING = "true"


class CursorKind(enum.Enum):
    NONE = "none"
    SENTINEL = "sentinel"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class ParsedCursor:
    """Classified before/after input. `value` is a UTC datetime for TIMESTAMP."""

    kind: CursorKind
    value: Optional[datetime] = None

    @property
    def is_bound(self) -> bool:
        return self.kind is CursorKind.TIMESTAMP


_NO_CURSOR = ParsedCursor(CursorKind.NONE)
_SENTINEL_CURSOR = ParsedCursor(CursorKind.SENTINEL)


def is_sentinel(raw: Any) -> bool:
    """True for the literal `True` or the string "true"."""
    return raw is True or (isinstance(raw, str) and raw == SENTINEL_STRING)


def as_datetime(value: date) -> datetime:
    """Promote dates to midnight and give naive datetimes a UTC zone."""
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_cursor(raw: Any, expected_format: str = TIMESTAMP_FORMAT) -> ParsedCursor:
    """
    Classify a before/after value.

    Raises:
        InvalidTimestampError: `raw` is neither a string, a time nor a sentinel.
    """
    if raw is None or raw is False:
        return _NO_CURSOR
    if is_sentinel(raw):
        return _SENTINEL_CURSOR
    if isinstance(raw, date):
        return ParsedCursor(CursorKind.TIMESTAMP, as_datetime(raw).astimezone(timezone.utc))
    if isinstance(raw, str):
        if not raw.strip():
            return _NO_CURSOR
        try:
            parsed = date_parser.parse(raw)
        except (ValueError, OverflowError):
            logger.debug("Ignoring unparseable cursor %r", raw)
            return _NO_CURSOR
        return ParsedCursor(CursorKind.TIMESTAMP, as_datetime(parsed).astimezone(timezone.utc))
    raise InvalidTimestampError(raw, expected_format)


def format_timestamp(value: date) -> str:
    """Render a time in the cursor wire format (nine fractional digits, +HHMM offset)."""
    value = as_datetime(value)
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond:06d}000{value:%z}"


def read_field(record: Any, name: str) -> Any:
    """Read a named field off a record object or mapping. Missing fields are None."""
    if hasattr(record, name):
        return getattr(record, name)
    try:
        return record[name]
    except (KeyError, IndexError, TypeError):
        return None


def serialize_cursor(
    record: Any,
    column: str,
    page_value: Optional[Callable[[Any], Any]] = None,
) -> Any:
    """
    Build the cursor token for a record.

    With `page_value`, its result is used as the token (formatted when it is
    a time). Otherwise `column` is read off the record and formatted; a
    missing or non-time value yields None.
    """
    if record is None:
        return None
    if page_value is not None:
        value = page_value(record)
        return format_timestamp(value) if isinstance(value, date) else value
    value = read_field(record, column)
    if isinstance(value, date):
        return format_timestamp(value)
    return None
