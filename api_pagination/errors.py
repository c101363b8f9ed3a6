"""Exceptions raised by the pagination core."""

from __future__ import annotations

from typing import Any

# Wire format of cursor tokens as advertised to API clients.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%N%z"


class PaginationError(Exception):
    """Base class for errors raised while building a page."""


class InvalidTimestampError(PaginationError, ValueError):
    """A before/after bound could not be interpreted as a time."""

    def __init__(self, value: Any, expected_format: str = TIMESTAMP_FORMAT) -> None:
        self.value = value
        self.expected_format = expected_format
        super().__init__(
            f"Invalid time value {value!r}, expected string matching {expected_format}."
        )


class MissingFilterMethodError(PaginationError):
    """Filtered pagination without a filter option on records lacking is_filtered()."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(
            "Missing filter or no filter provided, "
            f"expected {type_name} to respond to is_filtered or to have a filter option provided."
        )


class InvalidColumnError(PaginationError, ValueError):
    """A column identifier had nothing left after sanitization."""

    def __init__(self, raw: Any) -> None:
        self.raw = raw
        super().__init__(f"Invalid column {raw!r}, expected [table.]column made of word characters.")
