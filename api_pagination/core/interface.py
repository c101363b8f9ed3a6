"""
Common navigational interface implemented by every page type.

Every capability defaults to None ("unknown"). Pagers override what they
can answer; FilteredPage, for instance, never knows its totals.

Memoized values are written once per page object without locking, so a
page must not be shared between threads.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional

from api_pagination.core.options import PageOptions

RELATIONS = ("first", "prev", "next", "last")

# Relations whose value travels in the inverse cursor key
_INVERSE_RELATIONS = frozenset({"prev", "last"})


class PaginatedPage:
    """Base class for page results: a read-only sequence plus navigation."""

    paginatable = True

    @property
    def results(self) -> list[Any]:
        raise NotImplementedError

    # ----- Sequence behaviour -----

    def __iter__(self) -> Iterator[Any]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, index):
        return self.results[index]

    def first(self) -> Any:
        results = self.results
        return results[0] if results else None

    def last(self) -> Any:
        results = self.results
        return results[-1] if results else None

    def to_list(self) -> list[Any]:
        return list(self.results)

    # ----- Counts -----

    @property
    def total_count(self) -> Optional[int]:
        return None

    @property
    def total_pages(self) -> Optional[int]:
        return None

    @property
    def total_pages_remaining(self) -> Optional[int]:
        return None

    # ----- Determiners -----

    @property
    def is_first_page(self) -> Optional[bool]:
        return None

    @property
    def is_last_page(self) -> Optional[bool]:
        return None

    # ----- Param values -----

    @property
    def first_page_value(self) -> Any:
        return None

    @property
    def last_page_value(self) -> Any:
        return None

    @property
    def prev_page_value(self) -> Any:
        return None

    @property
    def next_page_value(self) -> Any:
        return None

    def page_value(self, rel: str) -> Any:
        """Value for one of the RELATIONS."""
        if rel not in RELATIONS:
            raise ValueError(f"Unknown relation {rel!r}, expected one of {RELATIONS}")
        return getattr(self, f"{rel}_page_value")

    # ----- Param helper -----

    def page_param(
        self, params: Mapping[str, Any], page_value: Any, rel: str
    ) -> Optional[dict[str, Any]]:
        """Return a copy of `params` pointing at `page_value`. None when unsupported."""
        return None


def cursor_page_param(
    options: PageOptions, params: Mapping[str, Any], page_value: Any, rel: str
) -> dict[str, Any]:
    """
    Write a cursor value into a copy of `params`.

    Both cursor keys (and `page`) are cleared first. "prev" and "last"
    travel in the inverse key of the current order, everything else in the
    forward key.
    """
    key, inverse = options.cursor_params
    result = {k: v for k, v in params.items() if k not in (key, inverse, "page")}
    result[inverse if rel in _INVERSE_RELATIONS else key] = page_value
    return result
