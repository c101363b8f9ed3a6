"""Navigation links built from a page's page_param()."""

from __future__ import annotations

from typing import Any, Mapping

from fastapi.datastructures import URL

from api_pagination.core.interface import RELATIONS, PaginatedPage


def _query_value(value: Any) -> str:
    # The cursor sentinel goes over the wire as "true"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_links(page: PaginatedPage, url: URL, params: Mapping[str, Any]) -> dict[str, str]:
    """
    Map each relation the page can answer to a URL.

    Relations whose value is None, or for which the page has no
    page_param, are left out.
    """
    links: dict[str, str] = {}
    for rel in RELATIONS:
        value = page.page_value(rel)
        if value is None:
            continue
        query = page.page_param(params, value, rel)
        if query is None:
            continue
        encoded = {k: _query_value(v) for k, v in query.items() if v is not None}
        links[rel] = str(url.replace_query_params(**encoded))
    return links


def link_header(links: Mapping[str, str]) -> str:
    """Render links as an RFC 8288 Link header value."""
    return ", ".join(f'<{href}>; rel="{rel}"' for rel, href in links.items())
