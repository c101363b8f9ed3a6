"""Item listing routes, one per pagination strategy."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query, Request, Response

from api_pagination.api.links import build_links, link_header
from api_pagination.api.schemas import ItemPageResponse, ItemResponse, PageLinks
from api_pagination.core.interface import PaginatedPage
from api_pagination.core.options import Order, sanitize_column
from api_pagination.storage.models import Item

router = APIRouter(prefix="/items", tags=["items"])

SORTABLE_COLUMNS = frozenset({"created_at", "updated_at"})


def _request_params(request: Request) -> dict[str, Any]:
    return dict(request.query_params)


def _check_column(column: Optional[str]) -> None:
    # Raises InvalidColumnError (-> 400) when nothing is left after sanitizing
    if column is None:
        return
    ref = sanitize_column(column)
    if ref.name not in SORTABLE_COLUMNS or ref.table not in (None, "items"):
        raise HTTPException(
            status_code=400,
            detail=f"Cannot paginate by {column!r}, expected one of {sorted(SORTABLE_COLUMNS)}",
        )


def _to_response(item: Item) -> ItemResponse:
    return ItemResponse(
        id=item.id,
        user_id=item.user_id,
        title=item.title,
        active=item.active,
        disabled=item.disabled,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def _page_response(
    request: Request,
    response: Response,
    page: PaginatedPage,
    per_page: int,
) -> ItemPageResponse:
    """Serialize a page and attach its Link header."""
    links = build_links(page, request.url, _request_params(request))
    if links:
        response.headers["Link"] = link_header(links)

    return ItemPageResponse(
        items=[_to_response(item) for item in page],
        per_page=per_page,
        total_count=page.total_count,
        total_pages=page.total_pages,
        total_pages_remaining=page.total_pages_remaining,
        is_first_page=page.is_first_page,
        is_last_page=page.is_last_page,
        prev_page=page.prev_page_value,
        next_page=page.next_page_value,
        links=PageLinks(**links),
    )


@router.get("", response_model=ItemPageResponse)
def list_items(
    request: Request,
    response: Response,
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    per_page: Optional[str] = Query(None, description="Items per page"),
) -> ItemPageResponse:
    """Numbered pages, newest first."""
    store = request.app.state.item_store
    pager = request.app.state.offset_pager

    query = store.query().order("created_at", Order.DESC).order("id", Order.DESC)
    result = pager.page(query, {"page": page, "per_page": per_page})
    return _page_response(request, response, result, result.limit_value)


@router.get("/timeline", response_model=ItemPageResponse)
def timeline(
    request: Request,
    response: Response,
    before: Optional[str] = Query(None, description="Cursor; items strictly older than it"),
    after: Optional[str] = Query(None, description="Cursor; items strictly newer than it"),
    per_page: Optional[str] = Query(None, description="Items per page"),
    column: Optional[str] = Query(None, description="Timestamp column to order by"),
    user_id: Optional[int] = Query(None, description="Only items of this user"),
) -> ItemPageResponse:
    """Cursor pages over every item, newest first unless `after` is given."""
    _check_column(column)
    store = request.app.state.item_store
    pager = request.app.state.cursor_pager

    query = store.query()
    if user_id is not None:
        query = query.where("user_id", user_id)

    params = {"before": before, "after": after, "per_page": per_page, "column": column}
    result = pager.page_by(query, params)
    return _page_response(request, response, result, result.limit_value)


@router.get("/feed", response_model=ItemPageResponse)
def feed(
    request: Request,
    response: Response,
    before: Optional[str] = Query(None, description="Cursor; items strictly older than it"),
    after: Optional[str] = Query(None, description="Cursor; items strictly newer than it"),
    per_page: Optional[str] = Query(None, description="Items per page"),
    column: Optional[str] = Query(None, description="Timestamp column to order by"),
    active: Optional[bool] = Query(None, description="Only active (or inactive) items"),
) -> ItemPageResponse:
    """
    Cursor pages that skip disabled items.

    Disabled items are dropped after fetching, so totals are unknown and
    every non-empty page links onwards.
    """
    _check_column(column)
    store = request.app.state.item_store
    pager = request.app.state.filtered_pager

    scope = None
    if active is not None:
        scope = lambda query: query.where("active", active)  # noqa: E731

    params = {"before": before, "after": after, "per_page": per_page, "column": column}
    result = pager.filtered_page_by(store.query(), params, scope=scope)
    return _page_response(request, response, result, result.options.per_page)
