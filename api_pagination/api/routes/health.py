"""Health and stats routes."""

from __future__ import annotations

from fastapi import APIRouter, Request

from api_pagination.api.schemas import StatsResponse
from api_pagination.storage.schema import get_schema_version

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> dict:
    """Simple liveness check."""
    return {"status": "ok"}


@router.get("/stats", response_model=StatsResponse)
def stats(request: Request) -> StatsResponse:
    """Return item counts and the schema version."""
    item_store = request.app.state.item_store
    settings = request.app.state.settings

    return StatsResponse(
        item_count=item_store.count(),
        disabled_count=item_store.count_disabled(),
        schema_version=get_schema_version(settings.db_path),
    )
