"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api_pagination.api.routes.health import router as health_router
from api_pagination.api.routes.items import router as items_router
from api_pagination.api.schemas import ErrorResponse
from api_pagination.config.settings import Settings, get_settings
from api_pagination.errors import PaginationError
from api_pagination.pagers.cursor import CursorPager
from api_pagination.pagers.filtered import FilteredCursorPager
from api_pagination.pagers.offset import OffsetPager
from api_pagination.storage.item_store import ItemStore
from api_pagination.storage.schema import initialize_database

logger = logging.getLogger(__name__)


async def pagination_error_handler(request: Request, exc: PaginationError) -> JSONResponse:
    """Bad pagination input is the client's fault."""
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content=ErrorResponse(detail=str(exc)).model_dump())


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build and return a fully wired FastAPI application.

    Initializes the database and creates the shared store and pagers
    before mounting routes.
    """
    settings = settings or get_settings()
    settings.ensure_dirs()
    initialize_database(settings.db_path)

    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description="Offset, cursor and filtered-cursor pagination over a SQLite table",
    )

    # Shared state, accessible via request.app.state in routes
    app.state.settings = settings
    app.state.item_store = ItemStore(settings.db_path)
    app.state.offset_pager = OffsetPager(settings.pagination)
    app.state.cursor_pager = CursorPager(settings.pagination)
    app.state.filtered_pager = FilteredCursorPager(settings.pagination)

    app.add_exception_handler(PaginationError, pagination_error_handler)

    # Mount routes
    app.include_router(health_router)
    app.include_router(items_router)

    return app
