"""FastAPI demo service exposing the three pagers over the items table."""

from api_pagination.api.app import create_app
from api_pagination.api.links import build_links, link_header

__all__ = [
    "create_app",
    "build_links",
    "link_header",
]
