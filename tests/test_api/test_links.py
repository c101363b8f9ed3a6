"""Tests for Link construction from page_param()."""

from fastapi.datastructures import URL

from api_pagination.api.links import build_links, link_header
from api_pagination.config.settings import PaginationSettings
from api_pagination.core.interface import PaginatedPage
from api_pagination.core.options import Order
from api_pagination.pagers.cursor import CursorPager
from api_pagination.pagers.offset import OffsetPager
from api_pagination.query.memory import MemoryQuery
from tests.conftest import make_records


class TestBuildLinks:
    def test_offset_links_keep_other_params(self):
        query = MemoryQuery.of(make_records(5)).order("id", Order.ASC)
        page = OffsetPager(PaginationSettings(per_page_default=2)).page(query, 2)
        links = build_links(page, URL("http://x/items?page=2&q=a"), {"page": "2", "q": "a"})
        assert links == {
            "first": "http://x/items?q=a&page=1",
            "prev": "http://x/items?q=a&page=1",
            "next": "http://x/items?q=a&page=3",
            "last": "http://x/items?q=a&page=3",
        }

    def test_sentinel_is_lowercase(self):
        page = CursorPager(PaginationSettings(per_page_default=2)).page_by(
            MemoryQuery.of(make_records(5))
        )
        links = build_links(page, URL("http://x/feed"), {})
        assert links["first"] == "http://x/feed?before=true"
        assert links["last"] == "http://x/feed?after=true"

    def test_unknown_relations_are_skipped(self):
        class Static(PaginatedPage):
            results = []

        assert build_links(Static(), URL("http://x/"), {}) == {}


class TestLinkHeader:
    def test_format(self):
        header = link_header({"next": "http://x/?page=2", "last": "http://x/?page=3"})
        assert header == '<http://x/?page=2>; rel="next", <http://x/?page=3>; rel="last"'

    def test_empty(self):
        assert link_header({}) == ""
