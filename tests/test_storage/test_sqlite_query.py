"""Tests for the SQLite-backed Queryable."""

from datetime import timedelta

import pytest

from api_pagination.core.options import ColumnRef, Order
from api_pagination.query.base import Queryable
from api_pagination.storage.models import Item
from api_pagination.storage.query import SqliteQuery
from tests.conftest import TIME


def ids(records):
    return [r.id for r in records]


class TestSqlComposition:
    def test_plain_select(self):
        assert SqliteQuery("items").to_sql() == "SELECT * FROM items"

    def test_bound_order_limit(self):
        query = (
            SqliteQuery("items")
            .where_lt("created_at", TIME)
            .order("created_at", Order.DESC)
            .limit(20)
        )
        assert query.to_sql() == (
            "SELECT * FROM items WHERE items.created_at < '2012-10-20 00:00:00.000000' "
            "ORDER BY items.created_at DESC LIMIT 20"
        )

    def test_offset_without_limit(self):
        assert SqliteQuery("items").offset(5).to_sql() == "SELECT * FROM items LIMIT -1 OFFSET 5"

    def test_qualified_column_keeps_table(self):
        query = SqliteQuery("items").order(ColumnRef("created_at", "other"), Order.ASC)
        assert query.to_sql() == "SELECT * FROM items ORDER BY other.created_at ASC"

    def test_column_is_sanitized(self):
        query = SqliteQuery("items").order("created_at; DROP TABLE items", Order.ASC)
        assert "DROP TABLE" not in query.to_sql()

    def test_literals_are_quoted(self):
        sql = SqliteQuery("items").where("title", "it's ? here").to_sql()
        assert sql == "SELECT * FROM items WHERE items.title = 'it''s ? here'"

    def test_booleans_bind_as_integers(self):
        assert SqliteQuery("items").where("active", True).to_sql().endswith("items.active = 1")

    def test_invalid_table(self):
        with pytest.raises(ValueError):
            SqliteQuery("items; DROP TABLE items")

    def test_without(self):
        query = SqliteQuery("items").order("id", Order.ASC).limit(2).offset(4)
        assert query.without("limit", "offset", "order").to_sql() == "SELECT * FROM items"

    def test_signature(self):
        base = SqliteQuery("items").limit(2)
        assert base.signature() == SqliteQuery("items").limit(2).signature()
        assert base.where_lt("created_at", TIME).signature() != base.signature()


class TestExecution:
    def test_satisfies_protocol(self, seeded_store):
        assert isinstance(seeded_store.query(), Queryable)

    def test_fetch_returns_items(self, seeded_store):
        records = seeded_store.query().order("created_at", Order.DESC).limit(3).fetch()
        assert all(isinstance(r, Item) for r in records)
        assert ids(records) == [1, 2, 3]
        assert records[0].created_at == TIME

    def test_count_respects_limit(self, seeded_store):
        query = seeded_store.query()
        assert query.count() == 9
        assert query.limit(4).count() == 4
        assert query.offset(7).count() == 2

    def test_bounds(self, seeded_store):
        bound = TIME - timedelta(days=2)
        older = seeded_store.query().where_lt("created_at", bound).order("id", Order.ASC)
        newer = seeded_store.query().where_gt("created_at", bound).order("id", Order.ASC)
        assert ids(older.fetch()) == [4, 5, 6, 7, 8, 9]
        assert ids(newer.fetch()) == [1, 2]

    def test_first_last_size(self, seeded_store):
        query = seeded_store.query().order("id", Order.ASC).limit(3)
        assert query.first().id == 1
        assert query.last().id == 3
        assert query.size() == 3

    def test_default_row_factory(self, seeded_store, db_path):
        row = SqliteQuery("items", db_path=db_path).order("id", Order.ASC).first()
        assert row["title"] == "item 1"
        assert row["created_at"] == "2012-10-20 00:00:00.000000"

    def test_empty(self, item_store):
        query = item_store.query()
        assert query.fetch() == []
        assert query.first() is None
        assert query.count() == 0
