"""Tests for the in-memory Queryable."""

from datetime import timedelta

import pytest

from api_pagination.core.options import Order
from api_pagination.query.base import Queryable
from api_pagination.query.memory import MemoryQuery
from tests.conftest import TIME, make_records


@pytest.fixture
def query() -> MemoryQuery:
    return MemoryQuery.of(make_records(5))


def ids(records):
    return [r.id for r in records]


class TestBuilders:
    def test_satisfies_protocol(self, query):
        assert isinstance(query, Queryable)

    def test_builders_do_not_mutate(self, query):
        query.limit(2).where_lt("created_at", TIME)
        assert query.limit_value is None
        assert query.conditions == ()
        assert query.count() == 5

    def test_order(self, query):
        assert ids(query.order("created_at", Order.ASC).fetch()) == [5, 4, 3, 2, 1]
        assert ids(query.order("created_at", Order.DESC).fetch()) == [1, 2, 3, 4, 5]

    def test_limit_offset(self, query):
        assert ids(query.order("id").offset(1).limit(2).fetch()) == [2, 3]

    def test_where_lt_gt(self, query):
        bound = TIME - timedelta(days=2)
        assert ids(query.where_lt("created_at", bound).order("id").fetch()) == [4, 5]
        assert ids(query.where_gt("created_at", bound).order("id").fetch()) == [1, 2]

    def test_where_equality(self, query):
        assert ids(query.where("title", "record 3").fetch()) == [3]

    def test_without(self, query):
        scoped = query.order("id").limit(1).offset(1)
        bare = scoped.without("limit", "offset")
        assert bare.count() == 5
        assert bare.ordering == scoped.ordering
        assert scoped.without("order").ordering == ()

    def test_without_unknown_part(self, query):
        with pytest.raises(ValueError):
            query.without("where")


class TestNullsAndMixedTimes:
    def test_none_never_matches(self):
        records = make_records(3, {2: {"created_at": None}})
        query = MemoryQuery.of(records)
        assert ids(query.where_lt("created_at", TIME + timedelta(days=1)).order("id").fetch()) == [1, 3]

    def test_none_sorts_first_ascending(self):
        records = make_records(3, {2: {"created_at": None}})
        assert ids(MemoryQuery.of(records).order("created_at", Order.ASC).fetch()) == [2, 3, 1]

    def test_naive_bound_against_aware_values(self, query):
        naive = (TIME - timedelta(days=3)).replace(tzinfo=None)
        assert query.where_lt("created_at", naive).count() == 1


class TestExecution:
    def test_first_last_size(self, query):
        ordered = query.order("id").limit(3)
        assert ordered.first().id == 1
        assert ordered.last().id == 3
        assert ordered.size() == 3

    def test_empty(self):
        empty = MemoryQuery.of([])
        assert empty.first() is None
        assert empty.last() is None
        assert empty.count() == 0

    def test_mappings(self):
        query = MemoryQuery.of([{"id": 1, "n": 2}, {"id": 2, "n": 1}])
        assert [r["id"] for r in query.order("n").fetch()] == [2, 1]

    def test_signature_tracks_conditions(self, query):
        assert query.limit(2).signature() == query.limit(2).signature()
        assert query.where_lt("created_at", TIME).signature() != query.signature()

    def test_to_sql(self, query):
        sql = query.where_gt("id", 1).order("id", Order.DESC).limit(2).to_sql()
        assert sql == "SELECT * FROM memory WHERE id > 1 ORDER BY id DESC LIMIT 2"
