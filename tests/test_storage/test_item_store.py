"""Tests for the ItemStore CRUD operations and Item model."""

from datetime import datetime, timedelta, timezone

import pytest

from api_pagination.core.options import Order
from api_pagination.storage.models import Item, from_db_timestamp, to_db_timestamp
from tests.conftest import TIME, make_item


class TestTimestamps:
    def test_fixed_width_utc(self):
        assert to_db_timestamp(TIME) == "2012-10-20 00:00:00.000000"

    def test_offset_is_converted(self):
        local = datetime(2012, 10, 20, 2, tzinfo=timezone(timedelta(hours=2)))
        assert to_db_timestamp(local) == "2012-10-20 00:00:00.000000"

    def test_naive_is_utc(self):
        assert to_db_timestamp(datetime(2012, 10, 20, 1, 2, 3, 4)) == "2012-10-20 01:02:03.000004"

    def test_round_trip(self):
        value = datetime(2012, 10, 20, 1, 2, 3, 4, tzinfo=timezone.utc)
        assert from_db_timestamp(to_db_timestamp(value)) == value

    def test_null(self):
        assert from_db_timestamp(None) is None


class TestItemModel:
    def test_is_filtered_follows_disabled(self):
        assert Item(disabled=True).is_filtered() is True
        assert Item().is_filtered() is False

    def test_defaults_are_aware(self):
        assert Item().created_at.tzinfo is not None


class TestItemInsert:
    def test_insert_sets_id(self, item_store):
        item = item_store.insert(make_item())
        assert item.id == 1
        assert item_store.insert(make_item(1)).id == 2

    def test_insert_many(self, item_store):
        assert item_store.insert_many([make_item(i) for i in range(5)]) == 5
        assert item_store.count() == 5


class TestItemRead:
    def test_get_by_id(self, item_store):
        item_store.insert(make_item(2, title="hello", disabled=True, active=False))

        result = item_store.get_by_id(1)
        assert result is not None
        assert result.title == "hello"
        assert result.disabled is True
        assert result.active is False
        assert result.created_at == TIME - timedelta(days=2)

    def test_get_by_id_not_found(self, item_store):
        assert item_store.get_by_id(42) is None

    def test_counts(self, seeded_store):
        assert seeded_store.count() == 9
        assert seeded_store.count(user_id=1) == 5
        assert seeded_store.count_disabled() == 2

    def test_query_maps_to_items(self, seeded_store):
        newest = seeded_store.query().order("created_at", Order.DESC).first()
        assert isinstance(newest, Item)
        assert newest.id == 1

    @pytest.mark.parametrize("column", ["created_at", "updated_at"])
    def test_query_orders_by_timestamps(self, seeded_store, column):
        oldest = seeded_store.query().order(column, Order.ASC).first()
        assert oldest.id == 9
