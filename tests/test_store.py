"""Tests for the Entity Store."""

import pytest

from leathercraft_hq.models import EXPENSES, ORDERS, MarketingExpense
from leathercraft_hq.store import EntityStore


class TestEntityStore:
    def test_starts_empty_and_unloaded(self):
        store = EntityStore()
        assert store.orders == ()
        assert not store.is_loaded(ORDERS)

    def test_replace_is_wholesale(self):
        store = EntityStore()
        store.replace(ORDERS, [{"id": "a", "total": 1}, {"id": "b", "total": 2}])
        store.replace(ORDERS, [{"id": "c", "total": 3}])
        assert [o.id for o in store.orders] == ["c"]
        assert store.is_loaded(ORDERS)

    def test_empty_snapshot_still_counts_as_loaded(self):
        store = EntityStore()
        store.replace(ORDERS, [])
        assert store.is_loaded(ORDERS)

    def test_records_without_id_are_skipped(self):
        store = EntityStore()
        store.replace(EXPENSES, [{"category": "Tools"}, {"id": "e1", "category": "Marketing"}, "junk"])
        assert len(store.expenses) == 1
        assert isinstance(store.get(EXPENSES, "e1"), MarketingExpense)

    def test_collections_are_independent(self):
        store = EntityStore()
        store.replace(ORDERS, [{"id": "a"}])
        store.replace(EXPENSES, [{"id": "e1", "category": "Tools"}])
        store.replace(ORDERS, [])
        assert len(store.expenses) == 1

    def test_get_missing(self):
        assert EntityStore().get(ORDERS, "nope") is None

    def test_unknown_collection(self):
        with pytest.raises(ValueError):
            EntityStore().replace("customers", [])

    def test_clear(self):
        store = EntityStore()
        store.replace(ORDERS, [{"id": "a"}])
        store.clear()
        assert store.orders == ()
        assert not store.is_loaded(ORDERS)
