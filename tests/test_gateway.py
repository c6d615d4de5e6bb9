"""Tests for the Mutation Gateway and the singleton record policy."""

import pytest

from conftest import expense, order
from leathercraft_hq.errors import MutationError, ReservedRecordError, ValidationError
from leathercraft_hq.gateway import AUTO_SHIPPING_ID, AUTO_SHIPPING_POLICY, MutationGateway, SingletonRecordPolicy
from leathercraft_hq.models import EXPENSES, INVENTORY, ORDERS, PRODUCTS
from leathercraft_hq.store import EntityStore


def _gateway(backend, user_id="owner-1", store=None):
    return MutationGateway(backend, store or EntityStore(), lambda: user_id)


class TestOrdinaryWrites:
    def test_add_returns_service_id(self, backend):
        gw = _gateway(backend)
        record_id = gw.products.add({"name": "Wallet", "color": "Brown", "price": 150})
        assert record_id
        assert backend.calls_for("create")[0][1] == PRODUCTS

    def test_update_is_a_merge(self, backend):
        gw = _gateway(backend)
        item_id = gw.inventory.add({"name": "Thread", "stock": 4, "low_stock_threshold": 2})
        gw.inventory.update(item_id, {"stock": 10})
        (stored,) = backend._snapshot(("owner-1", INVENTORY))
        assert stored == {"id": item_id, "name": "Thread", "stock": 10, "low_stock_threshold": 2}

    def test_delete(self, backend):
        gw = _gateway(backend)
        oid = gw.orders.add(order())
        gw.orders.delete(oid)
        assert backend._snapshot(("owner-1", ORDERS)) == []

    def test_collection_lookup(self, backend):
        gw = _gateway(backend)
        assert gw.collection(EXPENSES) is gw.expenses
        with pytest.raises(ValueError):
            gw.collection("customers")

    def test_store_is_not_touched(self, backend):
        store = EntityStore()
        gw = _gateway(backend, store=store)
        gw.orders.add(order())
        assert store.orders == ()


class TestFailures:
    def test_service_failure_is_raised_as_mutation_error(self, backend):
        backend.fail("create", ORDERS)
        with pytest.raises(MutationError) as info:
            _gateway(backend).orders.add(order())
        assert info.value.code == "42501"
        assert info.value.operation == "add"

    def test_update_of_missing_record(self, backend):
        with pytest.raises(MutationError) as info:
            _gateway(backend).products.update("nope", {"price": 1})
        assert info.value.code == "not-found"

    def test_no_session(self, backend):
        with pytest.raises(MutationError):
            _gateway(backend, user_id=None).products.add({"name": "x", "price": 1})
        assert backend.calls == []

    def test_invalid_payload_never_reaches_the_service(self, backend):
        with pytest.raises(ValidationError):
            _gateway(backend).inventory.add({"name": "Thread", "stock": -1})
        assert backend.calls == []


class TestReservedRecords:
    def test_reserved_id_rejected(self, backend):
        gw = _gateway(backend)
        with pytest.raises(ReservedRecordError):
            gw.expenses.update(AUTO_SHIPPING_ID, {"amount": 0})
        with pytest.raises(ReservedRecordError):
            gw.expenses.delete(AUTO_SHIPPING_ID)
        assert backend.calls == []

    def test_auto_flag_in_payload_rejected(self, backend):
        with pytest.raises(ReservedRecordError):
            _gateway(backend).expenses.add(expense(is_auto=True))

    def test_auto_expense_in_snapshot_is_read_only(self, backend):
        store = EntityStore()
        store.replace(EXPENSES, [{"id": "legacy", "category": "Shipping", "amount": 30, "is_auto": True}])
        gw = _gateway(backend, store=store)
        assert gw.is_read_only(EXPENSES, "legacy")
        with pytest.raises(ReservedRecordError):
            gw.expenses.delete("legacy")

    def test_ordinary_expense_is_writable(self, backend):
        gw = _gateway(backend)
        eid = gw.expenses.add(expense())
        assert not gw.is_read_only(EXPENSES, eid)
        gw.expenses.update(eid, {"amount": 12})

    def test_system_write_uses_upsert(self, backend):
        gw = _gateway(backend)
        gw.write_system_record(AUTO_SHIPPING_POLICY, {"category": "Shipping", "amount": 50, "is_auto": True})
        gw.write_system_record(AUTO_SHIPPING_POLICY, {"amount": 70})
        (stored,) = backend._snapshot(("owner-1", EXPENSES))
        assert stored["id"] == AUTO_SHIPPING_ID
        assert stored["amount"] == 70
        assert stored["category"] == "Shipping"

    def test_unregistered_policy(self, backend):
        with pytest.raises(ValueError):
            _gateway(backend).write_system_record(SingletonRecordPolicy(ORDERS, "x"), {})

    def test_policy_covers(self):
        assert AUTO_SHIPPING_POLICY.covers(EXPENSES, AUTO_SHIPPING_ID)
        assert not AUTO_SHIPPING_POLICY.covers(ORDERS, AUTO_SHIPPING_ID)
