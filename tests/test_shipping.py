"""Tests for the automatic shipping expense."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from leathercraft_hq.errors import MutationError, SynthesizerWriteError
from leathercraft_hq.gateway import AUTO_SHIPPING_POLICY
from leathercraft_hq.models import Order
from leathercraft_hq.shipping import (
    AUTO_SHIPPING_DESCRIPTION, AutoShippingSynthesizer, auto_shipping_record, shipping_cost, total_shipping_cost,
)


def _orders(*cities):
    return tuple(Order(f"o{i}", "Amina", city) for i, city in enumerate(cities))


class TestShippingCost:
    @pytest.mark.parametrize("city, cost", [
        ("Casablanca", 20),
        (" casablanca ", 20),
        ("CASABLANCA", 20),
        ("Rabat", 30),
        ("", 30),
        (None, 30),
    ])
    def test_per_order(self, city, cost):
        assert shipping_cost(city) == cost

    def test_total(self):
        assert total_shipping_cost(_orders("Casablanca", "Rabat", "CASABLANCA")) == 70.0

    def test_total_empty(self):
        assert total_shipping_cost(()) == 0.0


class TestAutoShippingRecord:
    def test_shape(self):
        assert auto_shipping_record(70.0, date(2024, 3, 15)) == {
            "category": "Shipping",
            "description": AUTO_SHIPPING_DESCRIPTION,
            "amount": 70.0,
            "date": "2024-03-15",
            "is_auto": True,
        }


class TestAutoShippingSynthesizer:
    def _synth(self):
        gateway = MagicMock()
        return AutoShippingSynthesizer(gateway, clock=lambda: date(2024, 3, 15)), gateway

    def test_writes_through_the_singleton_policy(self):
        synth, gateway = self._synth()
        result = synth.run("owner-1", _orders("Casablanca", "Rabat", "CASABLANCA"))
        assert result.ok
        assert result.amount == 70.0
        gateway.write_system_record.assert_called_once_with(AUTO_SHIPPING_POLICY, result.record)

    def test_idempotent(self):
        synth, gateway = self._synth()
        orders = _orders("Casablanca", "Fes")
        first = synth.run("owner-1", orders)
        second = synth.run("owner-1", orders)
        assert first.amount == second.amount == 50.0
        assert first.record == second.record

    @pytest.mark.parametrize("user_id, orders", [
        (None, _orders("Rabat")),
        ("", _orders("Rabat")),
        ("owner-1", ()),
    ])
    def test_guarded_until_ready(self, user_id, orders):
        synth, gateway = self._synth()
        assert synth.run(user_id, orders) is None
        gateway.write_system_record.assert_not_called()

    def test_write_failure_is_returned_not_raised(self):
        synth, gateway = self._synth()
        gateway.write_system_record.side_effect = MutationError("upsert", "expenses", "autoShipping", "offline")
        result = synth.run("owner-1", _orders("Rabat"))
        assert not result.ok
        assert isinstance(result.error, SynthesizerWriteError)
        assert result.error.amount == 30.0
