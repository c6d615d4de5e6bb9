"""Tests for entity parsing, form payload builders and write validation."""

from datetime import date

import pytest

from leathercraft_hq.errors import ValidationError
from leathercraft_hq.models import (
    EXPENSES, INVENTORY, ORDERS, PRODUCTS,
    InventoryItem, MarketingExpense, OtherExpense, Order, Product, ShippingExpense,
    build_expense_record, build_inventory_record, build_order_record, build_product_record,
    expense_from_record, parse_money, parse_record, validate_record,
)


class TestParseMoney:
    @pytest.mark.parametrize("raw, expected", [
        (12.5, 12.5),
        ("1,250.00", 1250.0),
        ("99 MAD", 99.0),
        (None, 0.0),
        ("", 0.0),
        ("--", 0.0),
        ("abc", 0.0),
        (True, 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
    ])
    def test_values(self, raw, expected):
        assert parse_money(raw) == expected


class TestEntityParsing:
    def test_order_from_record(self):
        o = Order.from_record({
            "id": "o1", "customer_name": "Amina", "city": "Casablanca", "date": "2024-03-15",
            "items": [{"product_name": "Wallet - Brown", "qty": 2, "price": 150}],
            "total": "300", "status": "Delivered",
        })
        assert o.total == 300.0
        assert o.is_delivered
        assert o.items[0].line_total == 300.0

    def test_order_keeps_unknown_status(self):
        o = Order.from_record({"id": "o1", "status": "Returned"})
        assert o.status == "Returned"
        assert not o.is_delivered
        assert not o.is_pending

    def test_order_with_malformed_fields(self):
        o = Order.from_record({"id": "o1", "total": "n/a", "items": "oops"})
        assert o.total == 0.0
        assert o.items == ()

    def test_product_label(self):
        assert Product.from_record({"id": "p1", "name": "Wallet", "color": "Brown"}).label == "Wallet - Brown"

    def test_low_stock_is_inclusive(self):
        item = InventoryItem.from_record({"id": "i1", "name": "Thread", "stock": 5, "low_stock_threshold": 5})
        assert item.is_low_stock
        assert item.stock_label == "Low Stock"
        assert InventoryItem("i2", "Hide", 6, 5).stock_label == "In Stock"

    def test_expense_variant_by_category(self):
        e = expense_from_record({"id": "e1", "category": "Shipping", "amount": 20, "is_auto": "true"})
        assert isinstance(e, ShippingExpense)
        assert e.is_auto is True

    def test_marketing_expense_keeps_platform(self):
        e = expense_from_record({"id": "e1", "category": "Marketing", "platform": "Instagram",
                                 "campaign": "Spring", "amount": 80})
        assert isinstance(e, MarketingExpense)
        assert (e.platform, e.campaign) == ("Instagram", "Spring")
        assert e.to_record()["platform"] == "Instagram"

    def test_non_marketing_expense_drops_stray_platform(self):
        e = expense_from_record({"id": "e1", "category": "Tools", "platform": "TikTok"})
        assert not hasattr(e, "platform")
        assert "platform" not in e.to_record()

    def test_unknown_category_parses_as_other(self):
        e = expense_from_record({"id": "e1", "category": "Rent", "amount": 500})
        assert isinstance(e, OtherExpense)
        assert e.category == "Other"

    def test_parse_record_unknown_collection(self):
        with pytest.raises(ValueError):
            parse_record("customers", {"id": "x"})


class TestBuildOrderRecord:
    products = (Product("p1", "Wallet", "Brown", 150.0), Product("p2", "Belt", "Black", 90.0))

    def test_new_order(self):
        record = build_order_record(" Amina ", " Casablanca", [("p1", 2)], self.products,
                                    today=date(2024, 3, 15))
        assert record == {
            "customer_name": "Amina",
            "city": "Casablanca",
            "items": [{"product_name": "Wallet - Brown", "qty": 2, "price": 150.0}],
            "total": 300.0,
            "date": "2024-03-15",
            "status": "Pending",
        }

    def test_quantity_is_at_least_one(self):
        record = build_order_record("A", "B", [("p2", 0)], self.products, today=date(2024, 1, 1))
        assert record["items"][0]["qty"] == 1
        assert record["total"] == 90.0

    def test_edit_keeps_date_and_status(self):
        existing = Order("o1", "Amina", "Rabat", "2023-12-01", status="Delivered")
        record = build_order_record("Amina", "Rabat", [("p2", 1)], self.products, existing=existing)
        assert record["date"] == "2023-12-01"
        assert "status" not in record

    def test_unknown_product_rejected(self):
        with pytest.raises(ValidationError):
            build_order_record("A", "B", [("missing", 1)], self.products)


class TestBuildOtherRecords:
    def test_product(self):
        assert build_product_record(" Wallet ", "Brown", "150") == {"name": "Wallet", "color": "Brown", "price": 150.0}

    def test_inventory(self):
        assert build_inventory_record("Thread", "12", None) == {"name": "Thread", "stock": 12, "low_stock_threshold": 0}

    def test_marketing_expense_description(self):
        record = build_expense_record("Marketing", "2024-03-01", "80", platform="Instagram", campaign=" Spring ")
        assert record["description"] == "[Instagram] Spring"
        assert record["platform"] == "Instagram"
        assert record["is_auto"] is False

    def test_plain_expense_clears_platform(self):
        record = build_expense_record("Tools", "2024-03-01", 45, description="Edge beveler", platform="TikTok")
        assert record["platform"] is None
        assert record["campaign"] is None
        assert record["description"] == "Edge beveler"

    def test_unknown_category(self):
        with pytest.raises(ValidationError):
            build_expense_record("Rent", "2024-03-01", 10)


class TestValidateRecord:
    def test_valid_order(self):
        validate_record(ORDERS, {"status": "Pending", "total": 10,
                                 "items": [{"product_name": "x", "qty": 1, "price": 10}]})

    @pytest.mark.parametrize("data", [
        {"status": "Lost", "items": [{"qty": 1, "price": 1}]},
        {"items": []},
        {"items": [{"qty": 0, "price": 1}]},
        {"items": [{"qty": 1.5, "price": 1}]},
        {"items": [{"qty": 1, "price": -1}]},
        {"total": "ten", "items": [{"qty": 1, "price": 1}]},
        {},
    ])
    def test_invalid_orders(self, data):
        with pytest.raises(ValidationError):
            validate_record(ORDERS, data)

    def test_partial_order_update_needs_no_items(self):
        validate_record(ORDERS, {"status": "Shipped"}, partial=True)

    def test_negative_price(self):
        with pytest.raises(ValidationError):
            validate_record(PRODUCTS, {"price": -5})

    def test_inventory_counts_are_whole(self):
        with pytest.raises(ValidationError):
            validate_record(INVENTORY, {"stock": 2.5})
        with pytest.raises(ValidationError):
            validate_record(INVENTORY, {"low_stock_threshold": float("inf")})

    def test_expense_needs_category_on_add(self):
        with pytest.raises(ValidationError):
            validate_record(EXPENSES, {"amount": 5})
        validate_record(EXPENSES, {"amount": 5}, partial=True)

    def test_unknown_collection(self):
        with pytest.raises(ValueError):
            validate_record("customers", {})
