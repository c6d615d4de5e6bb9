"""Tests for the derived dashboard metrics."""

import pytest

from leathercraft_hq.metrics import (
    DashboardStats, compute_metrics, expense_categories, filter_expenses, month_of,
)
from leathercraft_hq.models import InventoryItem, MaterialsExpense, Order, ShippingExpense, ToolsExpense


def _order(oid, total, status="Delivered", date="2024-03-15", city="Rabat"):
    return Order(oid, "Amina", city, date, (), total, status)


class TestTotals:
    def test_revenue_counts_delivered_only(self):
        orders = (_order("a", 100), _order("b", 50, "Pending"), _order("c", 25, "Shipped"))
        assert compute_metrics(orders, (), ()).total_revenue == 100

    def test_non_delivered_total_does_not_move_revenue(self):
        before = compute_metrics((_order("a", 100), _order("b", 50, "Pending")), (), ())
        after = compute_metrics((_order("a", 100), _order("b", 9999, "Pending")), (), ())
        assert before.total_revenue == after.total_revenue == 100

    def test_net_profit_can_be_negative(self):
        stats = compute_metrics(
            (_order("a", 100),),
            (MaterialsExpense("e1", "2024-03-20", "", 250.0),),
            (),
        )
        assert stats.total_expenses == 250
        assert stats.net_profit == -150

    def test_pending_orders(self):
        orders = (_order("a", 1, "Pending"), _order("b", 1, "Pending"), _order("c", 1, "Returned"))
        assert compute_metrics(orders, (), ()).pending_orders == 2

    def test_low_stock_monotonic_in_threshold(self):
        items = (InventoryItem("i1", "Thread", 3, 1), InventoryItem("i2", "Hide", 10, 2))
        base = compute_metrics((), (), items).low_stock_items
        raised = (InventoryItem("i1", "Thread", 3, 5), items[1])
        assert base == 0
        assert compute_metrics((), (), raised).low_stock_items == 1
        assert compute_metrics((), (), (raised[0], InventoryItem("i2", "Hide", 10, 10))).low_stock_items == 2

    def test_empty_inputs(self):
        assert compute_metrics((), (), ()) == DashboardStats()


class TestExpenseChart:
    def test_grouped_by_category(self):
        expenses = (
            MaterialsExpense("e1", "2024-03-01", "", 50.0),
            MaterialsExpense("e2", "2024-03-02", "", 30.0),
            ShippingExpense("e3", "2024-03-03", "", 20.0),
        )
        chart = {s.name: s.value for s in compute_metrics((), expenses, ()).expense_chart_data}
        assert chart == {"Materials": 80.0, "Shipping": 20.0}


class TestProfitChart:
    def test_single_month(self):
        stats = compute_metrics(
            (_order("a", 100, date="2024-03-15"),),
            (MaterialsExpense("e1", "2024-03-20", "", 40.0),),
            (),
        )
        assert stats.profit_chart_records() == [
            {"name": "Mar 2024", "Revenue": 100.0, "Expenses": 40.0, "Profit": 60.0}
        ]

    def test_sorted_across_year_boundary(self):
        stats = compute_metrics(
            (_order("a", 10, date="2024-01-05"), _order("b", 20, date="2023-12-30")),
            (ToolsExpense("e1", "2023-03-01", "", 5.0),),
            (),
        )
        assert [p.month for p in stats.profit_chart_data] == ["2023-03", "2023-12", "2024-01"]
        assert [p.name for p in stats.profit_chart_data] == ["Mar 2023", "Dec 2023", "Jan 2024"]

    def test_same_month_name_different_years_kept_apart(self):
        stats = compute_metrics(
            (_order("a", 10, date="2023-03-01"), _order("b", 20, date="2024-03-01")),
            (),
            (),
        )
        assert [(p.name, p.revenue) for p in stats.profit_chart_data] == [("Mar 2023", 10.0), ("Mar 2024", 20.0)]

    def test_expense_only_month_has_zero_revenue(self):
        stats = compute_metrics((), (MaterialsExpense("e1", "2024-05-02", "", 12.0),), ())
        point = stats.profit_chart_data[0]
        assert (point.revenue, point.expenses, point.profit) == (0.0, 12.0, -12.0)

    def test_pending_order_month_is_seeded(self):
        stats = compute_metrics((_order("a", 80, status="Pending", date="2024-06-10"),), (), ())
        point = stats.profit_chart_data[0]
        assert (point.name, point.revenue, point.expenses) == ("Jun 2024", 0.0, 0.0)

    def test_undated_records_count_in_totals_only(self):
        stats = compute_metrics(
            (_order("a", 100, date=""),),
            (MaterialsExpense("e1", "not a date", "", 30.0),),
            (),
        )
        assert stats.total_revenue == 100
        assert stats.total_expenses == 30
        assert stats.profit_chart_data == ()


class TestMemoization:
    def test_identical_snapshots_hit_the_cache(self):
        orders = (_order("a", 100),)
        first = compute_metrics(orders, (), ())
        again = compute_metrics(tuple(_order("a", 100) for _ in range(1)), (), ())
        assert again is first
        assert compute_metrics.cache_info().hits == 1


class TestMonthOf:
    @pytest.mark.parametrize("raw, expected", [
        ("2024-03-15", "2024-03"),
        ("2024-03-15T10:00:00Z", "2024-03"),
        ("2024-13-01", None),
        ("", None),
        (None, None),
    ])
    def test_values(self, raw, expected):
        period = month_of(raw)
        assert (str(period) if period is not None else None) == expected


class TestExpenseFilter:
    expenses = (
        MaterialsExpense("e1", "2024-03-01", "", 50.0),
        ShippingExpense("e2", "2024-03-02", "", 20.0, is_auto=True),
        MaterialsExpense("e3", "2024-03-03", "", 30.0),
    )

    def test_categories_in_first_seen_order(self):
        assert expense_categories(self.expenses) == ["All", "Materials", "Shipping"]

    def test_filter_and_total(self):
        selected, total = filter_expenses(self.expenses, "Materials")
        assert [e.id for e in selected] == ["e1", "e3"]
        assert total == 80.0

    def test_all(self):
        selected, total = filter_expenses(self.expenses)
        assert len(selected) == 3
        assert total == 100.0
