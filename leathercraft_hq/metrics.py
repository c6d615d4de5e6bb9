"""
metrics.py — Derived dashboard statistics.

`compute_metrics` is a pure function of the order, expense and inventory
snapshots and is memoized on their content, so re-publishing an identical
snapshot (or a products-only change) never recomputes anything. It never
raises: entity parsing has already turned bad numbers into 0.
"""

from dataclasses import dataclass
from datetime import date
from functools import lru_cache

import pandas as pd

from leathercraft_hq.models import OrderStatus


@dataclass(frozen=True)
class ChartSlice:
    name: str
    value: float


@dataclass(frozen=True)
class MonthlyPoint:
    month: str        # canonical "YYYY-MM"
    name: str         # display label, e.g. "Mar 2024"
    revenue: float
    expenses: float

    @property
    def profit(self) -> float:
        return self.revenue - self.expenses


@dataclass(frozen=True)
class DashboardStats:
    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0
    pending_orders: int = 0
    low_stock_items: int = 0
    expense_chart_data: tuple = ()
    profit_chart_data: tuple = ()

    def expense_chart_records(self) -> list[dict]:
        return [{"name": s.name, "value": s.value} for s in self.expense_chart_data]

    def profit_chart_records(self) -> list[dict]:
        return [
            {"name": p.name, "Revenue": p.revenue, "Expenses": p.expenses, "Profit": p.profit}
            for p in self.profit_chart_data
        ]

    def to_dict(self) -> dict:
        return {
            "total_revenue": self.total_revenue,
            "total_expenses": self.total_expenses,
            "net_profit": self.net_profit,
            "pending_orders": self.pending_orders,
            "low_stock_items": self.low_stock_items,
            "expense_chart_data": self.expense_chart_records(),
            "profit_chart_data": self.profit_chart_records(),
        }


# ── Month keys ───────────────────────────────────────────────────────────────

def month_of(value):
    """(year, month) period of an ISO date string, or None if it doesn't parse."""
    text = str(value or "").strip()
    if len(text) < 10:
        return None
    try:
        parsed = date.fromisoformat(text[:10])
    except ValueError:
        return None
    return pd.Period(year=parsed.year, month=parsed.month, freq="M")


def _orders_frame(orders) -> pd.DataFrame:
    return pd.DataFrame(
        [{"total": o.total, "status": o.status, "month": month_of(o.date)} for o in orders],
        columns=["total", "status", "month"],
    )


def _expenses_frame(expenses) -> pd.DataFrame:
    return pd.DataFrame(
        [{"amount": e.amount, "category": e.category, "month": month_of(e.date)} for e in expenses],
        columns=["amount", "category", "month"],
    )


def _inventory_frame(inventory) -> pd.DataFrame:
    return pd.DataFrame(
        [{"stock": i.stock, "threshold": i.low_stock_threshold} for i in inventory],
        columns=["stock", "threshold"],
    )


def _by_month(df, value_col) -> dict:
    grouped = df.dropna(subset=["month"]).groupby("month")[value_col].sum()
    return {period: float(total) for period, total in grouped.items()}


def _monthly_series(orders_df, expenses_df) -> tuple:
    """Revenue / expenses per calendar month, oldest first.

    Every month seen on any order (delivered or not) or any expense gets an
    entry; months without delivered orders show revenue 0.
    """
    delivered = orders_df[orders_df["status"] == OrderStatus.DELIVERED.value]
    revenue = _by_month(delivered, "total")
    spent = _by_month(expenses_df, "amount")
    months = set(orders_df["month"].dropna()) | set(expenses_df["month"].dropna())
    return tuple(
        MonthlyPoint(
            month=str(period),
            name=period.strftime("%b %Y"),
            revenue=revenue.get(period, 0.0),
            expenses=spent.get(period, 0.0),
        )
        for period in sorted(months)
    )


@lru_cache(maxsize=16)
def compute_metrics(orders: tuple, expenses: tuple, inventory: tuple) -> DashboardStats:
    """All dashboard numbers from the three snapshots that feed them."""
    orders_df = _orders_frame(orders)
    expenses_df = _expenses_frame(expenses)
    inventory_df = _inventory_frame(inventory)

    delivered = orders_df[orders_df["status"] == OrderStatus.DELIVERED.value]
    total_revenue = float(delivered["total"].sum())
    total_expenses = float(expenses_df["amount"].sum())
    pending_orders = int((orders_df["status"] == OrderStatus.PENDING.value).sum())
    low_stock_items = int((inventory_df["stock"] <= inventory_df["threshold"]).sum())

    by_category = expenses_df.groupby("category", sort=False)["amount"].sum()
    expense_chart = tuple(ChartSlice(str(cat), float(total)) for cat, total in by_category.items())

    return DashboardStats(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_profit=total_revenue - total_expenses,
        pending_orders=pending_orders,
        low_stock_items=low_stock_items,
        expense_chart_data=expense_chart,
        profit_chart_data=_monthly_series(orders_df, expenses_df),
    )


# ── Expense list helpers (Expenses page) ─────────────────────────────────────

def expense_categories(expenses) -> list[str]:
    """Filter choices: "All" followed by every category present, in first-seen order."""
    seen = []
    for e in expenses:
        if e.category not in seen:
            seen.append(e.category)
    return ["All"] + seen


def filter_expenses(expenses, category="All"):
    """Expenses in one category (or all of them) and their total."""
    if category in (None, "", "All"):
        selected = list(expenses)
    else:
        selected = [e for e in expenses if e.category == category]
    return selected, sum(e.amount for e in selected)
