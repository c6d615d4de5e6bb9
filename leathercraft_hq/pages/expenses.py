"""Expenses page — category filter, filtered total, expense table."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from leathercraft_hq.theme import *
from leathercraft_hq.components.cards import section, empty_state
from leathercraft_hq.components.tables import data_table, row_actions, locked_badge
from leathercraft_hq.metrics import expense_categories, filter_expenses
from leathercraft_hq.models import EXPENSES
from leathercraft_hq import data_state as ds


def _description(expense):
    if expense.category == "Marketing" and getattr(expense, "platform", ""):
        return expense.description or f"[{expense.platform}] {expense.campaign}"
    return expense.description


def build_expense_list(category="All"):
    """Filtered table plus its total; re-rendered when the filter changes."""
    selected, total = filter_expenses(ds.expenses(), category)
    header = html.Div([
        html.Span("Total: ", style={"color": GRAY}),
        html.Span(ds.money(total), style={"color": AMBER, "fontFamily": "monospace",
                                          "fontWeight": "bold", "fontSize": "18px"}),
        html.Span(f"  ({len(selected)} expense(s))", style={"color": DARKGRAY, "fontSize": "12px"}),
    ], className="mb-2")
    if not selected:
        return html.Div([header, empty_state("No expenses in this category.")])

    rows = []
    for e in sorted(selected, key=lambda e: e.date, reverse=True):
        read_only = e.is_auto or ds.is_read_only(EXPENSES, e.id)
        rows.append(html.Tr([
            html.Td(e.date, style={"fontFamily": "monospace"}),
            html.Td(html.Span(e.category, style={"color": CATEGORY_COLORS.get(e.category, GRAY)})),
            html.Td(_description(e)),
            html.Td(ds.money(e.amount), style={"fontFamily": "monospace", "textAlign": "right"}),
            html.Td(locked_badge() if read_only else row_actions("expense", e.id)),
        ]))
    return html.Div([
        header,
        data_table(
            [("Date", "left"), ("Category", "left"), ("Description", "left"),
             ("Amount", "right"), ("", "left")],
            rows,
        ),
    ])


def layout(category="All"):
    choices = expense_categories(ds.expenses())
    if category not in choices:
        category = "All"
    add_btn = dbc.Button("+ Add Expense", id="expense-add-btn", color="warning", size="sm")
    return section("Expenses", [
        dbc.Row([
            dbc.Col(dbc.Label("Category"), width="auto"),
            dbc.Col(dcc.Dropdown(
                id="expense-filter",
                options=[{"label": c, "value": c} for c in choices],
                value=category, clearable=False,
                style={"minWidth": "180px", "color": "#111827"},
            ), width="auto"),
        ], className="g-2 mb-3", align="center"),
        html.Div(build_expense_list(category), id="expense-list"),
    ], action=add_btn)
