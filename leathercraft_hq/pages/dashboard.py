"""Dashboard page — KPI strip, monthly profit chart, expense breakdown."""
from dash import html, dcc
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

from leathercraft_hq.theme import *
from leathercraft_hq.components.kpi import kpi_pill
from leathercraft_hq.components.cards import section, make_chart, empty_state
from leathercraft_hq import data_state as ds


def _profit_chart(stats):
    records = stats.profit_chart_records()
    if not records:
        return empty_state("No dated orders or expenses yet.")
    months = [r["name"] for r in records]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=months, y=[r["Revenue"] for r in records], name="Revenue", marker_color=GREEN))
    fig.add_trace(go.Bar(x=months, y=[r["Expenses"] for r in records], name="Expenses", marker_color=RED))
    fig.add_trace(go.Bar(x=months, y=[r["Profit"] for r in records], name="Profit", marker_color=AMBER))
    make_chart(fig, 380)
    fig.update_layout(barmode="group", xaxis_title="Month")
    return dcc.Graph(figure=fig, config={"displayModeBar": False})


def _expense_pie(stats):
    slices = stats.expense_chart_data
    if not slices:
        return empty_state("No expenses recorded yet.")
    fig = go.Figure(go.Pie(
        labels=[s.name for s in slices],
        values=[s.value for s in slices],
        hole=0.45,
        marker=dict(colors=[CATEGORY_COLORS.get(s.name, DARKGRAY) for s in slices]),
        textinfo="label+percent",
    ))
    make_chart(fig, 380)
    return dcc.Graph(figure=fig, config={"displayModeBar": False})


def layout():
    stats = ds.stats()
    profit_color = GREEN if stats.net_profit >= 0 else RED

    return html.Div([
        html.P("Profit is calculated using revenue from Delivered orders only.",
               style={"color": GRAY, "fontSize": "12px", "marginBottom": "12px"}),

        # KPI Strip
        dbc.Row([
            dbc.Col(kpi_pill("\U0001f4b0", "Realized Revenue", ds.money(stats.total_revenue), GREEN,
                             "Delivered orders"), width="auto"),
            dbc.Col(kpi_pill("\U0001f4c8", "Net Profit", ds.money(stats.net_profit), profit_color,
                             f"Expenses {ds.money(stats.total_expenses)}",
                             value_color=profit_color), width="auto"),
            dbc.Col(kpi_pill("⏳", "Pending Orders", str(stats.pending_orders), ORANGE), width="auto"),
            dbc.Col(kpi_pill("⚠️", "Low Stock Items", str(stats.low_stock_items), RED), width="auto"),
        ], className="g-2 mb-3", style={"flexWrap": "wrap"}),

        dbc.Row([
            dbc.Col(section("Monthly Profit", _profit_chart(stats)), md=8),
            dbc.Col(section("Expenses by Category", _expense_pie(stats), color=PURPLE), md=4),
        ], className="g-3"),
    ])
