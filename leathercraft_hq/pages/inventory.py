"""Inventory page — stock levels with low-stock flags."""
from dash import html
import dash_bootstrap_components as dbc

from leathercraft_hq.theme import *
from leathercraft_hq.components.cards import section, empty_state
from leathercraft_hq.components.tables import data_table, row_actions, stock_badge
from leathercraft_hq import data_state as ds


def _build_stock_table(items):
    if not items:
        return empty_state("No inventory items yet.")
    rows = []
    for item in sorted(items, key=lambda i: (not i.is_low_stock, i.name.lower())):
        stock_color = RED if item.is_low_stock else GREEN
        rows.append(html.Tr([
            html.Td(item.name, style={"color": WHITE, "fontWeight": "600"}),
            html.Td(str(item.stock), style={"color": stock_color, "fontFamily": "monospace",
                                             "fontWeight": "bold", "textAlign": "center"}),
            html.Td(str(item.low_stock_threshold), style={"color": GRAY, "textAlign": "center",
                                                           "fontFamily": "monospace"}),
            html.Td(stock_badge(item)),
            html.Td(row_actions("inventory", item.id)),
        ]))
    return data_table(
        [("Item", "left"), ("Stock", "center"), ("Threshold", "center"), ("Status", "left"), ("", "left")],
        rows,
    )


def layout():
    items = ds.inventory()
    add_btn = dbc.Button("+ Add Item", id="inventory-add-btn", color="warning", size="sm")
    low = sum(1 for i in items if i.is_low_stock)
    return html.Div([
        dbc.Alert(f"{low} item(s) at or below their low-stock threshold.", color="danger")
        if low else None,
        section(f"Inventory ({len(items)})", _build_stock_table(items), action=add_btn),
    ])
