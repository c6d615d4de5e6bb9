"""Products page."""
from dash import html
import dash_bootstrap_components as dbc

from leathercraft_hq.theme import *
from leathercraft_hq.components.cards import section, empty_state
from leathercraft_hq.components.tables import data_table, row_actions
from leathercraft_hq import data_state as ds


def layout():
    products = sorted(ds.products(), key=lambda p: p.label.lower())
    add_btn = dbc.Button("+ Add Product", id="product-add-btn", color="warning", size="sm")
    if not products:
        body = empty_state("No products yet.")
    else:
        body = data_table(
            [("Name", "left"), ("Color", "left"), ("Price", "right"), ("", "left")],
            [html.Tr([
                html.Td(p.name, style={"color": WHITE, "fontWeight": "600"}),
                html.Td(p.color),
                html.Td(ds.money(p.price), style={"fontFamily": "monospace", "textAlign": "right"}),
                html.Td(row_actions("product", p.id)),
            ]) for p in products],
        )
    return section(f"Products ({len(products)})", body, action=add_btn)
