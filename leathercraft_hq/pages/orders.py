"""Orders page — order table with inline status changes."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from leathercraft_hq.theme import *
from leathercraft_hq.components.cards import section, empty_state
from leathercraft_hq.components.tables import data_table, row_actions
from leathercraft_hq.models import ORDER_STATUSES
from leathercraft_hq import data_state as ds


def _status_options(status):
    options = [{"label": s, "value": s} for s in ORDER_STATUSES]
    if status not in ORDER_STATUSES:
        # unknown statuses are shown as-is
        options.append({"label": status or "(none)", "value": status, "disabled": True})
    return options


def _build_order_table(orders):
    if not orders:
        return empty_state("No orders yet. Add your first order.")
    rows = []
    for order in sorted(orders, key=lambda o: o.date, reverse=True):
        items = ", ".join(f"{i.qty} x {i.product_name}" for i in order.items)
        rows.append(html.Tr([
            html.Td([
                html.Div(order.customer_name, style={"color": WHITE, "fontWeight": "600"}),
                html.Div(items, style={"color": GRAY, "fontSize": "11px"}),
            ]),
            html.Td(order.city),
            html.Td(order.date, style={"fontFamily": "monospace"}),
            html.Td(ds.money(order.total), style={"fontFamily": "monospace", "textAlign": "right"}),
            html.Td(dcc.Dropdown(
                id={"type": "order-status", "index": order.id},
                options=_status_options(order.status),
                value=order.status, clearable=False,
                style={"minWidth": "130px", "color": "#111827"},
            )),
            html.Td(row_actions("order", order.id)),
        ]))
    return data_table(
        [("Customer", "left"), ("City", "left"), ("Date", "left"), ("Total", "right"),
         ("Status", "left"), ("", "left")],
        rows,
    )


def layout():
    orders = ds.orders()
    add_btn = dbc.Button("+ Add Order", id="order-add-btn", color="warning", size="sm",
                         disabled=not ds.products())
    hint = None
    if not ds.products():
        hint = html.P("Add a product first; orders are built from the product list.",
                      style={"color": GRAY, "fontSize": "12px"})
    return html.Div([
        hint,
        section(f"Orders ({len(orders)})", _build_order_table(orders), action=add_btn),
    ])
