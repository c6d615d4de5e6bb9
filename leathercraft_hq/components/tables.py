"""Reusable table builders."""
from dash import html
import dash_bootstrap_components as dbc
from leathercraft_hq.theme import *


def data_table(headers, rows):
    """Striped table; headers is a list of (label, align) pairs."""
    return dbc.Table([
        html.Thead(html.Tr([html.Th(label, style={"textAlign": align}) for label, align in headers])),
        html.Tbody(rows),
    ], striped=True, hover=True, size="sm", className="mb-0")


def row_actions(kind, record_id):
    """Edit / delete buttons keyed for pattern-matching callbacks."""
    return html.Div([
        dbc.Button("Edit", id={"type": f"{kind}-edit", "index": record_id},
                   color="secondary", size="sm", outline=True, className="me-1"),
        dbc.Button("Delete", id={"type": f"{kind}-delete", "index": record_id},
                   color="danger", size="sm", outline=True),
    ], style={"whiteSpace": "nowrap"})


def locked_badge():
    return dbc.Badge("\U0001f512 Auto", color="secondary", className="p-2")


def stock_badge(item):
    if item.is_low_stock:
        return dbc.Badge(item.stock_label, color="danger")
    return dbc.Badge(item.stock_label, color="success")


def status_badge(status):
    return dbc.Badge(status, color=STATUS_COLORS.get(status, "secondary"))
