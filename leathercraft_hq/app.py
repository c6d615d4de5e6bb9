"""
LeatherCraft HQ — orders, products, inventory and expenses for a leather workshop.
Run:  python -m leathercraft_hq.app
Open: http://127.0.0.1:8070
"""

import os
import sys

# Ensure project root is on the path for supabase_service
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import dash
from dash import html, dcc
import dash_bootstrap_components as dbc
from flask import jsonify

from leathercraft_hq import data_state as ds
from leathercraft_hq.components.forms import all_modals

# ── Start the live session ──────────────────────────────────────────────────
ds.start()

# ── Create the Dash app ──────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    suppress_callback_exceptions=True,
    external_stylesheets=[
        dbc.themes.DARKLY,
        "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap",
    ],
    assets_folder=os.path.join(os.path.dirname(__file__), "assets"),
    title="LeatherCraft HQ",
)
server = app.server  # For deployment (Gunicorn)

# ── Sidebar navigation ──────────────────────────────────────────────────────
NAV_ITEMS = [
    {"label": "Dashboard", "icon": "\U0001f4ca", "value": "/"},
    {"label": "Orders",    "icon": "\U0001f6d2", "value": "/orders"},
    {"label": "Products",  "icon": "\U0001f45c", "value": "/products"},
    {"label": "Inventory", "icon": "\U0001f4e6", "value": "/inventory"},
    {"label": "Expenses",  "icon": "\U0001f4b8", "value": "/expenses"},
]


def _build_sidebar():
    nav_links = [
        dbc.NavLink(
            [html.Span(item["icon"], className="nav-icon"), item["label"]],
            href=item["value"],
            active="exact",
        )
        for item in NAV_ITEMS
    ]
    return html.Div([
        html.Div([
            html.H4("LeatherCraft HQ"),
            html.Small("Workshop Dashboard"),
        ], className="sidebar-brand"),
        dbc.Nav(nav_links, vertical=True, pills=True),
    ], className="sidebar")


# ── App layout ───────────────────────────────────────────────────────────────
def serve_layout():
    refresh_ms = ds.SETTINGS.refresh_ms if ds.SETTINGS else 2000
    return html.Div([
        dcc.Location(id="url", refresh=False),
        _build_sidebar(),

        html.Div([
            html.Div([
                html.H3("LeatherCraft HQ", id="page-title"),
                html.Div(id="app-header-content", className="header-subtitle"),
            ], className="app-header"),

            html.Div(id="collection-alerts"),
            html.Div(id="page-content"),

            # Toast notification container
            html.Div(id="toast-container"),

            # Live refresh: the interval polls the session version, pages
            # re-render only when it moves
            dcc.Interval(id="state-poll", interval=refresh_ms),
            dcc.Store(id="state-version", data=ds.version()),
            dcc.Store(id="expense-filter-store", data="All"),

            *all_modals(),
        ], className="main-content"),
    ])


app.layout = serve_layout


# ── API routes ───────────────────────────────────────────────────────────────
@server.route("/api/refresh")
def api_refresh():
    """Ask every live feed to re-read now."""
    ds.refresh()
    return jsonify({"ok": True, "version": ds.version()})


@server.route("/api/stats")
def api_stats():
    error = ds.session_error()
    if error is not None:
        return jsonify({"ok": False, "error": str(error)}), 503
    return jsonify({"ok": True, "loading": ds.is_loading(), **ds.stats().to_dict()})


# ── Register callbacks ───────────────────────────────────────────────────────
# Import callback modules AFTER app is created so they can reference `app`
from leathercraft_hq.callbacks import navigation_cb, orders_cb, products_cb, inventory_cb, expenses_cb
navigation_cb.register_callbacks(app)
orders_cb.register_callbacks(app)
products_cb.register_callbacks(app)
inventory_cb.register_callbacks(app)
expenses_cb.register_callbacks(app)

# ── Run ──────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    port = ds.SETTINGS.port if ds.SETTINGS else 8070
    print(f"\n  LeatherCraft HQ")
    print(f"  http://127.0.0.1:{port}\n")
    try:
        app.run(debug=False, host="0.0.0.0", port=port)
    finally:
        ds.stop()
