"""Navigation callbacks — render the page for the URL, re-render on new data."""
from dash import html, Input, Output, State, no_update
import dash_bootstrap_components as dbc

from leathercraft_hq.components.cards import collection_alerts, error_screen
from leathercraft_hq.theme import *
from leathercraft_hq import data_state as ds

PAGE_TITLES = {
    "/": "Dashboard",
    "/orders": "Orders",
    "/products": "Products",
    "/inventory": "Inventory",
    "/expenses": "Expenses",
}


def _loading():
    return html.Div([
        dbc.Spinner(color="warning"),
        html.P("Connecting to your workshop data...", style={"color": GRAY, "marginTop": "12px"}),
    ], style={"textAlign": "center", "padding": "80px"})


def _header():
    parts = [
        f"{len(ds.orders())} orders",
        f"{len(ds.products())} products",
        f"{len(ds.inventory())} inventory items",
        f"Net profit: {ds.money(ds.stats().net_profit)}",
    ]
    children = ["  |  ".join(parts)]
    if ds.synthesizer_error() is not None:
        children.append(html.Span("  |  Automatic shipping expense could not be updated",
                                  style={"color": ORANGE}))
    return children


def render(pathname, expense_filter="All"):
    """Page body for a path (no blocking error, data loaded)."""
    if pathname in ("/", None, ""):
        from leathercraft_hq.pages.dashboard import layout
        return layout()
    elif pathname == "/orders":
        from leathercraft_hq.pages.orders import layout
        return layout()
    elif pathname == "/products":
        from leathercraft_hq.pages.products import layout
        return layout()
    elif pathname == "/inventory":
        from leathercraft_hq.pages.inventory import layout
        return layout()
    elif pathname == "/expenses":
        from leathercraft_hq.pages.expenses import layout
        return layout(expense_filter or "All")
    return html.Div([
        html.H3("404 — Page Not Found", style={"color": RED}),
        html.P(f"No page at '{pathname}'"),
    ], style={"padding": "40px"})


def register_callbacks(app):
    @app.callback(
        Output("state-version", "data"),
        Input("state-poll", "n_intervals"),
        State("state-version", "data"),
    )
    def poll_version(_n, current):
        latest = ds.version()
        return latest if latest != current else no_update

    @app.callback(
        Output("page-content", "children"),
        Output("collection-alerts", "children"),
        Output("app-header-content", "children"),
        Output("page-title", "children"),
        Input("url", "pathname"),
        Input("state-version", "data"),
        State("expense-filter-store", "data"),
    )
    def route_page(pathname, _version, expense_filter):
        title = PAGE_TITLES.get(pathname or "/", "LeatherCraft HQ")
        error = ds.session_error()
        if error is not None:
            return error_screen(error), None, None, "LeatherCraft HQ"
        if ds.is_loading():
            return _loading(), None, None, title
        return render(pathname, expense_filter), collection_alerts(ds.collection_errors()), _header(), title
