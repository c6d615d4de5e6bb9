"""Form modals. They live in the app shell so page re-renders don't close them."""
from dash import html, dcc
import dash_bootstrap_components as dbc
from leathercraft_hq.models import EXPENSE_CATEGORIES, MARKETING_PLATFORMS


def _field(label, control):
    return html.Div([dbc.Label(label, className="mb-1"), control], className="mb-3")


def _modal(kind, title, body):
    return dbc.Modal([
        dbc.ModalHeader(dbc.ModalTitle(title, id=f"{kind}-modal-title")),
        dbc.ModalBody(body),
        dbc.ModalFooter([
            dbc.Button("Cancel", id=f"{kind}-cancel-btn", color="secondary", className="me-2"),
            dbc.Button("Save", id=f"{kind}-save-btn", color="warning"),
        ]),
        dcc.Store(id=f"{kind}-edit-id"),
    ], id=f"{kind}-modal", is_open=False, centered=True)


def order_modal():
    return _modal("order", "New Order", [
        _field("Customer name", dbc.Input(id="order-customer", type="text")),
        _field("City", dbc.Input(id="order-city", type="text")),
        _field("Product", dcc.Dropdown(id="order-product", options=[], placeholder="Select a product")),
        _field("Quantity", dbc.Input(id="order-qty", type="number", min=1, step=1, value=1)),
    ])


def product_modal():
    return _modal("product", "New Product", [
        _field("Name", dbc.Input(id="product-name", type="text")),
        _field("Color", dbc.Input(id="product-color", type="text")),
        _field("Price", dbc.Input(id="product-price", type="number", min=0, step=0.01)),
    ])


def inventory_modal():
    return _modal("inventory", "New Inventory Item", [
        _field("Name", dbc.Input(id="inventory-name", type="text")),
        _field("Stock", dbc.Input(id="inventory-stock", type="number", min=0, step=1)),
        _field("Low stock threshold", dbc.Input(id="inventory-threshold", type="number", min=0, step=1)),
    ])


def expense_modal():
    return _modal("expense", "New Expense", [
        _field("Category", dcc.Dropdown(
            id="expense-category",
            options=[{"label": c, "value": c} for c in EXPENSE_CATEGORIES],
            value="Materials", clearable=False,
        )),
        _field("Date", dbc.Input(id="expense-date", type="date")),
        _field("Amount", dbc.Input(id="expense-amount", type="number", min=0, step=0.01)),
        html.Div(_field("Description", dbc.Input(id="expense-description", type="text")),
                 id="expense-description-field"),
        html.Div([
            _field("Platform", dcc.Dropdown(
                id="expense-platform",
                options=[{"label": p, "value": p} for p in MARKETING_PLATFORMS],
                value=MARKETING_PLATFORMS[0], clearable=False,
            )),
            _field("Campaign", dbc.Input(id="expense-campaign", type="text")),
        ], id="expense-marketing-fields", style={"display": "none"}),
    ])


def all_modals():
    return [order_modal(), product_modal(), inventory_modal(), expense_modal()]
