"""Orders callbacks — order form modal, status changes, deletes."""
from dash import Input, Output, State, no_update, ALL

from leathercraft_hq.callbacks.mutations import run_mutation, triggered_value
from leathercraft_hq.errors import DashboardError
from leathercraft_hq.components.cards import error_toast
from leathercraft_hq.models import ORDERS, build_order_record
from leathercraft_hq import data_state as ds


def _product_options():
    return [{"label": p.label, "value": p.id} for p in sorted(ds.products(), key=lambda p: p.label.lower())]


def _product_for(order):
    """Catalogue product matching the order's first line, if it still exists."""
    if not order.items:
        return None
    first = order.items[0].product_name
    for p in ds.products():
        if p.label == first:
            return p.id
    return None


def register_callbacks(app):
    # ── Open / close the order form ───────────────────────────────────────
    @app.callback(
        Output("order-modal", "is_open"),
        Output("order-modal-title", "children"),
        Output("order-edit-id", "data"),
        Output("order-customer", "value"),
        Output("order-city", "value"),
        Output("order-product", "options"),
        Output("order-product", "value"),
        Output("order-qty", "value"),
        Input("order-add-btn", "n_clicks"),
        Input({"type": "order-edit", "index": ALL}, "n_clicks"),
        Input("order-cancel-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def toggle_order_modal(_add, _edits, _cancel):
        trigger, value = triggered_value()
        if not value:
            return (no_update,) * 8
        if trigger == "order-cancel-btn":
            return (False,) + (no_update,) * 7
        options = _product_options()
        if trigger == "order-add-btn":
            return True, "New Order", None, "", "", options, None, 1
        order = ds.get(ORDERS, trigger["index"])
        if order is None:
            return (no_update,) * 8
        qty = order.items[0].qty if order.items else 1
        return True, "Edit Order", order.id, order.customer_name, order.city, options, _product_for(order), qty

    # ── Save ──────────────────────────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("order-modal", "is_open", allow_duplicate=True),
        Output("state-version", "data", allow_duplicate=True),
        Input("order-save-btn", "n_clicks"),
        State("order-edit-id", "data"),
        State("order-customer", "value"),
        State("order-city", "value"),
        State("order-product", "value"),
        State("order-qty", "value"),
        prevent_initial_call=True,
    )
    def save_order(n_clicks, edit_id, customer, city, product_id, qty):
        if not n_clicks:
            return no_update, no_update, no_update
        existing = ds.get(ORDERS, edit_id)
        try:
            record = build_order_record(customer, city, [(product_id, qty)], ds.products(), existing=existing)
        except DashboardError as e:
            return error_toast(e), no_update, no_update

        if existing is not None:
            note, ok = run_mutation(lambda gw: gw.orders.update(existing.id, record),
                                    f"Order for {record['customer_name']} updated", "Order Updated")
        else:
            note, ok = run_mutation(lambda gw: gw.orders.add(record),
                                    f"Order for {record['customer_name']} added", "Order Added")
        return note, (False if ok else no_update), ds.version()

    # ── Inline status change ─────────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("state-version", "data", allow_duplicate=True),
        Input({"type": "order-status", "index": ALL}, "value"),
        prevent_initial_call=True,
    )
    def change_status(_values):
        trigger, status = triggered_value()
        if not trigger or not status:
            return no_update, no_update
        order = ds.get(ORDERS, trigger["index"])
        if order is None or order.status == status:
            return no_update, no_update
        note, _ok = run_mutation(lambda gw: gw.orders.update(order.id, {"status": status}),
                                 f"{order.customer_name}: {status}", "Status Updated")
        return note, ds.version()

    # ── Delete ────────────────────────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("state-version", "data", allow_duplicate=True),
        Input({"type": "order-delete", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def delete_order(_clicks):
        trigger, value = triggered_value()
        if not value:
            return no_update, no_update
        note, _ok = run_mutation(lambda gw: gw.orders.delete(trigger["index"]),
                                 "Order deleted", "Order Deleted")
        return note, ds.version()
