"""Products callbacks — product form modal and deletes."""
from dash import Input, Output, State, no_update, ALL

from leathercraft_hq.callbacks.mutations import run_mutation, triggered_value
from leathercraft_hq.models import PRODUCTS, build_product_record
from leathercraft_hq import data_state as ds


def register_callbacks(app):
    @app.callback(
        Output("product-modal", "is_open"),
        Output("product-modal-title", "children"),
        Output("product-edit-id", "data"),
        Output("product-name", "value"),
        Output("product-color", "value"),
        Output("product-price", "value"),
        Input("product-add-btn", "n_clicks"),
        Input({"type": "product-edit", "index": ALL}, "n_clicks"),
        Input("product-cancel-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def toggle_product_modal(_add, _edits, _cancel):
        trigger, value = triggered_value()
        if not value:
            return (no_update,) * 6
        if trigger == "product-cancel-btn":
            return (False,) + (no_update,) * 5
        if trigger == "product-add-btn":
            return True, "New Product", None, "", "", None
        product = ds.get(PRODUCTS, trigger["index"])
        if product is None:
            return (no_update,) * 6
        return True, "Edit Product", product.id, product.name, product.color, product.price

    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("product-modal", "is_open", allow_duplicate=True),
        Output("state-version", "data", allow_duplicate=True),
        Input("product-save-btn", "n_clicks"),
        State("product-edit-id", "data"),
        State("product-name", "value"),
        State("product-color", "value"),
        State("product-price", "value"),
        prevent_initial_call=True,
    )
    def save_product(n_clicks, edit_id, name, color, price):
        if not n_clicks:
            return no_update, no_update, no_update
        record = build_product_record(name, color, price)
        if edit_id:
            note, ok = run_mutation(lambda gw: gw.products.update(edit_id, record),
                                    f"{record['name']} updated", "Product Updated")
        else:
            note, ok = run_mutation(lambda gw: gw.products.add(record),
                                    f"{record['name']} added", "Product Added")
        return note, (False if ok else no_update), ds.version()

    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("state-version", "data", allow_duplicate=True),
        Input({"type": "product-delete", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def delete_product(_clicks):
        trigger, value = triggered_value()
        if not value:
            return no_update, no_update
        note, _ok = run_mutation(lambda gw: gw.products.delete(trigger["index"]),
                                 "Product deleted", "Product Deleted")
        return note, ds.version()
