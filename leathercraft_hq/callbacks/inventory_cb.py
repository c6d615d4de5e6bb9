"""Inventory callbacks — stock item form modal and deletes."""
from dash import Input, Output, State, no_update, ALL

from leathercraft_hq.callbacks.mutations import run_mutation, triggered_value
from leathercraft_hq.models import INVENTORY, build_inventory_record
from leathercraft_hq import data_state as ds


def register_callbacks(app):
    @app.callback(
        Output("inventory-modal", "is_open"),
        Output("inventory-modal-title", "children"),
        Output("inventory-edit-id", "data"),
        Output("inventory-name", "value"),
        Output("inventory-stock", "value"),
        Output("inventory-threshold", "value"),
        Input("inventory-add-btn", "n_clicks"),
        Input({"type": "inventory-edit", "index": ALL}, "n_clicks"),
        Input("inventory-cancel-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def toggle_inventory_modal(_add, _edits, _cancel):
        trigger, value = triggered_value()
        if not value:
            return (no_update,) * 6
        if trigger == "inventory-cancel-btn":
            return (False,) + (no_update,) * 5
        if trigger == "inventory-add-btn":
            return True, "New Inventory Item", None, "", 0, 5
        item = ds.get(INVENTORY, trigger["index"])
        if item is None:
            return (no_update,) * 6
        return True, "Edit Inventory Item", item.id, item.name, item.stock, item.low_stock_threshold

    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("inventory-modal", "is_open", allow_duplicate=True),
        Output("state-version", "data", allow_duplicate=True),
        Input("inventory-save-btn", "n_clicks"),
        State("inventory-edit-id", "data"),
        State("inventory-name", "value"),
        State("inventory-stock", "value"),
        State("inventory-threshold", "value"),
        prevent_initial_call=True,
    )
    def save_inventory_item(n_clicks, edit_id, name, stock, threshold):
        if not n_clicks:
            return no_update, no_update, no_update
        record = build_inventory_record(name, stock, threshold)
        if edit_id:
            note, ok = run_mutation(lambda gw: gw.inventory.update(edit_id, record),
                                    f"{record['name']} updated", "Inventory Updated")
        else:
            note, ok = run_mutation(lambda gw: gw.inventory.add(record),
                                    f"{record['name']} added", "Inventory Updated")
        return note, (False if ok else no_update), ds.version()

    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("state-version", "data", allow_duplicate=True),
        Input({"type": "inventory-delete", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def delete_inventory_item(_clicks):
        trigger, value = triggered_value()
        if not value:
            return no_update, no_update
        note, _ok = run_mutation(lambda gw: gw.inventory.delete(trigger["index"]),
                                 "Inventory item deleted", "Inventory Updated")
        return note, ds.version()
