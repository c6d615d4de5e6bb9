"""Expenses callbacks — category filter, expense form modal, deletes."""
from dash import Input, Output, State, no_update, ALL

from leathercraft_hq.callbacks.mutations import run_mutation, triggered_value
from leathercraft_hq.components.cards import error_toast
from leathercraft_hq.errors import DashboardError
from leathercraft_hq.models import EXPENSES, MARKETING_PLATFORMS, ExpenseCategory, build_expense_record, today_iso
from leathercraft_hq.pages.expenses import build_expense_list
from leathercraft_hq import data_state as ds

MARKETING = ExpenseCategory.MARKETING.value


def register_callbacks(app):
    # ── Category filter ──────────────────────────────────────────────────
    @app.callback(
        Output("expense-list", "children"),
        Output("expense-filter-store", "data"),
        Input("expense-filter", "value"),
        prevent_initial_call=True,
    )
    def filter_list(category):
        category = category or "All"
        return build_expense_list(category), category

    # ── Marketing-only fields ────────────────────────────────────────────
    @app.callback(
        Output("expense-marketing-fields", "style"),
        Output("expense-description-field", "style"),
        Input("expense-category", "value"),
    )
    def toggle_marketing_fields(category):
        if category == MARKETING:
            return {"display": "block"}, {"display": "none"}
        return {"display": "none"}, {"display": "block"}

    # ── Open / close the expense form ────────────────────────────────────
    @app.callback(
        Output("expense-modal", "is_open"),
        Output("expense-modal-title", "children"),
        Output("expense-edit-id", "data"),
        Output("expense-category", "value"),
        Output("expense-date", "value"),
        Output("expense-amount", "value"),
        Output("expense-description", "value"),
        Output("expense-platform", "value"),
        Output("expense-campaign", "value"),
        Input("expense-add-btn", "n_clicks"),
        Input({"type": "expense-edit", "index": ALL}, "n_clicks"),
        Input("expense-cancel-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def toggle_expense_modal(_add, _edits, _cancel):
        trigger, value = triggered_value()
        if not value:
            return (no_update,) * 9
        if trigger == "expense-cancel-btn":
            return (False,) + (no_update,) * 8
        if trigger == "expense-add-btn":
            return True, "New Expense", None, "Materials", today_iso(), None, "", MARKETING_PLATFORMS[0], ""
        expense = ds.get(EXPENSES, trigger["index"])
        if expense is None or expense.is_auto:
            return (no_update,) * 9
        return (
            True, "Edit Expense", expense.id, expense.category, expense.date, expense.amount,
            expense.description,
            getattr(expense, "platform", "") or MARKETING_PLATFORMS[0],
            getattr(expense, "campaign", ""),
        )

    # ── Save ──────────────────────────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("expense-modal", "is_open", allow_duplicate=True),
        Output("state-version", "data", allow_duplicate=True),
        Input("expense-save-btn", "n_clicks"),
        State("expense-edit-id", "data"),
        State("expense-category", "value"),
        State("expense-date", "value"),
        State("expense-amount", "value"),
        State("expense-description", "value"),
        State("expense-platform", "value"),
        State("expense-campaign", "value"),
        prevent_initial_call=True,
    )
    def save_expense(n_clicks, edit_id, category, date, amount, description, platform, campaign):
        if not n_clicks:
            return no_update, no_update, no_update
        try:
            record = build_expense_record(category, date, amount, description, platform, campaign)
        except DashboardError as e:
            return error_toast(e), no_update, no_update

        label = f"{record['category']} expense"
        if edit_id:
            note, ok = run_mutation(lambda gw: gw.expenses.update(edit_id, record),
                                    f"{label} updated", "Expense Updated")
        else:
            note, ok = run_mutation(lambda gw: gw.expenses.add(record),
                                    f"{label} added", "Expense Added")
        return note, (False if ok else no_update), ds.version()

    # ── Delete ────────────────────────────────────────────────────────────
    @app.callback(
        Output("toast-container", "children", allow_duplicate=True),
        Output("state-version", "data", allow_duplicate=True),
        Input({"type": "expense-delete", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def delete_expense(_clicks):
        trigger, value = triggered_value()
        if not value:
            return no_update, no_update
        note, _ok = run_mutation(lambda gw: gw.expenses.delete(trigger["index"]),
                                 "Expense deleted", "Expense Deleted")
        return note, ds.version()
