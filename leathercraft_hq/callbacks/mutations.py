"""Shared plumbing for callbacks that write through the Mutation Gateway."""
import logging

from dash import callback_context

from leathercraft_hq.components.cards import toast, error_toast
from leathercraft_hq.errors import DashboardError
from leathercraft_hq import data_state as ds

logger = logging.getLogger(__name__)


def triggered_value():
    """(triggered_id, value) of the input that fired, or (None, None)."""
    if not callback_context.triggered:
        return None, None
    return callback_context.triggered_id, callback_context.triggered[0]["value"]


def run_mutation(action, success_message, header="Saved"):
    """Call action(gateway); return (toast, ok).

    MutationError / ValidationError become an error toast; the store is left
    to the live feed.
    """
    gateway = ds.gateway()
    if gateway is None:
        return error_toast("The dashboard session is not running."), False
    try:
        action(gateway)
    except DashboardError as e:
        logger.warning("%s", e)
        return error_toast(e), False
    return toast(success_message, header=header), True
