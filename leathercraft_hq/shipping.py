"""
shipping.py — Automatic shipping expense.

Every order costs 20 MAD to ship inside Casablanca and 30 MAD anywhere
else. The running total lives in a single system-owned expense record
("autoShipping") that is rewritten whenever the orders snapshot changes.
"""

import logging
from dataclasses import dataclass
from datetime import date

import numpy as np

from leathercraft_hq.errors import MutationError, SynthesizerWriteError
from leathercraft_hq.gateway import AUTO_SHIPPING_POLICY
from leathercraft_hq.models import ExpenseCategory

logger = logging.getLogger(__name__)

LOCAL_CITY = "casablanca"
LOCAL_RATE = 20
STANDARD_RATE = 30
AUTO_SHIPPING_DESCRIPTION = "Automated shipping costs from orders"


def normalize_city(city) -> str:
    return str(city or "").strip().lower()


def shipping_cost(city) -> int:
    return LOCAL_RATE if normalize_city(city) == LOCAL_CITY else STANDARD_RATE


def total_shipping_cost(orders) -> float:
    """Sum of per-order shipping over the whole snapshot."""
    if not orders:
        return 0.0
    cities = np.array([normalize_city(o.city) for o in orders])
    return float(np.where(cities == LOCAL_CITY, LOCAL_RATE, STANDARD_RATE).sum())


def auto_shipping_record(amount, today=None) -> dict:
    return {
        "category": ExpenseCategory.SHIPPING.value,
        "description": AUTO_SHIPPING_DESCRIPTION,
        "amount": amount,
        "date": (today or date.today()).isoformat(),
        "is_auto": True,
    }


@dataclass(frozen=True)
class SynthesisResult:
    amount: float
    record: dict
    error: SynthesizerWriteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AutoShippingSynthesizer:
    """Recomputes and upserts the auto shipping expense.

    Write failures are logged and returned, never raised: the metrics keep
    running on the last expense snapshot we have.
    """

    def __init__(self, gateway, clock=date.today):
        self.gateway = gateway
        self.clock = clock

    def run(self, user_id, orders):
        """Return a SynthesisResult, or None when there is nothing to do yet."""
        # An empty snapshot usually means "not loaded yet"; writing 0 would be a lie.
        if not user_id or not orders:
            return None
        amount = total_shipping_cost(orders)
        record = auto_shipping_record(amount, self.clock())
        try:
            self.gateway.write_system_record(AUTO_SHIPPING_POLICY, record)
        except MutationError as e:
            error = SynthesizerWriteError(amount, e)
            logger.error("Auto shipping update failed: %s", e)
            return SynthesisResult(amount, record, error)
        logger.debug("Auto shipping set to %.2f for %d orders", amount, len(orders))
        return SynthesisResult(amount, record)
