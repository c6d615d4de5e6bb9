"""Shared fixtures: an in-memory backend that can be told to fail, and a wired dashboard."""

from datetime import date

import pytest

from leathercraft_hq.backend import InMemoryBackend
from leathercraft_hq.errors import ServiceError
from leathercraft_hq.metrics import compute_metrics
from leathercraft_hq.session import create_dashboard

TODAY = date(2024, 3, 15)


class FlakyBackend(InMemoryBackend):
    """InMemoryBackend with per-operation failure injection.

    backend.fail("upsert", collection="expenses") makes the next upserts on
    expenses raise until backend.heal() is called.
    """

    def __init__(self, user_id="owner-1"):
        super().__init__(user_id)
        self._failures = {}
        self.calls = []

    def fail(self, operation, collection=None, error=None):
        self._failures[(operation, collection)] = error or ServiceError(
            f"{operation} refused", code="42501"
        )

    def heal(self):
        self._failures.clear()

    def _maybe_fail(self, operation, collection=None):
        error = self._failures.get((operation, collection)) or self._failures.get((operation, None))
        if error is not None:
            raise error

    def establish_session(self):
        self._maybe_fail("session")
        return super().establish_session()

    def subscribe(self, user_id, collection, on_snapshot, on_error):
        self._maybe_fail("subscribe", collection)
        return super().subscribe(user_id, collection, on_snapshot, on_error)

    def create(self, user_id, collection, data):
        self.calls.append(("create", collection, None, data))
        self._maybe_fail("create", collection)
        return super().create(user_id, collection, data)

    def merge_update(self, user_id, collection, record_id, data):
        self.calls.append(("merge_update", collection, record_id, data))
        self._maybe_fail("merge_update", collection)
        return super().merge_update(user_id, collection, record_id, data)

    def delete(self, user_id, collection, record_id):
        self.calls.append(("delete", collection, record_id, None))
        self._maybe_fail("delete", collection)
        return super().delete(user_id, collection, record_id)

    def upsert(self, user_id, collection, record_id, data):
        self.calls.append(("upsert", collection, record_id, data))
        self._maybe_fail("upsert", collection)
        return super().upsert(user_id, collection, record_id, data)

    def push_error(self, collection, error):
        """Deliver a subscription-level error to every listener of a collection."""
        for sub in list(self._subs.get((self.user_id, collection), [])):
            sub.on_error(error)

    def calls_for(self, operation):
        return [c for c in self.calls if c[0] == operation]


@pytest.fixture(autouse=True)
def _fresh_metrics_cache():
    compute_metrics.cache_clear()
    yield
    compute_metrics.cache_clear()


@pytest.fixture
def backend():
    return FlakyBackend()


@pytest.fixture
def dashboard(backend):
    return create_dashboard(backend, clock=lambda: TODAY)


@pytest.fixture
def live(dashboard):
    """A dashboard with its session open; closed again after the test."""
    dashboard.session.open()
    yield dashboard
    dashboard.session.close()


def order(city="Rabat", total=100.0, status="Pending", date_="2024-03-15", **extra):
    record = {
        "customer_name": extra.pop("customer_name", "Amina"),
        "city": city,
        "date": date_,
        "items": extra.pop("items", [{"product_name": "Wallet - Brown", "qty": 1, "price": total}]),
        "total": total,
        "status": status,
    }
    record.update(extra)
    return record


def expense(category="Materials", amount=10.0, date_="2024-03-20", **extra):
    record = {"category": category, "amount": amount, "date": date_, "description": "", "is_auto": False}
    record.update(extra)
    return record
