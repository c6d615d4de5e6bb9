"""
coordinator.py — The one place dashboard state changes.

Live feeds, the auth watch and the session all publish events here. Events
are handled strictly one at a time in arrival order: `publish` queues the
event and, unless another call is already draining, drains the queue on the
calling thread. A handler that publishes (the synthesizer's upsert echoes
back as an expenses snapshot) just queues behind the current event.
"""

import logging
import threading
from collections import deque

from leathercraft_hq.errors import SessionError, SubscriptionError
from leathercraft_hq.events import (
    SessionClosed, SessionEstablished, SessionFailed, SessionSignedOut, SnapshotReceived,
    SubscriptionFailed,
)
from leathercraft_hq.metrics import DashboardStats, compute_metrics
from leathercraft_hq.models import COLLECTIONS, EXPENSES, INVENTORY, ORDERS

logger = logging.getLogger(__name__)

METRIC_INPUTS = (ORDERS, EXPENSES, INVENTORY)


class DashboardCoordinator:
    def __init__(self, store, synthesizer=None):
        self.store = store
        self.synthesizer = synthesizer

        self.user_id = None
        self.stats = DashboardStats()
        self.session_error = None
        self.collection_errors: dict[str, Exception] = {}
        self.synthesizer_error = None
        self.version = 0

        self._queue = deque()
        self._lock = threading.Lock()
        self._draining = False
        self._listeners = []
        self._handlers = {
            SessionEstablished: self._on_session_established,
            SessionFailed: self._on_session_failed,
            SnapshotReceived: self._on_snapshot,
            SubscriptionFailed: self._on_subscription_failed,
            SessionClosed: self._on_session_closed,
            SessionSignedOut: self._on_signed_out,
        }

    # ── Publishing ───────────────────────────────────────────────────────
    def publish(self, event):
        with self._lock:
            self._queue.append(event)
            if self._draining:
                return
            self._draining = True
        try:
            while True:
                with self._lock:
                    if not self._queue:
                        self._draining = False
                        return
                    event = self._queue.popleft()
                self._dispatch(event)
        except BaseException:
            with self._lock:
                self._draining = False
            raise

    def _dispatch(self, event):
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported event: {event!r}")
        handler(event)
        self.version += 1
        self._notify(event)

    def add_listener(self, fn):
        """Call fn(event) after every processed event. Returns a remover."""
        self._listeners.append(fn)

        def _remove():
            if fn in self._listeners:
                self._listeners.remove(fn)
        return _remove

    def _notify(self, event):
        for fn in list(self._listeners):
            try:
                fn(event)
            except Exception:
                logger.exception("Dashboard listener failed on %s", type(event).__name__)

    # ── State ────────────────────────────────────────────────────────────
    @property
    def is_loading(self) -> bool:
        """True until a session exists and every collection has delivered once."""
        if self.session_error is not None:
            return False
        if not self.user_id:
            return True
        return not all(
            self.store.is_loaded(c) or c in self.collection_errors for c in COLLECTIONS
        )

    # ── Handlers ─────────────────────────────────────────────────────────
    def _on_session_established(self, event):
        self.user_id = event.user_id
        self.session_error = None
        logger.info("Session established for %s", event.user_id)
        if self.store.is_loaded(ORDERS):
            self._run_synthesizer()

    def _on_session_failed(self, event):
        error = event.error
        if not isinstance(error, SessionError):
            error = SessionError(str(error), error)
        self.session_error = error
        logger.error("Session could not be established: %s", error)

    def _on_snapshot(self, event):
        self.store.replace(event.collection, event.records)
        self.collection_errors.pop(event.collection, None)
        if event.collection in METRIC_INPUTS:
            self.stats = compute_metrics(self.store.orders, self.store.expenses, self.store.inventory)
        if event.collection == ORDERS:
            self._run_synthesizer()

    def _on_subscription_failed(self, event):
        error = event.error
        if not isinstance(error, SubscriptionError):
            error = SubscriptionError(event.collection, error)
        self.collection_errors[event.collection] = error
        logger.error("%s", error)

    def _on_session_closed(self, event):
        self._forget_user()
        logger.info("Session closed")

    def _on_signed_out(self, event):
        self._forget_user()
        logger.info("Signed out; waiting for a new sign-in")

    def _forget_user(self):
        self.user_id = None
        self.store.clear()
        self.stats = DashboardStats()
        self.collection_errors.clear()
        self.synthesizer_error = None

    def _run_synthesizer(self):
        if self.synthesizer is None:
            return
        result = self.synthesizer.run(self.user_id, self.store.orders)
        if result is None:
            return
        self.synthesizer_error = result.error
