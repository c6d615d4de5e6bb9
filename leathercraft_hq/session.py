"""
session.py — Session lifecycle and wiring.

`DashboardSession` owns every live listener the dashboard holds: the auth
watch and one subscription per collection. Use it as a context manager, or
call open()/close() yourself; close() always releases everything.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import date

from leathercraft_hq.coordinator import DashboardCoordinator
from leathercraft_hq.errors import SessionError
from leathercraft_hq.events import (
    SessionClosed, SessionEstablished, SessionFailed, SessionSignedOut, SnapshotReceived,
    SubscriptionFailed,
)
from leathercraft_hq.gateway import MutationGateway
from leathercraft_hq.models import COLLECTIONS
from leathercraft_hq.shipping import AutoShippingSynthesizer
from leathercraft_hq.store import EntityStore

logger = logging.getLogger(__name__)


class DashboardSession:
    def __init__(self, service, coordinator):
        self.service = service
        self.coordinator = coordinator
        self._subscriptions: dict[str, object] = {}
        self._unwatch_auth = None
        self._generation = 0
        self._lock = threading.Lock()
        self.is_open = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # ── Open ─────────────────────────────────────────────────────────────
    def open(self):
        """Establish identity, then start the auth watch and the live feeds."""
        try:
            user_id = self.service.establish_session()
        except Exception as e:
            error = e if isinstance(e, SessionError) else SessionError(str(e), e)
            self.coordinator.publish(SessionFailed(error))
            return False
        if not user_id:
            self.coordinator.publish(SessionFailed(SessionError("No user identity returned")))
            return False

        self.is_open = True
        self.coordinator.publish(SessionEstablished(user_id))
        self._unwatch_auth = self.service.watch_auth(self._on_auth_change)
        self._subscribe_all(user_id)
        return True

    def _subscribe_all(self, user_id):
        for collection in COLLECTIONS:
            with self._lock:
                if collection in self._subscriptions:
                    continue
                generation = self._generation
            try:
                sub = self.service.subscribe(
                    user_id, collection,
                    self._snapshot_handler(collection, generation),
                    self._error_handler(collection, generation),
                )
            except Exception as e:
                logger.error("Could not subscribe to %s: %s", collection, e)
                self.coordinator.publish(SubscriptionFailed(collection, e))
                continue
            with self._lock:
                self._subscriptions[collection] = sub

    def _is_current(self, generation):
        with self._lock:
            return generation == self._generation

    def _snapshot_handler(self, collection, generation):
        def _on_snapshot(records):
            # Late delivery from a feed that was already cancelled
            if not self._is_current(generation):
                return
            self.coordinator.publish(SnapshotReceived(collection, tuple(records)))
        return _on_snapshot

    def _error_handler(self, collection, generation):
        def _on_error(error):
            if not self._is_current(generation):
                return
            self.coordinator.publish(SubscriptionFailed(collection, error))
        return _on_error

    def _on_auth_change(self, user_id):
        if not self.is_open:
            return
        if user_id is None:
            self._cancel_subscriptions()
            if self.coordinator.user_id is not None:
                logger.info("Signed out; stopping live updates")
                self.coordinator.publish(SessionSignedOut())
        elif user_id != self.coordinator.user_id:
            self._cancel_subscriptions()
            self.coordinator.publish(SessionEstablished(user_id))
            self._subscribe_all(user_id)

    # ── Close ────────────────────────────────────────────────────────────
    def _cancel_subscriptions(self):
        with self._lock:
            subs = list(self._subscriptions.values())
            self._subscriptions.clear()
            self._generation += 1
        for sub in subs:
            sub.cancel()

    def close(self):
        """Release every listener. Safe to call more than once."""
        with self._lock:
            unwatch, self._unwatch_auth = self._unwatch_auth, None
            was_open, self.is_open = self.is_open, False
        if unwatch is not None:
            unwatch()
        self._cancel_subscriptions()
        if was_open:
            self.coordinator.publish(SessionClosed())

    def refresh(self, collection=None):
        """Ask the live feed(s) to re-read now. Snapshots still arrive the normal way."""
        with self._lock:
            if collection is None:
                subs = list(self._subscriptions.values())
            else:
                subs = [self._subscriptions[collection]] if collection in self._subscriptions else []
        for sub in subs:
            sub.refresh()

    @property
    def active_collections(self) -> list[str]:
        with self._lock:
            return list(self._subscriptions)


# ══════════════════════════════════════════════════════════════════════════════
#  WIRING
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class Dashboard:
    service: object
    store: EntityStore
    gateway: MutationGateway
    synthesizer: AutoShippingSynthesizer
    coordinator: DashboardCoordinator
    session: DashboardSession


def create_dashboard(service, clock=None) -> Dashboard:
    store = EntityStore()
    coordinator = DashboardCoordinator(store)
    gateway = MutationGateway(service, store, lambda: coordinator.user_id)
    synthesizer = AutoShippingSynthesizer(gateway, clock or date.today)
    coordinator.synthesizer = synthesizer
    session = DashboardSession(service, coordinator)
    return Dashboard(service, store, gateway, synthesizer, coordinator, session)
