"""
backend.py — What the dashboard needs from its backing service, plus a
process-local implementation.

The Supabase adapter lives in the root `supabase_service.py`. When Supabase
isn't configured the app falls back to `InMemoryBackend`, which is also
what the tests run against.
"""

import copy
import threading
import uuid
from typing import Callable, Protocol

from leathercraft_hq.errors import ServiceError
from leathercraft_hq.models import COLLECTIONS


SnapshotCallback = Callable[[list], None]
ErrorCallback = Callable[[Exception], None]


class Subscription(Protocol):
    def cancel(self) -> None: ...

    def refresh(self) -> None: ...


class BackendService(Protocol):
    def establish_session(self) -> str: ...

    def watch_auth(self, callback: Callable[[str | None], None]) -> Callable[[], None]: ...

    def subscribe(self, user_id: str, collection: str,
                  on_snapshot: SnapshotCallback, on_error: ErrorCallback) -> Subscription: ...

    def create(self, user_id: str, collection: str, data: dict) -> str: ...

    def merge_update(self, user_id: str, collection: str, record_id: str, data: dict) -> None: ...

    def delete(self, user_id: str, collection: str, record_id: str) -> None: ...

    def upsert(self, user_id: str, collection: str, record_id: str, data: dict) -> None: ...


# ══════════════════════════════════════════════════════════════════════════════
#  IN-MEMORY BACKEND
# ══════════════════════════════════════════════════════════════════════════════

def _merge(doc, data):
    """Merge data into doc; a None value removes the field."""
    for k, v in dict(data).items():
        if v is None:
            doc.pop(k, None)
        else:
            doc[k] = copy.deepcopy(v)
    return doc


class _LocalSubscription:
    def __init__(self, backend, key, on_snapshot, on_error):
        self._backend = backend
        self.key = key
        self.on_snapshot = on_snapshot
        self.on_error = on_error
        self.active = True

    def cancel(self):
        if self.active:
            self.active = False
            self._backend._unsubscribe(self)

    def refresh(self):
        if self.active:
            self._backend._emit(self.key, only=self)


class InMemoryBackend:
    """Document store keyed by (user, collection, id).

    Every write synchronously pushes the collection's full snapshot to its
    subscribers, the way a live feed would.
    """

    def __init__(self, user_id="local-owner"):
        self.user_id = user_id
        self._docs: dict[tuple[str, str], dict[str, dict]] = {}
        self._subs: dict[tuple[str, str], list[_LocalSubscription]] = {}
        self._auth_callbacks: list[Callable] = []
        self._lock = threading.RLock()

    # ── Session ──────────────────────────────────────────────────────────
    def establish_session(self) -> str:
        return self.user_id

    def watch_auth(self, callback):
        self._auth_callbacks.append(callback)
        callback(self.user_id)

        def _unsubscribe():
            if callback in self._auth_callbacks:
                self._auth_callbacks.remove(callback)
        return _unsubscribe

    def sign_out(self):
        for cb in list(self._auth_callbacks):
            cb(None)

    def sign_in(self, user_id=None):
        self.user_id = user_id or self.user_id
        for cb in list(self._auth_callbacks):
            cb(self.user_id)

    # ── Live feed ────────────────────────────────────────────────────────
    def subscribe(self, user_id, collection, on_snapshot, on_error):
        key = self._key(user_id, collection)
        sub = _LocalSubscription(self, key, on_snapshot, on_error)
        with self._lock:
            self._subs.setdefault(key, []).append(sub)
        self._emit(key, only=sub)
        return sub

    def active_subscriptions(self) -> int:
        with self._lock:
            return sum(len(subs) for subs in self._subs.values())

    def _unsubscribe(self, sub):
        with self._lock:
            subs = self._subs.get(sub.key, [])
            if sub in subs:
                subs.remove(sub)

    def _snapshot(self, key) -> list[dict]:
        with self._lock:
            docs = self._docs.get(key, {})
            return [{"id": doc_id, **copy.deepcopy(doc)} for doc_id, doc in docs.items()]

    def _emit(self, key, only=None):
        records = self._snapshot(key)
        with self._lock:
            targets = [only] if only is not None else list(self._subs.get(key, []))
        for sub in targets:
            if sub.active:
                sub.on_snapshot(records)

    # ── Mutations ────────────────────────────────────────────────────────
    def create(self, user_id, collection, data) -> str:
        key = self._key(user_id, collection)
        record_id = uuid.uuid4().hex[:20]
        with self._lock:
            self._docs.setdefault(key, {})[record_id] = _merge({}, data)
        self._emit(key)
        return record_id

    def merge_update(self, user_id, collection, record_id, data):
        key = self._key(user_id, collection)
        with self._lock:
            docs = self._docs.get(key, {})
            if record_id not in docs:
                raise ServiceError(f"No document to update: {collection}/{record_id}", code="not-found")
            _merge(docs[record_id], data)
        self._emit(key)

    def delete(self, user_id, collection, record_id):
        key = self._key(user_id, collection)
        with self._lock:
            self._docs.get(key, {}).pop(record_id, None)
        self._emit(key)

    def upsert(self, user_id, collection, record_id, data):
        key = self._key(user_id, collection)
        with self._lock:
            _merge(self._docs.setdefault(key, {}).setdefault(record_id, {}), data)
        self._emit(key)

    def seed(self, collection, records, user_id=None):
        """Load fixture rows without notifying anyone (used for demo data and tests)."""
        key = self._key(user_id or self.user_id, collection)
        with self._lock:
            docs = self._docs.setdefault(key, {})
            for record in records:
                record = dict(record)
                record_id = str(record.pop("id", None) or uuid.uuid4().hex[:20])
                docs[record_id] = record

    @staticmethod
    def _key(user_id, collection):
        if collection not in COLLECTIONS:
            raise ServiceError(f"Unknown collection: {collection}", code="invalid-argument")
        return (user_id, collection)
