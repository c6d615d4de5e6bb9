"""
supabase_service.py — Supabase implementation of the dashboard's backing service.

Tables (see supabase_schema.sql): orders, products, inventory, expenses.
Every row belongs to one user and is keyed by (user_id, id); row-level
security limits a signed-in user to their own rows.

The sync supabase-py client has no realtime channel, so each collection is
watched by a PollingSubscription thread that refetches the table and emits
a full snapshot whenever the content changes.
"""

import json
import logging
import threading
import uuid

from leathercraft_hq.errors import ServiceError, SessionError
from leathercraft_hq.models import COLLECTIONS

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000
INTERNAL_COLUMNS = ("user_id", "created_at", "updated_at")


# ── Supabase helpers ────────────────────────────────────────────────────────

def get_supabase_client(settings):
    """Return a Supabase client, or None if credentials are missing."""
    if not settings.supabase_configured:
        return None
    from supabase import create_client
    return create_client(settings.supabase_url, settings.supabase_key)


def _fetch_all(client, table: str, user_id: str) -> list[dict]:
    """Fetch one user's rows from a table, paginating past the 1000-row limit."""
    rows: list[dict] = []
    offset = 0
    while True:
        resp = (
            client.table(table)
            .select("*")
            .eq("user_id", user_id)
            .order("id")
            .range(offset, offset + PAGE_SIZE - 1)
            .execute()
        )
        batch = resp.data
        rows.extend(batch)
        if len(batch) < PAGE_SIZE:
            break
        offset += PAGE_SIZE
    return rows


def _strip_internal(row: dict) -> dict:
    """Drop bookkeeping columns and null fields so snapshots only carry what is set."""
    return {k: v for k, v in row.items() if k not in INTERNAL_COLUMNS and v is not None}


def _service_error(e, fallback="Supabase request failed") -> ServiceError:
    if isinstance(e, ServiceError):
        return e
    code = getattr(e, "code", None)
    message = getattr(e, "message", None) or str(e) or fallback
    return ServiceError(message, code=str(code) if code is not None else None)


def _user_id_of(response):
    user = getattr(response, "user", None)
    if user is None and getattr(response, "session", None) is not None:
        user = response.session.user
    return getattr(user, "id", None)


# ── Live feed ───────────────────────────────────────────────────────────────

class PollingSubscription:
    """Background reader for one (user, table) pair."""

    def __init__(self, client, table, user_id, on_snapshot, on_error, poll_seconds=5.0):
        self.client = client
        self.table = table
        self.user_id = user_id
        self.on_snapshot = on_snapshot
        self.on_error = on_error
        self.poll_seconds = poll_seconds

        self._stop = threading.Event()
        self._wake = threading.Event()
        self._last_signature = None
        self._failing = False
        self._emit_lock = threading.RLock()
        self._thread = threading.Thread(
            target=self._run, name=f"poll-{table}", daemon=True,
        )

    def start(self):
        self._thread.start()
        return self

    def cancel(self):
        """Stop polling. Once this returns no further callbacks are made."""
        self._stop.set()
        self._wake.set()
        # Wait out a callback already in flight on the poll thread
        with self._emit_lock:
            pass

    def refresh(self):
        self._wake.set()

    @property
    def active(self) -> bool:
        return not self._stop.is_set()

    def _run(self):
        while not self._stop.is_set():
            self._poll_once()
            self._wake.wait(self.poll_seconds)
            self._wake.clear()

    def _poll_once(self):
        try:
            rows = [_strip_internal(r) for r in _fetch_all(self.client, self.table, self.user_id)]
        except Exception as e:
            # Report once per outage; the next good read clears the error downstream.
            with self._emit_lock:
                if not self._failing and not self._stop.is_set():
                    self._failing = True
                    logger.error("Polling %s failed: %s", self.table, e)
                    self.on_error(_service_error(e))
            return
        self._failing = False
        signature = json.dumps(rows, sort_keys=True, default=str)
        with self._emit_lock:
            if signature == self._last_signature or self._stop.is_set():
                return
            self._last_signature = signature
            self.on_snapshot(rows)


# ══════════════════════════════════════════════════════════════════════════════
#  BACKEND
# ══════════════════════════════════════════════════════════════════════════════

class SupabaseBackend:
    def __init__(self, client, settings):
        self.client = client
        self.settings = settings
        self._subs: list[PollingSubscription] = []
        self._lock = threading.Lock()

    # ── Session ──────────────────────────────────────────────────────────
    def establish_session(self) -> str:
        """Existing session, else owner password login, else anonymous sign-in."""
        auth = self.client.auth
        try:
            session = auth.get_session()
            if session is not None and session.user is not None:
                return session.user.id
            if self.settings.has_owner_login:
                resp = auth.sign_in_with_password({
                    "email": self.settings.owner_email,
                    "password": self.settings.owner_password,
                })
            else:
                resp = auth.sign_in_anonymously()
        except Exception as e:
            raise SessionError(str(e), _service_error(e)) from e
        user_id = _user_id_of(resp)
        if not user_id:
            raise SessionError("Supabase returned no user for this session")
        logger.info("Signed in to Supabase as %s", user_id)
        return user_id

    def watch_auth(self, callback):
        def _on_change(event, session):
            user = getattr(session, "user", None)
            callback(getattr(user, "id", None))

        subscription = self.client.auth.on_auth_state_change(_on_change)
        return subscription.unsubscribe

    # ── Live feed ────────────────────────────────────────────────────────
    def subscribe(self, user_id, collection, on_snapshot, on_error):
        self._check(collection)
        sub = PollingSubscription(
            self.client, collection, user_id, on_snapshot, on_error,
            poll_seconds=self.settings.poll_seconds,
        )
        with self._lock:
            self._subs = [s for s in self._subs if s.active]
            self._subs.append(sub)
        return sub.start()

    def _wake(self, user_id, collection):
        with self._lock:
            subs = [s for s in self._subs if s.active and s.table == collection and s.user_id == user_id]
        for sub in subs:
            sub.refresh()

    # ── Mutations ────────────────────────────────────────────────────────
    def create(self, user_id, collection, data) -> str:
        self._check(collection)
        record_id = uuid.uuid4().hex[:20]
        row = {**dict(data), "id": record_id, "user_id": user_id}
        self._execute(self.client.table(collection).insert(row))
        self._wake(user_id, collection)
        return record_id

    def merge_update(self, user_id, collection, record_id, data):
        self._check(collection)
        changes = {k: v for k, v in dict(data).items() if k not in ("id", "user_id")}
        resp = self._execute(
            self.client.table(collection).update(changes)
            .eq("user_id", user_id).eq("id", record_id)
        )
        if not resp.data:
            raise ServiceError(f"No document to update: {collection}/{record_id}", code="not-found")
        self._wake(user_id, collection)

    def delete(self, user_id, collection, record_id):
        self._check(collection)
        self._execute(
            self.client.table(collection).delete()
            .eq("user_id", user_id).eq("id", record_id)
        )
        self._wake(user_id, collection)

    def upsert(self, user_id, collection, record_id, data):
        self._check(collection)
        row = {**dict(data), "id": record_id, "user_id": user_id}
        self._execute(self.client.table(collection).upsert(row, on_conflict="user_id,id"))
        self._wake(user_id, collection)

    @staticmethod
    def _execute(query):
        try:
            return query.execute()
        except Exception as e:
            raise _service_error(e) from e

    @staticmethod
    def _check(collection):
        if collection not in COLLECTIONS:
            raise ServiceError(f"Unknown collection: {collection}", code="invalid-argument")

    def close(self):
        with self._lock:
            subs, self._subs = self._subs, []
        for sub in subs:
            sub.cancel()
