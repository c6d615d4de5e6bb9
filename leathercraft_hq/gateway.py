"""
gateway.py — Mutation Gateway: add / update / delete for each collection.

Writes go straight to the backing service; the Entity Store is never
touched here. Callers learn about the new state from the next live
snapshot, and failures are raised to them as MutationError.

System-owned singleton records (the auto shipping expense) are protected
by a SingletonRecordPolicy: the ordinary paths refuse to touch them and
only `write_system_record` can upsert one.
"""

import logging
from dataclasses import dataclass

from leathercraft_hq.errors import MutationError, ReservedRecordError, ValidationError
from leathercraft_hq.models import COLLECTIONS, EXPENSES, INVENTORY, ORDERS, PRODUCTS, parse_flag, validate_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SingletonRecordPolicy:
    collection: str
    record_id: str

    def covers(self, collection, record_id) -> bool:
        return collection == self.collection and record_id == self.record_id


AUTO_SHIPPING_ID = "autoShipping"
AUTO_SHIPPING_POLICY = SingletonRecordPolicy(EXPENSES, AUTO_SHIPPING_ID)


class CollectionGateway:
    """add/update/delete bound to one collection (gateway.orders.add(...))."""

    def __init__(self, gateway, collection):
        self._gateway = gateway
        self.collection = collection

    def add(self, data) -> str:
        return self._gateway.add(self.collection, data)

    def update(self, record_id, data):
        self._gateway.update(self.collection, record_id, data)

    def delete(self, record_id):
        self._gateway.delete(self.collection, record_id)


class MutationGateway:
    def __init__(self, service, store, user_id_provider, policies=(AUTO_SHIPPING_POLICY,)):
        self.service = service
        self.store = store
        self._user_id_provider = user_id_provider
        self.policies = tuple(policies)

        self.orders = CollectionGateway(self, ORDERS)
        self.products = CollectionGateway(self, PRODUCTS)
        self.inventory = CollectionGateway(self, INVENTORY)
        self.expenses = CollectionGateway(self, EXPENSES)

    def collection(self, name) -> CollectionGateway:
        if name not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {name}")
        return getattr(self, name)

    # ── Ordinary writes ──────────────────────────────────────────────────
    def add(self, collection, data) -> str:
        self._check_writable("add", collection, None, data)
        self._validate("add", collection, data, partial=False)
        record_id = self._call("add", collection, None, self.service.create, data)
        logger.info("Added %s/%s", collection, record_id)
        return record_id

    def update(self, collection, record_id, data):
        self._check_writable("update", collection, record_id, data)
        self._validate("update", collection, data, partial=True)
        self._call("update", collection, record_id, self.service.merge_update, record_id, data)
        logger.info("Updated %s/%s", collection, record_id)

    def delete(self, collection, record_id):
        self._check_writable("delete", collection, record_id)
        self._call("delete", collection, record_id, self.service.delete, record_id)
        logger.info("Deleted %s/%s", collection, record_id)

    # ── System writes ────────────────────────────────────────────────────
    def write_system_record(self, policy, data):
        """Create-or-merge the singleton record a policy reserves."""
        if policy not in self.policies:
            raise ValueError(f"No policy registered for {policy.collection}/{policy.record_id}")
        self._call("upsert", policy.collection, policy.record_id,
                   self.service.upsert, policy.record_id, data)

    # ── Read-only checks (also used by the pages to hide buttons) ────────
    def is_reserved(self, collection, record_id) -> bool:
        return any(p.covers(collection, record_id) for p in self.policies)

    def is_read_only(self, collection, record_id) -> bool:
        if self.is_reserved(collection, record_id):
            return True
        if collection == EXPENSES and record_id:
            current = self.store.get(EXPENSES, record_id)
            return bool(current is not None and current.is_auto)
        return False

    def _check_writable(self, operation, collection, record_id, data=None):
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")
        auto_payload = (
            collection == EXPENSES and isinstance(data, dict) and parse_flag(data.get("is_auto"))
        )
        if auto_payload or (record_id and self.is_read_only(collection, record_id)):
            logger.warning("Rejected %s on system-owned record %s/%s", operation, collection, record_id)
            raise ReservedRecordError(operation, collection, record_id)

    def _validate(self, operation, collection, data, partial):
        try:
            validate_record(collection, data, partial=partial)
        except ValidationError as e:
            e.operation = operation
            logger.warning("Rejected %s on %s: %s", operation, collection, e)
            raise

    def _call(self, operation, collection, record_id, fn, *args):
        user_id = self._user_id_provider()
        if not user_id:
            raise MutationError(operation, collection, record_id, message="No active session")
        try:
            return fn(user_id, collection, *args)
        except Exception as e:
            logger.error("Failed to %s %s/%s: %s", operation, collection, record_id or "new", e)
            raise MutationError(operation, collection, record_id, e) from e
