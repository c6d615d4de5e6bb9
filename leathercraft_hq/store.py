"""
store.py — Entity Store: the latest snapshot of each collection.

The store owns no durable data. Each collection is replaced wholesale
whenever its live feed delivers a snapshot; nothing else writes to it.
Snapshots are tuples of frozen entities so they can key the metrics memo.
"""

import logging

from leathercraft_hq.models import COLLECTIONS, ORDERS, PRODUCTS, INVENTORY, EXPENSES, parse_record

logger = logging.getLogger(__name__)


class EntityStore:
    def __init__(self):
        self._snapshots: dict[str, tuple] = {name: () for name in COLLECTIONS}
        self._loaded: set[str] = set()

    # ── Writes (live feed only) ──────────────────────────────────────────
    def replace(self, collection, records) -> tuple:
        """Swap in a full snapshot. Rows without an id are skipped."""
        if collection not in self._snapshots:
            raise ValueError(f"Unknown collection: {collection}")
        entities = []
        for record in records:
            if not isinstance(record, dict) or not record.get("id"):
                logger.warning("Skipping %s record without an id: %r", collection, record)
                continue
            entities.append(parse_record(collection, record))
        snapshot = tuple(entities)
        self._snapshots[collection] = snapshot
        self._loaded.add(collection)
        logger.debug("Replaced %s snapshot (%d records)", collection, len(snapshot))
        return snapshot

    def clear(self):
        for name in COLLECTIONS:
            self._snapshots[name] = ()
        self._loaded.clear()

    # ── Reads ────────────────────────────────────────────────────────────
    def snapshot(self, collection) -> tuple:
        return self._snapshots[collection]

    def get(self, collection, record_id):
        for entity in self._snapshots[collection]:
            if entity.id == record_id:
                return entity
        return None

    def is_loaded(self, collection) -> bool:
        """Whether at least one snapshot has arrived for this collection."""
        return collection in self._loaded

    @property
    def orders(self) -> tuple:
        return self._snapshots[ORDERS]

    @property
    def products(self) -> tuple:
        return self._snapshots[PRODUCTS]

    @property
    def inventory(self) -> tuple:
        return self._snapshots[INVENTORY]

    @property
    def expenses(self) -> tuple:
        return self._snapshots[EXPENSES]
