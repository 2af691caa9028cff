"""Table store backed by local JSON blobs."""

import logging
import sqlite3
import uuid
from typing import Optional

from ..db import STORAGE_KEYS, LocalStorage
from ..models import ChangeEvent, ChangeType, utc_now
from .feed import ListenerRegistry
from .store import ChangeFeed, ChangeHandler, StoreError, TableStore, matches

logger = logging.getLogger(__name__)


class LocalTableStore(TableStore):
    """Stores each table as one JSON list inside LocalStorage.

    Change notifications are delivered synchronously to listeners in this
    process only.
    """

    name = "local"

    def __init__(self, storage: LocalStorage):
        """Initialize local store.

        Args:
            storage: Key-value blob storage
        """
        self.storage = storage
        self._listeners = ListenerRegistry()

    def _key(self, table: str) -> str:
        try:
            return STORAGE_KEYS[table]
        except KeyError:
            raise StoreError(f"Unknown table: {table}")

    def _load(self, table: str) -> list[dict]:
        key = self._key(table)
        try:
            rows = self.storage.get_json(key, default=[])
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read {table} from local storage: {e}")
        except ValueError as e:
            raise StoreError(f"Corrupt local data for {table}: {e}")
        if not isinstance(rows, list):
            raise StoreError(f"Corrupt local data for {table}: expected a list")
        return rows

    def _save(self, table: str, rows: list[dict]):
        key = self._key(table)
        try:
            self.storage.set_json(key, rows)
        except sqlite3.Error as e:
            raise StoreError(f"Failed to write {table} to local storage: {e}")

    def test_connection(self) -> bool:
        try:
            self.storage.keys()
        except Exception as e:
            logger.error(f"Local storage unavailable: {e}")
            return False
        return True

    def select(self, table, filters=None, order_by=None):
        rows = [dict(row) for row in self._load(table) if matches(row, filters)]
        if order_by:
            rows.sort(key=lambda row: str(row.get(order_by) or ""))
        return rows

    def insert(self, table, row):
        rows = self._load(table)
        now = utc_now()
        stored = {
            **row,
            "id": row.get("id") or str(uuid.uuid4()),
            "created_at": row.get("created_at") or now,
            "updated_at": row.get("updated_at") or now,
        }
        if any(str(existing.get("id")) == str(stored["id"]) for existing in rows):
            raise StoreError(f"Failed to insert into {table}: duplicate id {stored['id']}")

        rows.append(stored)
        self._save(table, rows)
        self._listeners.notify(ChangeEvent(table, ChangeType.INSERT, dict(stored)))
        return dict(stored)

    def update(self, table, row_id, changes):
        rows = self._load(table)
        for index, existing in enumerate(rows):
            if str(existing.get("id")) == str(row_id):
                updated = {**existing, **changes, "id": existing["id"]}
                rows[index] = updated
                self._save(table, rows)
                self._listeners.notify(ChangeEvent(table, ChangeType.UPDATE, dict(updated)))
                return dict(updated)

        raise StoreError(f"Failed to update {table} row {row_id}: row not found")

    def delete(self, table, row_id):
        rows = self._load(table)
        remaining = [row for row in rows if str(row.get("id")) != str(row_id)]
        if len(remaining) == len(rows):
            return

        removed = next(row for row in rows if str(row.get("id")) == str(row_id))
        self._save(table, remaining)
        self._listeners.notify(ChangeEvent(table, ChangeType.DELETE, dict(removed)))

    def subscribe(self, table: str, handler: ChangeHandler, filters: Optional[dict] = None) -> ChangeFeed:
        self._key(table)
        return self._listeners.add(table, handler, filters)
