from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pytest

from arenatrack.api.local import LocalTableStore
from arenatrack.api.store import StoreError, TableStore
from arenatrack.db import LocalStorage
from arenatrack.models import Tile
from arenatrack.sync import SyncController


class FlakyStore(TableStore):
    """Wraps a real store; selected operations can fail or run a hook first."""

    name = "flaky"

    def __init__(self, inner: TableStore) -> None:
        self.inner = inner
        self.fail_on: set[str] = set()
        self.connected = True
        self.calls: list[str] = []
        self.before_select: Optional[Callable[[], None]] = None

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise StoreError(f"{operation} failed")

    def test_connection(self) -> bool:
        self.calls.append("test_connection")
        return self.connected

    def select(self, table, filters=None, order_by=None):
        self._check("select")
        if self.before_select is not None:
            self.before_select()
        return self.inner.select(table, filters=filters, order_by=order_by)

    def insert(self, table, row):
        self._check("insert")
        return self.inner.insert(table, row)

    def update(self, table, row_id, changes):
        self._check("update")
        return self.inner.update(table, row_id, changes)

    def delete(self, table, row_id):
        self._check("delete")
        return self.inner.delete(table, row_id)

    def subscribe(self, table, handler, filters=None):
        return self.inner.subscribe(table, handler, filters=filters)


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(str(tmp_path / "arenatrack.db"))


@pytest.fixture
def local_store(storage: LocalStorage) -> LocalTableStore:
    return LocalTableStore(storage)


@pytest.fixture
def flaky_store(local_store: LocalTableStore) -> FlakyStore:
    return FlakyStore(local_store)


@pytest.fixture
def controller(flaky_store: FlakyStore) -> SyncController:
    controller = SyncController(flaky_store)
    controller.load()
    return controller


@pytest.fixture
def tiles() -> list[Tile]:
    return [Tile("Ahri"), Tile("Zed"), Tile("Lux")]
