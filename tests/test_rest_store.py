from __future__ import annotations

import json

import pytest
import requests

from arenatrack.api.rest import RestTableStore
from arenatrack.api.store import PROFILES_TABLE, StoreError
from arenatrack.sync import RefreshSubscription


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str | None = None) -> None:
        self.status_code = status_code
        if text is not None:
            self.content = text.encode()
        elif payload is None:
            self.content = b""
        else:
            self.content = json.dumps(payload).encode()

    def json(self):
        return json.loads(self.content)


class FakeSession:
    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.requests: list[dict] = []
        self.closed = False

    def _next(self, **call):
        self.requests.append(call)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def request(self, method, url, **kwargs):
        return self._next(method=method, url=url, **kwargs)

    def get(self, url, **kwargs):
        return self._next(method="GET", url=url, **kwargs)

    def close(self) -> None:
        self.closed = True


def _store(*responses) -> tuple[RestTableStore, FakeSession]:
    session = FakeSession(*responses)
    store = RestTableStore("https://example.supabase.co/", "anon-key", session=session)
    return store, session


def test_select_builds_postgrest_query() -> None:
    store, session = _store(FakeResponse(payload=[{"id": "1", "name": "Me"}]))

    rows = store.select(PROFILES_TABLE, filters={"name": "Me"}, order_by="created_at")

    assert rows == [{"id": "1", "name": "Me"}]
    call = session.requests[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://example.supabase.co/rest/v1/profiles"
    assert call["params"] == {"select": "*", "name": "eq.Me", "order": "created_at.asc"}
    assert call["headers"]["apikey"] == "anon-key"
    assert call["headers"]["Authorization"] == "Bearer anon-key"
    assert call["timeout"] == 10


def test_insert_returns_stored_row() -> None:
    store, session = _store(FakeResponse(201, payload=[{"id": "new", "name": "Me"}]))

    row = store.insert(PROFILES_TABLE, {"name": "Me"})

    assert row["id"] == "new"
    assert session.requests[0]["method"] == "POST"
    assert session.requests[0]["json"] == [{"name": "Me"}]
    assert session.requests[0]["headers"]["Prefer"] == "return=representation"


def test_update_targets_one_row() -> None:
    store, session = _store(FakeResponse(payload=[{"id": "1", "name": "You"}]))

    row = store.update(PROFILES_TABLE, "1", {"name": "You"})

    assert row["name"] == "You"
    assert session.requests[0]["method"] == "PATCH"
    assert session.requests[0]["params"] == {"id": "eq.1"}


def test_update_of_missing_row_raises() -> None:
    store, _ = _store(FakeResponse(payload=[]))
    with pytest.raises(StoreError, match="row not found"):
        store.update(PROFILES_TABLE, "missing", {"name": "x"})


def test_delete_accepts_empty_body() -> None:
    store, session = _store(FakeResponse(204))

    store.delete(PROFILES_TABLE, "1")

    assert session.requests[0]["method"] == "DELETE"
    assert session.requests[0]["params"] == {"id": "eq.1"}


def test_error_response_carries_postgrest_details() -> None:
    store, _ = _store(FakeResponse(400, payload={
        "message": "invalid input syntax",
        "details": "bad uuid",
        "hint": "check the id",
        "code": "22P02",
    }))

    with pytest.raises(StoreError) as excinfo:
        store.select(PROFILES_TABLE)

    message = str(excinfo.value)
    assert "invalid input syntax" in message
    assert "details: bad uuid" in message
    assert "hint: check the id" in message
    assert "code: 22P02" in message


def test_network_error_becomes_store_error() -> None:
    store, _ = _store(requests.ConnectionError("refused"))
    with pytest.raises(StoreError, match="refused"):
        store.insert(PROFILES_TABLE, {"name": "Me"})


def test_invalid_json_becomes_store_error() -> None:
    store, _ = _store(FakeResponse(text="<html>"))
    with pytest.raises(StoreError, match="invalid JSON"):
        store.select(PROFILES_TABLE)


def test_connection_check() -> None:
    store, session = _store(FakeResponse(payload=[]), FakeResponse(401, payload={"message": "no key"}))

    assert store.test_connection() is True
    assert session.requests[0]["params"] == {"select": "id", "limit": 1}
    assert store.test_connection() is False


def test_connection_check_network_error() -> None:
    store, _ = _store(requests.Timeout("slow"))
    assert store.test_connection() is False


def test_close_closes_session() -> None:
    store, session = _store()
    store.close()
    assert session.closed


def test_changes_found_by_one_poll_refresh_once() -> None:
    baseline = [{"id": "1", "name": "Me"}, {"id": "2", "name": "Duo"}]
    changed = [{"id": "1", "name": "Me!"}, {"id": "2", "name": "Duo!"}, {"id": "3", "name": "Trio"}]
    store, session = _store(
        FakeResponse(payload=baseline),
        FakeResponse(payload=changed),
        FakeResponse(payload=changed),
    )
    store.poll_interval = 60
    received: list[list] = []
    subscription = RefreshSubscription(
        store, PROFILES_TABLE, lambda: store.select(PROFILES_TABLE), received.append
    ).start()

    subscription._feed.poll_once()

    assert len(session.requests) == 3
    assert received == [changed]
    subscription.stop()


def test_closed_feed_is_forgotten() -> None:
    store, _ = _store(FakeResponse(payload=[]), FakeResponse(payload=[]))
    store.poll_interval = 60
    first = store.subscribe(PROFILES_TABLE, lambda event: None)
    second = store.subscribe(PROFILES_TABLE, lambda event: None)

    first.close()

    assert store._feeds == [second]
    store.close()
    assert second.closed
    assert store._feeds == []
