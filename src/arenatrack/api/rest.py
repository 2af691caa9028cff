"""PostgREST table store client for the hosted profile database."""

import logging
from typing import Optional

import requests

from .feed import PollingChangeFeed
from .store import PROFILES_TABLE, ChangeFeed, ChangeHandler, StoreError, TableStore

logger = logging.getLogger(__name__)


class RestTableStore(TableStore):
    """Client for a PostgREST (Supabase) REST endpoint."""

    name = "remote"
    REST_PATH = "/rest/v1"

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 10,
        poll_interval: float = 2.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize REST store client.

        Args:
            url: Project base URL
            api_key: Anonymous or service API key
            timeout: Request timeout in seconds
            poll_interval: Seconds between change feed polls
            session: Optional requests session to reuse
        """
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.session = session or requests.Session()
        self._feeds: list[ChangeFeed] = []

    def _get_headers(self) -> dict:
        """Get headers for REST requests.

        Returns:
            Dictionary of headers
        """
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Prefer": "return=representation",
        }

    def _table_url(self, table: str) -> str:
        return f"{self.url}{self.REST_PATH}/{table}"

    @staticmethod
    def _filter_params(filters: Optional[dict]) -> dict:
        return {column: f"eq.{value}" for column, value in (filters or {}).items()}

    @staticmethod
    def _describe_error(response: requests.Response) -> str:
        """Extract PostgREST's message/details/hint from an error response."""
        try:
            data = response.json()
        except ValueError:
            return f"HTTP {response.status_code}"

        if not isinstance(data, dict):
            return f"HTTP {response.status_code}"

        parts = [data.get("message") or f"HTTP {response.status_code}"]
        for key in ("details", "hint", "code"):
            if data.get(key):
                parts.append(f"{key}: {data[key]}")
        return "; ".join(str(part) for part in parts)

    def _request(self, method: str, table: str, action: str, **kwargs):
        try:
            response = self.session.request(
                method,
                self._table_url(table),
                headers=self._get_headers(),
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            raise StoreError(f"Failed to {action}: {e}")

        if response.status_code >= 400:
            raise StoreError(f"Failed to {action}: {self._describe_error(response)}")

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise StoreError(f"Failed to {action}: invalid JSON response ({e})")

    def test_connection(self) -> bool:
        """Test the REST endpoint by reading a single profile id.

        Returns:
            True if connection successful
        """
        try:
            response = self.session.get(
                self._table_url(PROFILES_TABLE),
                params={"select": "id", "limit": 1},
                headers=self._get_headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Database connection test error: {e}")
            return False

        if response.status_code != 200:
            logger.error(f"Database connection test failed: {self._describe_error(response)}")
            return False

        logger.debug("Database connection successful")
        return True

    def select(self, table, filters=None, order_by=None):
        params = {"select": "*", **self._filter_params(filters)}
        if order_by:
            params["order"] = f"{order_by}.asc"

        data = self._request("GET", table, f"fetch {table}", params=params)
        return data or []

    def insert(self, table, row):
        data = self._request("POST", table, f"insert into {table}", json=[row])
        if not data:
            raise StoreError(f"Failed to insert into {table}: empty response")
        return data[0]

    def update(self, table, row_id, changes):
        data = self._request(
            "PATCH",
            table,
            f"update {table} row {row_id}",
            params={"id": f"eq.{row_id}"},
            json=changes,
        )
        if not data:
            raise StoreError(f"Failed to update {table} row {row_id}: row not found")
        return data[0]

    def delete(self, table, row_id):
        self._request(
            "DELETE",
            table,
            f"delete {table} row {row_id}",
            params={"id": f"eq.{row_id}"},
        )

    def subscribe(self, table: str, handler: ChangeHandler, filters: Optional[dict] = None) -> ChangeFeed:
        feed = PollingChangeFeed(
            fetch=lambda: self.select(table, filters=filters),
            table=table,
            handler=handler,
            interval=self.poll_interval,
            on_close=self._forget_feed,
        )
        self._feeds.append(feed)
        return feed.start()

    def _forget_feed(self, feed: ChangeFeed):
        if feed in self._feeds:
            self._feeds.remove(feed)

    def close(self):
        for feed in list(self._feeds):
            feed.close()
        self._feeds = []
        self.session.close()
