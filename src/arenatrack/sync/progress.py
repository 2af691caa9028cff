"""Per-champion progress records scoped to one profile."""

import logging
from typing import Callable, Optional

from ..api.store import PROGRESS_TABLE, StoreError, TableStore
from ..models import ChampionProgress, utc_now
from .subscription import RefreshGuard, RefreshSubscription

logger = logging.getLogger(__name__)


class ProgressTracker:
    """Targeted add/remove of completion records.

    Unlike SyncController.toggle_completion, each champion is its own row,
    so concurrent edits to different champions never overwrite each other.
    """

    def __init__(self, store: TableStore):
        self.store = store

    def _fetch(self, profile_id: str) -> list[ChampionProgress]:
        rows = self.store.select(PROGRESS_TABLE, filters={"profile_id": profile_id})
        return [ChampionProgress.from_row(row) for row in rows]

    def get(self, profile_id: str) -> list[ChampionProgress]:
        """Fetch all progress records for a profile, or [] on failure."""
        try:
            return self._fetch(profile_id)
        except StoreError as e:
            logger.error(f"Error fetching champion progress: {e}")
            return []

    def completed_names(self, profile_id: str) -> list[str]:
        """Names of champions with a completed record."""
        return sorted(
            record.champion_name for record in self.get(profile_id) if record.is_completed
        )

    def set_completed(self, profile_id: str, champion: str, completed: bool) -> bool:
        """Upsert the record for one champion.

        Args:
            profile_id: Owning profile
            champion: Champion name
            completed: New completion flag

        Returns:
            True if the record was written
        """
        try:
            existing = self.store.select(
                PROGRESS_TABLE,
                filters={"profile_id": profile_id, "champion_name": champion},
            )
            if existing:
                self.store.update(PROGRESS_TABLE, existing[0]["id"], {
                    "is_completed": completed,
                    "updated_at": utc_now(),
                })
            else:
                self.store.insert(PROGRESS_TABLE, {
                    "profile_id": profile_id,
                    "champion_name": champion,
                    "is_completed": completed,
                })
        except StoreError as e:
            logger.error(f"Error updating champion progress: {e}")
            return False

        return True

    def subscribe(
        self,
        profile_id: str,
        callback: Callable[[list[ChampionProgress]], None],
        guard: Optional[RefreshGuard] = None,
    ) -> RefreshSubscription:
        """Re-fetch a profile's records whenever one of them changes."""
        subscription = RefreshSubscription(
            store=self.store,
            table=PROGRESS_TABLE,
            fetch=lambda: self._fetch(profile_id),
            callback=callback,
            filters={"profile_id": profile_id},
            guard=guard,
        )
        return subscription.start()
