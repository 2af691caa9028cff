"""Profile synchronization against a table store."""

import logging
from typing import Callable, Iterable, Optional

from ..api.store import PROFILES_TABLE, StoreError, TableStore
from ..config import DEFAULT_PROFILE_NAMES
from ..models import COMPLETED_FIELD, ConnectionState, Profile, utc_now
from .subscription import RefreshGuard, RefreshSubscription

logger = logging.getLogger(__name__)


class ProfileSubscription(RefreshSubscription):
    """Keeps a SyncController reconciled with pushed profile changes."""

    def __init__(
        self,
        controller: "SyncController",
        callback: Callable[[list[Profile]], None],
        guard: Optional[RefreshGuard] = None,
    ):
        self.controller = controller
        self.listener = callback
        super().__init__(
            store=controller.store,
            table=PROFILES_TABLE,
            fetch=controller._fetch_profiles,
            callback=self._deliver,
            guard=guard,
        )

    def _deliver(self, profiles: list[Profile]):
        self.controller.apply_snapshot(profiles)
        self.listener(list(profiles))


class SyncController:
    """Owns the canonical profile list and mirrors it to the store.

    Store failures never propagate: they are logged and turned into
    ``None``/``[]``/``False`` with the in-memory state left unchanged.
    """

    def __init__(self, store: TableStore, default_names: Iterable[str] = DEFAULT_PROFILE_NAMES):
        """Initialize sync controller.

        Args:
            store: Table store holding the profiles table
            default_names: Profiles seeded when the table is empty
        """
        self.store = store
        self.default_names = tuple(default_names)
        self.state = ConnectionState.TESTING
        self.profiles: list[Profile] = []
        self.selected_id: Optional[str] = None

    @property
    def selected(self) -> Optional[Profile]:
        return self.get(self.selected_id) if self.selected_id else None

    def get(self, profile_id: str) -> Optional[Profile]:
        """Find a loaded profile by id."""
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        return None

    def find(self, ref: str) -> Optional[Profile]:
        """Find a loaded profile by id, or by case-insensitive name."""
        profile = self.get(ref)
        if profile:
            return profile

        wanted = ref.strip().casefold()
        for profile in self.profiles:
            if profile.name.casefold() == wanted:
                return profile
        return None

    def select(self, profile_id: Optional[str]) -> bool:
        """Make a loaded profile the current selection."""
        if profile_id is not None and self.get(profile_id) is None:
            return False
        self.selected_id = profile_id
        return True

    def connect(self) -> bool:
        """Test the store connection.

        Returns:
            True if connected; on failure the session is terminally failed
        """
        self.state = ConnectionState.TESTING
        if self.store.test_connection():
            self.state = ConnectionState.CONNECTED
            logger.info(f"Connected to {self.store.name} store")
            return True

        self.state = ConnectionState.FAILED
        logger.error(f"Connection to {self.store.name} store failed")
        return False

    def load(self) -> list[Profile]:
        """Fetch all profiles, seeding the defaults when there are none.

        Returns:
            Profiles ordered by creation time, or [] if the store failed
        """
        if self.state is ConnectionState.FAILED:
            return []
        if self.state is ConnectionState.TESTING and not self.connect():
            return []

        self.state = ConnectionState.LOADING
        try:
            profiles = self._fetch_profiles()
        except StoreError as e:
            logger.error(f"Error fetching profiles: {e}")
            self.state = ConnectionState.FAILED
            return []

        if not profiles:
            logger.info("No profiles found, creating defaults")
            profiles = self.seed_defaults()

        self.profiles = profiles
        self.selected_id = profiles[0].id if profiles else None
        self.state = ConnectionState.READY
        logger.debug(f"Loaded {len(profiles)} profiles")
        return list(profiles)

    def seed_defaults(self) -> list[Profile]:
        """Create the default profiles. Ones that fail to create are skipped."""
        seeded = []
        for name in self.default_names:
            profile = self._insert(name)
            if profile:
                seeded.append(profile)
        return seeded

    def fetch_profiles(self) -> list[Profile]:
        """Fetch all profiles ordered by creation time, or [] on failure."""
        try:
            return self._fetch_profiles()
        except StoreError as e:
            logger.error(f"Error fetching profiles: {e}")
            return []

    def create(self, name: str) -> Optional[Profile]:
        """Create a profile and select it.

        Args:
            name: Display name, surrounding whitespace is trimmed

        Returns:
            The new profile, or None if the name was blank or the store failed
        """
        name = (name or "").strip()
        if not name:
            logger.debug("Rejected profile with blank name")
            return None

        profile = self._insert(name)
        if profile is None:
            return None

        if not self._reload() or self.get(profile.id) is None:
            self._replace(profile)
        self.selected_id = profile.id
        return profile

    def rename(self, profile_id: str, new_name: str) -> Optional[Profile]:
        """Rename a profile without touching its completed set."""
        new_name = (new_name or "").strip()
        if not new_name or self.get(profile_id) is None:
            logger.debug(f"Rejected rename of profile {profile_id}")
            return None

        return self._update(profile_id, {"name": new_name, "updated_at": utc_now()})

    def toggle_completion(self, profile_id: str, item_key: str) -> Optional[Profile]:
        """Complete an item if it is not completed, uncomplete it otherwise.

        The profile's whole completed set is replaced on the store, so two
        sessions toggling the same profile at once can lose an update.
        """
        profile = self.get(profile_id)
        if profile is None:
            logger.debug(f"Rejected toggle for unknown profile {profile_id}")
            return None

        completed = list(profile.completed)
        if item_key in completed:
            completed.remove(item_key)
        else:
            completed.append(item_key)

        return self._update(profile_id, {
            "name": profile.name,
            COMPLETED_FIELD: completed,
            "updated_at": utc_now(),
        })

    def delete(self, profile_id: str) -> bool:
        """Delete a profile, refusing to remove the last one.

        Returns:
            True if the profile was deleted
        """
        if len(self.profiles) <= 1 or self.get(profile_id) is None:
            logger.debug(f"Rejected delete of profile {profile_id}")
            return False

        try:
            self.store.delete(PROFILES_TABLE, profile_id)
        except StoreError as e:
            logger.error(f"Error deleting profile: {e}")
            return False

        if not self._reload() or self.get(profile_id) is not None:
            self.profiles = [p for p in self.profiles if p.id != profile_id]

        if self.selected_id == profile_id:
            self.selected_id = self.profiles[0].id if self.profiles else None
        return True

    def apply_snapshot(self, profiles: list[Profile]):
        """Reconcile with a freshly fetched collection.

        Keeps the selection when the profile still exists, otherwise falls
        back to the first profile.
        """
        if self.state is ConnectionState.FAILED:
            return

        self.profiles = list(profiles)
        if self.selected_id is None or self.get(self.selected_id) is None:
            self.selected_id = self.profiles[0].id if self.profiles else None
        self.state = ConnectionState.READY

    def subscribe(
        self,
        callback: Callable[[list[Profile]], None],
        guard: Optional[RefreshGuard] = None,
    ) -> ProfileSubscription:
        """Start reconciling on profile change notifications.

        Returns:
            Active subscription; call ``unsubscribe()`` to stop it
        """
        return ProfileSubscription(self, callback, guard=guard).start()

    def _fetch_profiles(self) -> list[Profile]:
        rows = self.store.select(PROFILES_TABLE, order_by="created_at")
        return [Profile.from_row(row) for row in rows]

    def _insert(self, name: str) -> Optional[Profile]:
        try:
            row = self.store.insert(PROFILES_TABLE, {"name": name, COMPLETED_FIELD: []})
        except StoreError as e:
            logger.error(f"Error creating profile {name!r}: {e}")
            return None

        logger.info(f"Profile created: {name}")
        return Profile.from_row(row)

    def _update(self, profile_id: str, changes: dict) -> Optional[Profile]:
        try:
            row = self.store.update(PROFILES_TABLE, profile_id, changes)
        except StoreError as e:
            logger.error(f"Error updating profile: {e}")
            return None

        updated = Profile.from_row(row)
        if not self._reload() or self.get(profile_id) is None:
            self._replace(updated)
        return updated

    def _reload(self) -> bool:
        try:
            self.profiles = self._fetch_profiles()
        except StoreError as e:
            logger.warning(f"Could not refresh profiles after write: {e}")
            return False
        return True

    def _replace(self, profile: Profile):
        for index, existing in enumerate(self.profiles):
            if existing.id == profile.id:
                self.profiles[index] = profile
                return
        self.profiles.append(profile)
