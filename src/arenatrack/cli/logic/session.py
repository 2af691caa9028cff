"""Session helpers shared by the grid, toggle and watch commands."""

import logging
from typing import Optional

from ...models import SortDirection, SortMode, ViewState
from ...view import confirm_toggle
from ..core.exceptions import TrackerError
from ..core.hooks import trigger_hook
from ..display.console import console

logger = logging.getLogger(__name__)


def resolve_profile(controller, ref: Optional[str] = None):
    """
    Pick the profile a command acts on and make it the selection.

    Args:
        controller: Loaded SyncController
        ref: Profile id or name; None keeps the current selection

    Returns:
        Profile

    Raises:
        TrackerError: If no matching profile exists
    """
    profile = controller.find(ref) if ref else controller.selected
    if profile is None:
        raise TrackerError(f"Profile not found: {ref}" if ref else "No profiles available")

    controller.select(profile.id)
    return profile


def resolve_champion(catalog, name: str):
    """
    Find a champion tile by case-insensitive name.

    Raises:
        TrackerError: If the champion is not in the catalog
    """
    wanted = name.strip().casefold()
    for tile in catalog:
        if tile.name.casefold() == wanted:
            return tile
    raise TrackerError(f"Champion not found in catalog: {name}")


def build_view_state(profile, search="", sort="alphabetical", descending=False) -> ViewState:
    """Build the session view state from command options."""
    return ViewState(
        profile_id=profile.id,
        search_text=search or "",
        sort_mode=SortMode(sort),
        sort_direction=SortDirection.DESCENDING if descending else SortDirection.ASCENDING,
    )


def celebrate(champion: str, profile_name: str, bell: bool = True):
    """Celebrate a newly completed champion: hooks (sound) and terminal bell."""
    trigger_hook("champion_completed", champion=champion, profile=profile_name)
    if bell:
        console.bell()


def commit_toggle(controller, state: ViewState, progress=None, bell: bool = True):
    """
    Confirm the pending toggle in ``state``.

    Args:
        controller: SyncController owning the profile
        state: ViewState with a pending confirmation
        progress: Optional ProgressTracker mirroring the change as a record
        bell: Ring the terminal bell when a champion is completed

    Returns:
        Updated Profile, or None if nothing was pending or the store failed
    """
    profile = controller.get(state.profile_id)
    if profile is None:
        raise TrackerError("Selected profile no longer exists")

    def toggle(item):
        updated = controller.toggle_completion(profile.id, item)
        if updated is not None and progress is not None:
            if not progress.set_completed(profile.id, item, updated.is_completed(item)):
                logger.warning(f"Progress record for {item} was not updated")
        return updated

    def on_celebrate(item):
        celebrate(item, profile.name, bell=bell)

    pending = state.pending
    updated = confirm_toggle(state, toggle, on_celebrate)
    if pending is not None and updated is None:
        raise TrackerError(f"Failed to update {pending.item} for {profile.name}")
    return updated
