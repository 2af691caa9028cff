"""Sorting, filtering and the confirm-to-toggle interaction for the tile grid."""

from typing import Callable, Collection, Iterable, Optional

from .models import (
    ConfirmAction,
    PendingConfirmation,
    ProgressSummary,
    SortDirection,
    SortMode,
    Tile,
    ViewState,
)


def _name_key(tile: Tile):
    return (tile.name.casefold(), tile.name)


def filter_tiles(items: Iterable[Tile], search_text: str = "") -> list[Tile]:
    """Case-insensitive substring match on the tile name."""
    needle = (search_text or "").casefold()
    return [tile for tile in items if needle in tile.name.casefold()]


def view(
    items: Iterable[Tile],
    completed: Collection[str],
    search_text: str = "",
    sort_mode: SortMode = SortMode.ALPHABETICAL,
    sort_direction: SortDirection = SortDirection.ASCENDING,
) -> list[Tile]:
    """Produce the ordered, filtered tile list.

    In completion mode the direction only decides which partition comes
    first (ascending puts completed tiles first); inside each partition
    tiles are always in ascending name order.

    Args:
        items: Catalog tiles, left untouched
        completed: Completed tile names
        search_text: Filter text, empty matches everything
        sort_mode: Alphabetical or completion ordering
        sort_direction: Ascending or descending

    Returns:
        New list of tiles
    """
    completed = set(completed)
    tiles = filter_tiles(items, search_text)

    if sort_mode is SortMode.COMPLETION:
        completed_first = sort_direction is SortDirection.ASCENDING

        def partition_key(tile):
            is_completed = tile.name in completed
            return (0 if is_completed == completed_first else 1, _name_key(tile))

        return sorted(tiles, key=partition_key)

    return sorted(tiles, key=_name_key, reverse=sort_direction is SortDirection.DESCENDING)


def render_state(items: Iterable[Tile], completed: Collection[str], state: ViewState) -> list[Tile]:
    """Apply a session's view settings."""
    return view(items, completed, state.search_text, state.sort_mode, state.sort_direction)


def progress_summary(items: Iterable[Tile], completed: Collection[str]) -> ProgressSummary:
    """Count completed tiles against the catalog.

    Completed keys with no matching tile are reported in ``missing`` rather
    than counted.
    """
    names = {tile.name for tile in items}
    done = [key for key in completed if key in names]
    missing = sorted(key for key in completed if key not in names)
    return ProgressSummary(completed=len(done), total=len(names), missing=missing)


def request_toggle(state: ViewState, item: str, completed: Collection[str]) -> PendingConfirmation:
    """Ask for confirmation before toggling ``item``."""
    action = ConfirmAction.REMOVE if item in completed else ConfirmAction.ADD
    state.pending = PendingConfirmation(item=item, action=action)
    return state.pending


def confirm_toggle(
    state: ViewState,
    on_toggle: Callable[[str], object],
    on_celebrate: Optional[Callable[[str], None]] = None,
):
    """Commit the pending toggle.

    Args:
        state: Session state holding the pending confirmation
        on_toggle: Performs the toggle for an item name
        on_celebrate: Called with the item name only when it was marked
            complete and on_toggle did not report failure by returning None

    Returns:
        Whatever ``on_toggle`` returned, or None if nothing was pending
    """
    pending = state.pending
    if pending is None:
        return None

    state.pending = None
    result = on_toggle(pending.item)
    if pending.action is ConfirmAction.ADD and on_celebrate is not None and result is not None:
        on_celebrate(pending.item)
    return result


def cancel_toggle(state: ViewState):
    """Discard the pending toggle."""
    state.pending = None
