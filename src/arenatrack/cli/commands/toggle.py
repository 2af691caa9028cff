"""Toggle command - mark a champion complete or incomplete."""

import rich_click as click

from ...models import ConfirmAction
from ...sync import ProgressTracker
from ...view import cancel_toggle, request_toggle
from ..core import with_catalog, with_config, with_controller
from ..display import console
from ..logic import build_view_state, commit_toggle, resolve_champion, resolve_profile
from .common import PREFIX_OPEN, PREFIX_SUCCESS


@click.command()
@click.argument("champion")
@click.option(
    "--profile",
    "-p",
    "profile_ref",
    default=None,
    help="Profile name or id (defaults to the first profile)",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Skip the confirmation prompt",
)
@with_catalog
@with_controller
@with_config
def toggle(config, controller, catalog, champion, profile_ref, yes):
    """Mark CHAMPION as completed, or remove it from completed champions."""
    profile = resolve_profile(controller, profile_ref)
    tile = resolve_champion(catalog, champion)
    state = build_view_state(profile)

    pending = request_toggle(state, tile.name, profile.completed)
    if pending.action is ConfirmAction.ADD:
        question = f"Mark {tile.name} as completed for {profile.name}?"
    else:
        question = f"Remove {tile.name} from {profile.name}'s completed champions?"

    if not yes and not click.confirm(question, default=True):
        cancel_toggle(state)
        console.print("[yellow]Cancelled.[/yellow]")
        return

    progress = ProgressTracker(controller.store) if config.get("sync.progress_records", False) else None
    updated = commit_toggle(
        controller,
        state,
        progress=progress,
        bell=config.get("celebration.bell", True),
    )

    if pending.action is ConfirmAction.ADD:
        console.print(f"{PREFIX_SUCCESS} {tile.name} completed! ({len(updated.completed)} / {len(catalog)})")
    else:
        console.print(f"{PREFIX_OPEN} {tile.name} marked incomplete ({len(updated.completed)} / {len(catalog)})")


# Export for lazy loading
cli = toggle
