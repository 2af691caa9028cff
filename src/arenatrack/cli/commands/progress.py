"""Progress command - show per-champion progress records."""

import rich_click as click

from ...sync import ProgressTracker
from ..core import with_controller
from ..display import _render_progress_records_table, console
from ..logic import resolve_profile


@click.command()
@click.option(
    "--profile",
    "-p",
    "profile_ref",
    default=None,
    help="Profile name or id (defaults to the first profile)",
)
@with_controller
def progress(controller, profile_ref):
    """Show the per-champion progress records of a profile.

    Records are written when sync.progress_records is enabled in config.yaml.
    """
    profile = resolve_profile(controller, profile_ref)
    records = ProgressTracker(controller.store).get(profile.id)

    if not records:
        console.print(f"[yellow]No progress records for {profile.name}.[/yellow]")
        return

    console.print(_render_progress_records_table(records))


# Export for lazy loading
cli = progress
