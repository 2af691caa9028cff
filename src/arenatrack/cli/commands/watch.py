"""Watch command - live champion grid synchronized across clients."""

import rich_click as click

from ..core import with_catalog, with_controller
from ..logic import build_view_state, resolve_profile, run_watch_mode


@click.command()
@click.option(
    "--profile",
    "-p",
    "profile_ref",
    default=None,
    help="Profile name or id (defaults to the first profile)",
)
@click.option("--search", "-s", default="", help="Only show champions whose name contains this text")
@click.option(
    "--sort",
    type=click.Choice(["alphabetical", "completion"]),
    default="completion",
    show_default=True,
    help="Sort champions by name or by completion",
)
@click.option("--desc", "descending", is_flag=True, help="Reverse the order")
@click.option("--columns", default=5, show_default=True, type=click.IntRange(1, 12), help="Champions per row")
@click.option(
    "--duration",
    type=float,
    default=None,
    hidden=True,
    help="Stop after this many seconds",
)
@with_catalog
@with_controller
def watch(controller, catalog, profile_ref, search, sort, descending, columns, duration):
    """Show a profile's grid and redraw it whenever any client changes it."""
    profile = resolve_profile(controller, profile_ref)
    state = build_view_state(profile, search, sort, descending)
    run_watch_mode(controller, catalog, state, columns=columns, max_seconds=duration)


# Export for lazy loading
cli = watch
