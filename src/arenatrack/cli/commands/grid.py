"""Grid command - show a profile's champion grid."""

import rich_click as click

from ..core import with_catalog, with_controller
from ..display import format_grid
from ..logic import build_view_state, resolve_profile


@click.command()
@click.option(
    "--profile",
    "-p",
    "profile_ref",
    default=None,
    help="Profile name or id (defaults to the first profile)",
)
@click.option(
    "--search",
    "-s",
    default="",
    help="Only show champions whose name contains this text",
)
@click.option(
    "--sort",
    type=click.Choice(["alphabetical", "completion"]),
    default="alphabetical",
    show_default=True,
    help="Sort champions by name or by completion",
)
@click.option(
    "--desc",
    "descending",
    is_flag=True,
    help="Reverse the order (completion sort: open champions first)",
)
@click.option(
    "--columns",
    default=5,
    show_default=True,
    type=click.IntRange(1, 12),
    help="Champions per row",
)
@with_catalog
@with_controller
def grid(controller, catalog, profile_ref, search, sort, descending, columns):
    """Show the champion grid for a profile."""
    profile = resolve_profile(controller, profile_ref)
    state = build_view_state(profile, search, sort, descending)
    format_grid(profile, catalog, state, columns=columns)


# Export for lazy loading
cli = grid
