"""Links command - Arena build guides for a champion."""

import rich_click as click

from ...catalog import build_links
from ..core import with_catalog
from ..display import _render_build_links_table, console
from ..logic import resolve_champion


@click.command()
@click.argument("champion")
@with_catalog
def links(catalog, champion):
    """Show u.gg, blitz and metasrc Arena build links for CHAMPION."""
    tile = resolve_champion(catalog, champion)
    console.print(_render_build_links_table(tile.name, build_links(tile.name)))


# Export for lazy loading
cli = links
