"""Table builders for CLI output.

- Functions named _render_*_table() for consistency
- Header style: "bold cyan"
- Primary column (first) styled as "bold"
"""

from rich.table import Table

MARK_COMPLETED = "[green]●[/green]"
MARK_OPEN = "[dim]○[/dim]"


def _short_date(value):
    if not value:
        return "-"
    return value.split("T")[0] if "T" in value else value


def _render_profiles_table(profiles, selected_id=None, total=None):
    """
    Create table for profiles.

    Args:
        profiles: List of Profile objects
        selected_id: Id of the selected profile, marked with an arrow
        total: Catalog size for the progress column (optional)

    Returns:
        Rich Table object
    """
    table = Table(title="Profiles", header_style="bold cyan")
    table.add_column("", width=2)
    table.add_column("Name", style="bold")
    table.add_column("Completed", justify="right")
    table.add_column("Created")
    table.add_column("ID", style="dim")

    for profile in profiles:
        completed = str(len(profile.completed))
        if total:
            completed = f"{completed} / {total}"

        table.add_row(
            "[cyan]→[/cyan]" if profile.id == selected_id else "",
            profile.name,
            completed,
            _short_date(profile.created_at),
            profile.id,
        )

    return table


def _render_tile_grid_table(tiles, completed, columns=5):
    """
    Create a borderless grid of champion tiles.

    Completed champions are dimmed with a filled marker.

    Args:
        tiles: Ordered list of Tile objects
        completed: Collection of completed champion names
        columns: Tiles per row

    Returns:
        Rich Table object
    """
    completed = set(completed)
    columns = max(1, columns)

    table = Table(show_header=False, box=None, padding=(0, 2), expand=False)
    for _ in range(columns):
        table.add_column(no_wrap=True)

    cells = []
    for tile in tiles:
        if tile.name in completed:
            cells.append(f"{MARK_COMPLETED} [dim strike]{tile.name}[/dim strike]")
        else:
            cells.append(f"{MARK_OPEN} [bold]{tile.name}[/bold]")

    for start in range(0, len(cells), columns):
        row = cells[start:start + columns]
        row += [""] * (columns - len(row))
        table.add_row(*row)

    return table


def _render_progress_records_table(records):
    """
    Create table for per-champion progress records.

    Args:
        records: List of ChampionProgress objects

    Returns:
        Rich Table object
    """
    table = Table(title="Champion Progress Records", header_style="bold cyan")
    table.add_column("Champion", style="bold")
    table.add_column("Status")
    table.add_column("Updated")

    for record in sorted(records, key=lambda r: r.champion_name.casefold()):
        status = "[green]COMPLETED[/green]" if record.is_completed else "[yellow]OPEN[/yellow]"
        table.add_row(
            record.champion_name,
            status,
            _short_date(record.updated_at or record.created_at),
        )

    return table


def _render_build_links_table(champion, links):
    """
    Create table of Arena build guide links for one champion.

    Args:
        champion: Champion name used as the title
        links: Mapping of site name to URL

    Returns:
        Rich Table object
    """
    table = Table(title=f"{champion} Arena builds", header_style="bold cyan")
    table.add_column("Site", style="bold")
    table.add_column("URL", overflow="fold")

    for site, url in links.items():
        table.add_row(site, f"[link={url}]{url}[/link]")

    return table
