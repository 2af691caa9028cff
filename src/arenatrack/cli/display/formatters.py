"""Output formatters for CLI."""

from rich.progress_bar import ProgressBar
from rich.table import Table

from ...models import SortMode
from ...view import progress_summary, render_state
from .console import console
from .tables import _render_tile_grid_table


def format_progress(summary):
    """
    Build the progress line: counts plus a bar.

    Args:
        summary: ProgressSummary

    Returns:
        Rich Table holding the label and bar on one row
    """
    line = Table.grid(padding=(0, 2))
    line.add_column()
    line.add_column(width=40)
    line.add_row(
        f"[bold]Progress[/bold] {summary.completed} / {summary.total} champions "
        f"[dim]({summary.percent:.0f}%)[/dim]",
        ProgressBar(total=max(summary.total, 1), completed=summary.completed, width=40),
    )
    return line


def format_grid(profile, catalog, state, columns=5):
    """
    Render a profile's champion grid with its progress bar.

    Args:
        profile: Profile being displayed
        catalog: All catalog tiles
        state: ViewState with search and sort settings
        columns: Tiles per row
    """
    summary = progress_summary(catalog, profile.completed)
    tiles = render_state(catalog, profile.completed, state)

    mode = "completion" if state.sort_mode is SortMode.COMPLETION else "alphabetical"
    console.print(f"[bold cyan]{profile.name}[/bold cyan] [dim]· sorted by {mode}, {state.sort_direction.value}[/dim]")
    console.print(format_progress(summary))

    if state.search_text:
        console.print(f"[dim]Search:[/dim] {state.search_text!r} → {len(tiles)} match(es)")

    console.print()
    if tiles:
        console.print(_render_tile_grid_table(tiles, profile.completed, columns=columns))
    else:
        console.print("[yellow]No champions match your search.[/yellow]")

    if summary.missing:
        console.print(f"\n[dim]Not in catalog: {', '.join(summary.missing)}[/dim]")
