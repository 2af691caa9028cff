"""Display layer for CLI output."""

from .console import console
from .formatters import format_grid, format_progress
from .tables import (
    _render_build_links_table,
    _render_profiles_table,
    _render_progress_records_table,
    _render_tile_grid_table,
)

__all__ = [
    "console",
    "_render_build_links_table",
    "format_grid",
    "format_progress",
    "_render_profiles_table",
    "_render_progress_records_table",
    "_render_tile_grid_table",
]
