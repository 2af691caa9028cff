"""Watch mode: re-render the grid whenever another client changes a profile."""

import logging
import signal
import time
from datetime import datetime

from ..display.console import console
from ..display.formatters import format_grid

logger = logging.getLogger(__name__)


def run_watch_mode(controller, catalog, state, columns=5, max_seconds=None):
    """
    Render the selected profile and keep it in sync until interrupted.

    Args:
        controller: Loaded SyncController
        catalog: Catalog tiles
        state: ViewState for the watched profile
        columns: Tiles per row
        max_seconds: Stop after this many seconds (None runs until Ctrl+C)

    Returns:
        Number of change notifications that triggered a re-render
    """
    renders = 0
    shutdown_requested = False

    def signal_handler(_sig, _frame):
        nonlocal shutdown_requested
        shutdown_requested = True
        console.print("\n[yellow]Shutdown requested, stopping...[/yellow]")

    def render():
        profile = controller.get(state.profile_id)
        if profile is None:
            profile = controller.selected
            if profile is None:
                console.print("[red]No profiles left to watch.[/red]")
                return
            console.print(f"[yellow]Watched profile was removed, switching to {profile.name}[/yellow]")
            state.profile_id = profile.id

        console.clear()
        format_grid(profile, catalog, state, columns=columns)
        console.print(f"\n[dim]Watching for changes... (Ctrl+C to stop)[/dim]")

    def on_profiles(profiles):
        nonlocal renders
        renders += 1
        timestamp = datetime.now().strftime("%H:%M:%S")
        logger.info(f"[{timestamp}] Real-time update received: {len(profiles)} profiles")
        render()

    previous_int = signal.signal(signal.SIGINT, signal_handler)
    previous_term = signal.signal(signal.SIGTERM, signal_handler)

    render()
    subscription = controller.subscribe(on_profiles)
    started = time.monotonic()

    try:
        while not shutdown_requested:
            if max_seconds is not None and time.monotonic() - started >= max_seconds:
                break
            time.sleep(0.5)
    finally:
        logger.debug("Cleaning up real-time subscription")
        subscription.unsubscribe()
        signal.signal(signal.SIGINT, previous_int)
        signal.signal(signal.SIGTERM, previous_term)

    console.print("[green]Stopped watching.[/green]")
    return renders
