"""Status command - check the store connection and show profile info."""

import rich_click as click

from ..core import with_config, with_controller
from ..display import console
from .common import PREFIX_SUCCESS


@click.command()
@with_controller
@with_config
def status(config, controller):
    """Check store connection and show profile info."""
    backend = controller.store.name
    if backend == "remote":
        console.print(f"{PREFIX_SUCCESS} Store: Connected ({config.get('store.url')})")
    else:
        console.print(f"{PREFIX_SUCCESS} Store: Local fallback database")

    console.print(f"  State: {controller.state.value}")
    console.print(f"  Profiles: {len(controller.profiles)}")

    selected = controller.selected
    if selected:
        console.print(f"  Selected: [bold]{selected.name}[/bold] ({len(selected.completed)} completed)")


# Export for lazy loading
cli = status
