"""Clear command - wipe the local fallback database."""

import rich_click as click

from ..core import with_storage
from ..display import console
from .common import PREFIX_SUCCESS


@click.command()
@click.confirmation_option(prompt="Are you sure you want to delete all locally stored profiles?")
@with_storage
def clear(storage):
    """Clear the local fallback database."""
    storage.clear()
    console.print(f"{PREFIX_SUCCESS} Local data cleared")


# Export for lazy loading
cli = clear
