"""Profile command group - manage tracking profiles."""

import rich_click as click

from ..commands.common import PREFIX_SUCCESS
from ..core import TrackerError, trigger_hook, with_controller
from ..display import _render_profiles_table, console
from ..logic import resolve_profile


@click.group('profile')
def profile_group():
    """Manage tracking profiles."""
    pass


@profile_group.command('list')
@with_controller
def list_profiles(controller):
    """List all profiles."""
    console.print(_render_profiles_table(controller.profiles, controller.selected_id))


@profile_group.command('add')
@click.argument('name')
@with_controller
def add_profile(controller, name):
    """Create a profile called NAME."""
    if not name.strip():
        raise TrackerError("Profile name cannot be empty")

    profile = controller.create(name)
    if profile is None:
        raise TrackerError(f"Failed to create profile {name.strip()!r}")

    trigger_hook('profile_created', profile=profile.name, id=profile.id)
    console.print(f"{PREFIX_SUCCESS} Created profile [bold]{profile.name}[/bold] ({profile.id})")


@profile_group.command('rename')
@click.argument('profile_ref')
@click.argument('new_name')
@with_controller
def rename_profile(controller, profile_ref, new_name):
    """Rename profile PROFILE_REF (name or id) to NEW_NAME."""
    profile = resolve_profile(controller, profile_ref)
    if not new_name.strip():
        raise TrackerError("Profile name cannot be empty")

    updated = controller.rename(profile.id, new_name)
    if updated is None:
        raise TrackerError(f"Failed to rename profile {profile.name!r}")

    console.print(f"{PREFIX_SUCCESS} Renamed [bold]{profile.name}[/bold] → [bold]{updated.name}[/bold]")


@profile_group.command('delete')
@click.argument('profile_ref')
@click.option('--yes', '-y', is_flag=True, help='Skip the confirmation prompt')
@with_controller
def delete_profile(controller, profile_ref, yes):
    """Delete profile PROFILE_REF (name or id). The last profile cannot be deleted."""
    profile = resolve_profile(controller, profile_ref)

    if len(controller.profiles) <= 1:
        raise TrackerError("Cannot delete the last remaining profile")

    if not yes and not click.confirm(
        f"Delete profile {profile.name}? This action cannot be undone.", default=False
    ):
        console.print("[yellow]Cancelled.[/yellow]")
        return

    if not controller.delete(profile.id):
        raise TrackerError(f"Failed to delete profile {profile.name!r}")

    trigger_hook('profile_deleted', profile=profile.name, id=profile.id)
    console.print(f"{PREFIX_SUCCESS} Deleted profile [bold]{profile.name}[/bold]")
    if controller.selected:
        console.print(f"  [dim]Selected profile is now {controller.selected.name}[/dim]")


# Export for lazy loading
cli = profile_group
