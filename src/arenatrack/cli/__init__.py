"""Arenatrack CLI - track Arena first-place champions per profile."""

import os
import sys

# Configure rich-click BEFORE importing click
import rich_click as click

# Enable rich-click formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

from .. import __version__
from ..config import ConfigError, setup_logging
from .core import TrackerContext, TrackerGroup, get_hook_manager
from .display.console import console


@click.group(
    cls=TrackerGroup,
    commands_package='arenatrack.cli.commands',
    context_settings=dict(
        auto_envvar_prefix='ARENATRACK',
        help_option_names=['-h', '--help'],
    ),
)
@click.version_option(version=__version__, help='Show the version and exit.')
@click.option(
    '-c',
    '--config',
    default=None,
    help='Path to config file (or set ARENATRACK_CONFIG)',
)
@click.option(
    '--db',
    default=None,
    help='Path to local fallback database (or set ARENATRACK_DB)',
)
@click.pass_context
def cli(ctx, config, db):
    """Track Arena first-place champions for each profile."""

    ctx.ensure_object(dict)

    # Resolve config path: CLI > env var > default
    config_path = config or os.environ.get('ARENATRACK_CONFIG', 'config.yaml')

    try:
        tracker_ctx = TrackerContext.create(config_path, db or os.environ.get('ARENATRACK_DB'))
        ctx.obj = tracker_ctx

        setup_logging(tracker_ctx.config)

        # Load hooks from config
        hook_manager = get_hook_manager()
        hook_manager.load_from_config(tracker_ctx.config)

    except ConfigError as e:
        console.print(f"[red]Configuration Error:[/red] {e}")
        console.print("\n[cyan]Tip:[/cyan] Copy config.example.yaml to config.yaml and edit it.")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


# Import and register command groups
from .groups import profile  # noqa: E402

cli.add_command(profile.profile_group)


if __name__ == '__main__':
    cli()
