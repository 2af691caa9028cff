"""Plugin loader for lazy command loading and aliases."""

import importlib
import os
import sys
from typing import Optional

import rich_click as click
from rich_click import RichGroup

from .exceptions import TrackerError


class LazyCommandGroup(click.Group):
    """Group that loads commands lazily from a directory."""

    def __init__(self, *args, commands_package: str = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.commands_package = commands_package or 'arenatrack.cli.commands'

    def list_commands(self, ctx):
        """
        List all available commands by discovering Python files and registered commands.

        Returns:
            List of command names
        """
        rv = []

        try:
            package = importlib.import_module(self.commands_package)
            commands_dir = os.path.dirname(package.__file__)

            for filename in os.listdir(commands_dir):
                if filename.endswith('.py') and not filename.startswith('__'):
                    cmd_name = filename[:-3]
                    if cmd_name.endswith('_cmd'):
                        cmd_name = cmd_name[:-4]
                    if cmd_name != 'common':
                        rv.append(cmd_name)

        except (ImportError, AttributeError, FileNotFoundError):
            pass

        # Add manually registered commands (like groups)
        if hasattr(self, 'commands') and self.commands:
            for name in self.commands.keys():
                if name not in rv:
                    rv.append(name)

        rv.sort()
        return rv

    def get_command(self, ctx, name):
        """
        Import and return a command by name.

        Args:
            ctx: Click context
            name: Command name

        Returns:
            Click command or None if not found
        """
        if hasattr(self, 'commands') and name in self.commands:
            return self.commands[name]

        possible_names = [name, f"{name}_cmd", f"cmd_{name}"]

        for module_name in possible_names:
            try:
                mod = importlib.import_module(f'{self.commands_package}.{module_name}')
            except ImportError:
                continue
            cmd = getattr(mod, 'cli', None) or getattr(mod, name, None)
            if isinstance(cmd, click.Command):
                return cmd

        return None


class AliasedGroup(click.Group):
    """Group that supports command aliases."""

    def __init__(self, *args, aliases: Optional[dict] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.aliases = aliases or {
            'ls': 'grid',
            'st': 'status',
            't': 'toggle',
            'w': 'watch',
        }

    def get_command(self, ctx, cmd_name):
        resolved_name = self.aliases.get(cmd_name, cmd_name)
        return super().get_command(ctx, resolved_name)


class TrackerGroup(LazyCommandGroup, AliasedGroup, RichGroup):
    """
    Combined group with lazy loading and alias support.

    TrackerError raised by any subcommand is printed and turned into exit
    status 1.
    """

    def __init__(self, *args, commands_package: str = None, aliases: Optional[dict] = None, **kwargs):
        LazyCommandGroup.__init__(self, *args, commands_package=commands_package, **kwargs)
        AliasedGroup.__init__(self, *args, aliases=aliases, **kwargs)

    def get_command(self, ctx, cmd_name):
        """Get command with alias resolution and lazy loading."""
        resolved_name = self.aliases.get(cmd_name, cmd_name)
        return LazyCommandGroup.get_command(self, ctx, resolved_name)

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except TrackerError as e:
            from ..display.console import console

            console.print(f"[red]Error:[/red] {e}")
            sys.exit(1)
