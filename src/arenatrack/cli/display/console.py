"""Shared console instance for rich output.

Re-exports the console from commands.common.
"""

from ..commands.common import console

__all__ = ["console"]
