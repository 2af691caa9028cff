"""Shared output conventions for CLI commands."""

from rich.console import Console

# Shared console instance for consistent CLI output formatting
console = Console()

# Symbols
SYMBOL_SUCCESS = "✓"
SYMBOL_OPEN = "○"

# Message prefixes
PREFIX_SUCCESS = f"[green]{SYMBOL_SUCCESS}[/green]"
PREFIX_OPEN = f"[yellow]{SYMBOL_OPEN}[/yellow]"


def print_connection_test(store: str) -> None:
    """
    Print a connection testing message.

    Args:
        store: Name of the store being tested
    """
    console.print(f"[dim]Testing {store} connection…[/dim]")


def print_connection_success(store: str) -> None:
    """Print a connection success message."""
    console.print(f"{PREFIX_SUCCESS} {store} connection successful\n")


def normalize_service_url(url: str) -> str:
    """
    Normalize a store URL by adding https:// if missing.

    Accepts formats like:
    - abcd.supabase.co → https://abcd.supabase.co
    - http://localhost:54321 → http://localhost:54321 (unchanged)

    Args:
        url: URL or host[:port] string

    Returns:
        Normalized URL with protocol
    """
    if not url:
        return url

    if url.startswith(("http://", "https://")):
        return url

    return f"https://{url}"


__all__ = [
    "console",
    "SYMBOL_SUCCESS",
    "SYMBOL_OPEN",
    "PREFIX_SUCCESS",
    "PREFIX_OPEN",
    "print_connection_test",
    "print_connection_success",
    "normalize_service_url",
]
