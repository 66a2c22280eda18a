"""Central UI handler for codeqlkit.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from codeqlkit.ui import console, print_success

    console.print("[path]/tmp/db[/path]")
    print_success("Database created")
"""

import sys

from rich.console import Console
from rich.theme import Theme

CODEQLKIT_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "cmd": "bold magenta",
    "path": "bold cyan",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=CODEQLKIT_THEME,
    force_terminal=sys.stdout.isatty()
)


def print_warning(msg: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[warning]WARNING:[/warning] {msg}")


def print_success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[success]OK:[/success] {msg}")
