"""
Shared Rich Console for diagnostics.

Standard output belongs to the rendered prompt, which the shell captures
verbatim, so every warning and error Contrail prints goes through this one
console on standard error instead. Tests patch ``console`` here to capture
what would have been shown.

Usage:
    from .console import console
    console.print("[yellow]Warning: ...[/yellow]")
"""

import os

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)


def debug(message: str) -> None:
    """Print a dim diagnostic line when CONTRAIL_DEBUG is set.

    Used for failures that are deliberately swallowed (a git query that
    errored, for example) so they can still be investigated.
    """
    if os.getenv("CONTRAIL_DEBUG", "").strip().lower() in ("true", "1", "yes", "on"):
        console.print(f"[dim]contrail: {escape(message)}[/dim]", highlight=False)
