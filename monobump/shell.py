"""Terminal output helpers for the CLI.

The library modules never print; everything user-facing goes through here.
"""

from __future__ import annotations

import click


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate sections of CLI output.
    """
    click.echo(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")
