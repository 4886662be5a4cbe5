"""Subcommand modules for dtoinit.

Provides register_commands() which uses deferred imports to keep
``dtoinit --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from dtoinit.commands.describe import describe
    from dtoinit.commands.skeleton import skeleton, tree

    cli.add_command(skeleton)
    cli.add_command(tree)
    cli.add_command(describe)
