"""Subcommand modules for recordcheck.

register_commands() imports lazily so ``recordcheck --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups and standalone commands on the root group."""
    # --- Groups ---
    from recordcheck.commands.generate import generate
    from recordcheck.commands.schema import schema

    cli.add_command(schema)
    cli.add_command(generate)

    # --- Standalone commands ---
    from recordcheck.commands.lifecycle import lifecycle
    from recordcheck.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(lifecycle)
