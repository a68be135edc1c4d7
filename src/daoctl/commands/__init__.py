"""Subcommand modules for daoctl.

Provides register_commands() which uses deferred imports to keep
``daoctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from daoctl.commands.create import create
    from daoctl.commands.show import account, count, show
    from daoctl.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(create)
    cli.add_command(show)
    cli.add_command(account)
    cli.add_command(count)
