"""Subcommand modules for roomdir, the CLI transport adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from roomdir.commands.alias import alias
    from roomdir.commands.room import room

    cli.add_command(alias)
    cli.add_command(room)
