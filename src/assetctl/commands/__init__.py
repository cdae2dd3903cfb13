"""Subcommand modules for assetctl.

Provides register_commands() which uses deferred imports to keep
``assetctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every command on the root CLI group.

    One command per asset category, plus ``clean``, ``build`` and ``watch``.
    """
    from assetctl.commands.build import CATEGORY_COMMANDS, build, clean
    from assetctl.commands.watch import watch

    for command in CATEGORY_COMMANDS:
        cli.add_command(command)
    cli.add_command(clean)
    cli.add_command(build)
    cli.add_command(watch)
