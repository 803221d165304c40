"""Subcommand modules for ctkit.

Provides register_commands() which uses deferred imports to keep
``ctkit --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from ctkit.commands.check import check
    from ctkit.commands.compile_cmd import compile_cmd
    from ctkit.commands.define import define
    from ctkit.commands.show import show
    from ctkit.commands.validate import validate

    cli.add_command(check)
    cli.add_command(compile_cmd)
    cli.add_command(define)
    cli.add_command(show)
    cli.add_command(validate)
