"""Command: print a stored content-type definition."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ctkit.commands._base import CtkitCommand

if TYPE_CHECKING:
    from ctkit.commands._context import AppContext


@click.command(
    cls=CtkitCommand,
    examples="""\
  ctkit show 3
  ctkit --json show 3""",
)
@click.argument("type_id", type=int)
@click.pass_obj
def show(app: AppContext, type_id: int) -> None:
    """Show the stored definition with id TYPE_ID."""
    app.emit(app.service.get_definition(type_id))
