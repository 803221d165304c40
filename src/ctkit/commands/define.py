"""Command: validate, compile and store a content-type definition."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from ctkit.commands._base import CtkitCommand
from ctkit.commands._payload import load_payload

if TYPE_CHECKING:
    from ctkit.commands._context import AppContext


@click.command(
    cls=CtkitCommand,
    examples="""\
  ctkit define article.yaml
  ctkit --json define article.json
  ctkit -c ./ctkit.toml define article.yaml""",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def define(app: AppContext, file: Path) -> None:
    """Store a definition and print its new id."""
    app.emit(app.service.define(load_payload(file)))
