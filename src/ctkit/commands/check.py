"""Command: validate a content-type definition file."""

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
  ctkit check article.yaml
  ctkit --json check article.json
  ctkit -v check article.yaml""",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def check(app: AppContext, file: Path) -> None:
    """Check a definition file without storing it."""
    app.emit(app.offline_service().check_definition(load_payload(file)))
