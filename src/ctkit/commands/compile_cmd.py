"""Command: compile a definition file into its schema document."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from ctkit.commands._base import CtkitCommand
from ctkit.commands._payload import load_payload

if TYPE_CHECKING:
    from ctkit.commands._context import AppContext


@click.command(
    "compile",
    cls=CtkitCommand,
    examples="""\
  ctkit compile article.yaml
  ctkit compile article.yaml -o article.schema.json""",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the schema document to this file instead of stdout.",
)
@click.pass_obj
def compile_cmd(app: AppContext, file: Path, output: Path | None) -> None:
    """Compile a definition file and print its schema document."""
    result = app.offline_service().compile_definition(load_payload(file))
    if result.ok and output is not None:
        document = result.data["document"]
        output.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", "utf-8")
        result = result.model_copy(
            update={"data": {"output": str(output), "name": document["instance"]["name"]}}
        )
    app.emit(result)
