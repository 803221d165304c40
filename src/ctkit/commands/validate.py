"""Command: validate a content record against a stored definition."""

from __future__ import annotations

import asyncio
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
  ctkit validate post.yaml --type-id 3
  ctkit validate post.json --type-id 3 --project-id 1
  ctkit validate post.yaml --type-id 3 --store""",
)
@click.argument("record", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--type-id", type=int, required=True, help="Stored content type id.")
@click.option(
    "--project-id",
    type=int,
    default=None,
    help="Project to resolve references in (defaults to the content type's project).",
)
@click.option("--store", is_flag=True, help="Save the record as an entry when it is valid.")
@click.pass_obj
def validate(
    app: AppContext, record: Path, type_id: int, project_id: int | None, store: bool
) -> None:
    """Validate RECORD against content type --type-id."""
    payload = load_payload(record)
    service = app.service
    if store:
        result = asyncio.run(service.create_entry(type_id, payload, project_id=project_id))
    else:
        result = asyncio.run(service.validate_entry(type_id, payload, project_id=project_id))
    app.emit(result)
