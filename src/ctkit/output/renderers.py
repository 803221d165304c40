"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from ctkit.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from ctkit.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def iter_error_rows(detail: Any, prefix: str = "") -> Iterator[tuple[str, str]]:
    """Flatten a nested error mapping into ``(path, message)`` rows.

    ``{"fields": {"title": {"minLength": ["..."]}}}`` yields
    ``("fields.title.minLength", "...")``.
    """
    if isinstance(detail, dict):
        for key, value in detail.items():
            yield from iter_error_rows(value, f"{prefix}.{key}" if prefix else str(key))
    elif isinstance(detail, list):
        for item in detail:
            yield from iter_error_rows(item, prefix)
    else:
        yield prefix, str(detail)


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="ct.ok")
    op = Text(f"  {result.op}", style="ct.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ct.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="ct.id")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="ct.error")
    op = Text(f"  {result.op}", style="ct.op")
    console.print(label, op, Text(" - "), Text(msg))
    if err is None:
        return
    if verbose:
        _field(console, "code", err.code)

    rows = list(iter_error_rows(err.detail))
    if not rows:
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Where", style="ct.field", no_wrap=True)
    table.add_column("Problem")
    for path, message in rows:
        table.add_row(Text(path), Text(message))
    console.print(table)


# ── Operation renderers ───────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "name", data.get("name", ""))
    _field(console, "fields", data.get("field_count", 0))
    if verbose:
        for name in data.get("fields", []):
            console.print(Text(f"    - {name}", style="ct.field"))


def _render_compile(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    document = result.data.get("document")
    if document is not None:
        # Raw JSON so the output can be piped into a file.
        text = json.dumps(document, indent=2, ensure_ascii=False)
        console.print(text, markup=False, emoji=False, soft_wrap=True)
        return
    _render_generic(result, console, verbose=verbose)


def _render_definition(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    definition = result.data.get("definition", {})
    for key in ("id", "name", "projectId", "userId"):
        if key in definition:
            _field(console, key, definition[key])
    if verbose and definition.get("description"):
        _field(console, "description", definition["description"])

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="ct.field", no_wrap=True)
    table.add_column("Kind", style="ct.kind")
    table.add_column("Label")
    table.add_column("Required")
    table.add_column("Disabled")
    for field in definition.get("fields", []):
        table.add_row(
            Text(str(field.get("name", ""))),
            Text(str(field.get("fieldType", ""))),
            Text(str(field.get("label", ""))),
            "yes" if field.get("required") else "no",
            "yes" if field.get("disabled") else "no",
        )
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS = {
    "check_definition": _render_check,
    "compile_definition": _render_compile,
    "get_content_type": _render_definition,
}
