"""Read definition and record files given on the command line."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError


def load_payload(path: Path) -> dict[str, Any]:
    """Load a JSON or YAML object from *path*.

    ``.json`` files are parsed as JSON; anything else goes through the
    YAML loader (which also accepts JSON).

    Raises:
        click.BadParameter: The file is unreadable, malformed, or does not
            hold an object.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeError) as exc:
        raise click.BadParameter(f"cannot read {path}: {exc}") from exc

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = YAML(typ="safe").load(text)
    except (json.JSONDecodeError, YAMLError) as exc:
        raise click.BadParameter(f"{path} is not valid JSON or YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must contain an object at the top level")
    return data
