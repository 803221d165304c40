"""Locate ``ctkit.toml`` for a project.

``CTKIT_CONFIG`` names the file explicitly; otherwise the directory tree
is searched upwards from the working directory, the way git finds ``.git``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "ctkit.toml"
CONFIG_ENV_VAR = "CTKIT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Path of the governing ``ctkit.toml``, or None.

    A ``CTKIT_CONFIG`` pointing at a missing file yields None rather than
    falling back to the search.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    start_dir = (start or Path.cwd()).resolve()
    for directory in (start_dir, *start_dir.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
