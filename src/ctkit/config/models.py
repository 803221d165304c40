"""Pydantic configuration models with code-baked defaults.

Defaults live here; ctkit.toml only holds overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    # Relative paths resolve against the project root.
    path: str = ".ctkit/ctkit.db"
    echo: bool = False


class ValidationConfig(BaseModel):
    """[validation] section."""

    model_config = {"frozen": True}

    url_schemes: tuple[str, ...] = ("http", "https")
    check_email_deliverability: bool = False

