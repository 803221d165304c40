"""Shared pytest fixtures for ctkit tests."""

from __future__ import annotations

import copy
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from ctkit.infrastructure.database.engine import init_database

# One valid field definition per kind, keyed by kind tag.
VALID_FIELDS: dict[str, dict[str, Any]] = {
    "TEXT": {
        "fieldType": "TEXT",
        "name": "title",
        "label": "Title",
        "description": "Headline shown in listings",
        "required": True,
        "disabled": False,
        "minLength": 1,
        "maxLength": 120,
        "format": "plaintext",
    },
    "LONGTEXT": {
        "fieldType": "LONGTEXT",
        "name": "body",
        "label": "Body",
        "required": False,
        "disabled": False,
        "minLength": 0,
        "maxLength": 20000,
        "format": "markdown",
    },
    "BOOLEAN": {
        "fieldType": "BOOLEAN",
        "name": "published",
        "label": "Published",
        "required": True,
        "disabled": False,
        "labelTrue": "Yes",
        "labelFalse": "No",
    },
    "NUMBER": {
        "fieldType": "NUMBER",
        "name": "rating",
        "label": "Rating",
        "required": False,
        "disabled": False,
        "minValue": 0,
        "maxValue": 5,
        "format": "integer",
    },
    "DATE": {
        "fieldType": "DATE",
        "name": "publishedAt",
        "label": "Published at",
        "required": False,
        "disabled": False,
        "format": "datetime",
    },
    "CHOICE": {
        "fieldType": "CHOICE",
        "name": "category",
        "label": "Category",
        "required": False,
        "disabled": False,
        "choices": ["news", "opinion", "review"],
        "format": "single",
    },
    "COLOR": {
        "fieldType": "COLOR",
        "name": "accent",
        "label": "Accent colour",
        "required": False,
        "disabled": False,
        "format": "rgb",
    },
    "MEDIA": {
        "fieldType": "MEDIA",
        "name": "photos",
        "label": "Photos",
        "required": False,
        "disabled": False,
        "minLength": 0,
        "maxLength": 10,
    },
    "LINK": {
        "fieldType": "LINK",
        "name": "related",
        "label": "Related entries",
        "required": False,
        "disabled": False,
        "minLength": 0,
        "maxLength": 5,
    },
    "LIST": {
        "fieldType": "LIST",
        "name": "tags",
        "label": "Tags",
        "required": False,
        "disabled": False,
        "minLength": 0,
        "maxLength": 20,
    },
}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / ".ctkit" / "ctkit.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def make_field() -> Callable[..., dict[str, Any]]:
    """Build a valid field payload of a kind, with attribute overrides.

    ``make_field("TEXT", minLength=5)``; pass ``drop=("label",)`` to remove keys.
    """

    def build(kind: str, drop: tuple[str, ...] = (), **overrides: Any) -> dict[str, Any]:
        field = copy.deepcopy(VALID_FIELDS[kind])
        field.update(overrides)
        for key in drop:
            field.pop(key, None)
        return field

    return build


@pytest.fixture
def make_definition() -> Callable[..., dict[str, Any]]:
    """Build a definition payload around the given field payloads."""

    def build(*fields: dict[str, Any], **overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": "Article",
            "description": "Editorial article",
            "projectId": 1,
            "userId": 42,
            "fields": list(fields),
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def article_payload(make_definition: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    """A valid definition with one field of every kind."""
    return make_definition(*(copy.deepcopy(field) for field in VALID_FIELDS.values()))


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty temp directory with no inherited config.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test classes.
    """
    for name in ("CTKIT_CONFIG", "CTKIT_DATABASE__PATH", "CTKIT_VERBOSE", "CTKIT_JSON_OUTPUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
