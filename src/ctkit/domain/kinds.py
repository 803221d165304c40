"""Field kinds and the format vocabularies each kind accepts."""

from __future__ import annotations

from enum import StrEnum


class FieldKind(StrEnum):
    """The closed set of field kinds a content type may declare."""

    TEXT = "TEXT"
    LONGTEXT = "LONGTEXT"
    BOOLEAN = "BOOLEAN"
    NUMBER = "NUMBER"
    DATE = "DATE"
    CHOICE = "CHOICE"
    COLOR = "COLOR"
    MEDIA = "MEDIA"
    LINK = "LINK"
    LIST = "LIST"


TEXT_FORMATS: tuple[str, ...] = ("plaintext", "uri", "email")
LONGTEXT_FORMATS: tuple[str, ...] = ("plaintext", "markdown")
NUMBER_FORMATS: tuple[str, ...] = ("number", "integer")
DATE_FORMATS: tuple[str, ...] = ("datetime", "date")
CHOICE_FORMATS: tuple[str, ...] = ("single", "multiple")
COLOR_FORMATS: tuple[str, ...] = ("rgb", "rgba")
