"""Typed models for accepted content-type definitions.

Attributes are snake_case in Python and camelCase on the wire
(``field_type`` <-> ``fieldType``). Models are frozen and reject unknown
keys, mirroring ``additionalProperties: false`` in the schema document.

These models describe a definition that already passed
:class:`~ctkit.validation.definition.DefinitionValidator`; the validator
is what produces user-facing error maps, not pydantic.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


class BaseField(BaseModel):
    """Attributes shared by every field kind."""

    model_config = _MODEL_CONFIG

    name: str
    label: str
    description: str = ""
    required: bool
    disabled: bool


class TextField(BaseField):
    field_type: Literal["TEXT"]
    min_length: int
    max_length: int
    format: Literal["plaintext", "uri", "email"]


class LongTextField(BaseField):
    field_type: Literal["LONGTEXT"]
    min_length: int
    max_length: int
    format: Literal["plaintext", "markdown"]


class BooleanField(BaseField):
    field_type: Literal["BOOLEAN"]
    label_true: str
    label_false: str


class NumberField(BaseField):
    field_type: Literal["NUMBER"]
    min_value: int | float
    max_value: int | float
    format: Literal["number", "integer"]


class DateField(BaseField):
    field_type: Literal["DATE"]
    format: Literal["datetime", "date"]


class ChoiceField(BaseField):
    field_type: Literal["CHOICE"]
    choices: tuple[str, ...]
    format: Literal["single", "multiple"]


class ColorField(BaseField):
    field_type: Literal["COLOR"]
    format: Literal["rgb", "rgba"]


class MediaField(BaseField):
    field_type: Literal["MEDIA"]
    min_length: int
    max_length: int


class LinkField(BaseField):
    field_type: Literal["LINK"]
    min_length: int
    max_length: int


class ListField(BaseField):
    field_type: Literal["LIST"]
    min_length: int
    max_length: int


FieldDefinition = Annotated[
    TextField
    | LongTextField
    | BooleanField
    | NumberField
    | DateField
    | ChoiceField
    | ColorField
    | MediaField
    | LinkField
    | ListField,
    Field(discriminator="field_type"),
]


class ContentTypeDefinition(BaseModel):
    """A user-defined content type with its ordered field definitions."""

    model_config = _MODEL_CONFIG

    id: int | None = None
    name: str
    description: str = ""
    metadata: str = ""
    project_id: int
    user_id: int
    fields: tuple[FieldDefinition, ...] = ()
    created_at: datetime | None = None
    modified_at: datetime | None = None

    def field_named(self, name: str) -> FieldDefinition | None:
        for field_def in self.fields:
            if field_def.name == name:
                return field_def
        return None

    def to_payload(self) -> dict[str, Any]:
        """JSON-compatible camelCase payload with defaults applied."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
