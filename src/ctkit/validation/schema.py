"""SchemaCompiler — schema documents for accepted definitions.

A :class:`SchemaDocument` pairs the JSON Schema describing a stored
definition (``json_schema``) with the definition payload itself
(``instance``). Field shapes form a ``oneOf`` union discriminated by an
exact-match pattern on ``fieldType``; each shape is closed
(``additionalProperties: false``).

Compilation is a pure function of the definition: the same definition
always yields byte-identical ``to_json()`` output.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import jsonschema
from pydantic import BaseModel, ConfigDict

from ctkit.domain.catalog import FIELD_CATALOG, schema_fragment_for
from ctkit.domain.errors import SchemaCompilationError, StructuralError
from ctkit.domain.models import ContentTypeDefinition
from ctkit.validation.definition import DefinitionValidator

logger = logging.getLogger(__name__)


def build_json_schema() -> dict[str, Any]:
    """Top-level JSON Schema for a stored content-type definition."""
    return {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "id": {"type": "integer"},
            "name": {"type": "string", "minLength": 1, "maxLength": 64},
            "description": {"type": "string", "default": "", "maxLength": 128},
            "metadata": {"type": "string", "default": "", "maxLength": 3000},
            "projectId": {"type": "integer"},
            "userId": {"type": "integer"},
            "fields": {
                "type": "array",
                "items": {
                    "type": "object",
                    "oneOf": [schema_fragment_for(kind) for kind in FIELD_CATALOG],
                },
            },
            "createdAt": {"type": "string", "format": "date-time"},
            "modifiedAt": {"type": "string", "format": "date-time"},
        },
        "required": ["name", "projectId", "userId"],
    }


def schema_errors(instance: Mapping[str, Any], json_schema: Mapping[str, Any]) -> list[str]:
    """Return ``"path: message"`` strings for every schema violation, in a stable order."""
    validator = jsonschema.Draft7Validator(json_schema)
    messages = []
    for error in validator.iter_errors(instance):
        path = "/".join(str(part) for part in error.absolute_path) or "<root>"
        messages.append(f"{path}: {error.message}")
    return sorted(messages)


class SchemaDocument(BaseModel):
    """Compiled schema plus the definition it describes."""

    model_config = ConfigDict(frozen=True)

    json_schema: dict[str, Any]
    instance: dict[str, Any]

    def to_json(self, *, indent: int | None = None) -> str:
        payload = {"schema": self.json_schema, "instance": self.instance}
        return json.dumps(payload, indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: str | bytes | Mapping[str, Any]) -> SchemaDocument:
        """Parse a document previously produced by :meth:`to_json`.

        Raises:
            StructuralError: If *raw* is not a schema document.
        """
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise StructuralError(f"Schema document is not valid JSON: {exc}") from exc
        if not isinstance(raw, Mapping) or not {"schema", "instance"} <= set(raw):
            raise StructuralError("Schema document must contain 'schema' and 'instance'")
        if not isinstance(raw["schema"], Mapping) or not isinstance(raw["instance"], Mapping):
            raise StructuralError("Schema document 'schema' and 'instance' must be objects")
        return cls(json_schema=dict(raw["schema"]), instance=dict(raw["instance"]))

    def errors(self) -> list[str]:
        return schema_errors(self.instance, self.json_schema)


class SchemaCompiler:
    """Compile accepted definitions and reload stored documents."""

    def __init__(self, validator: DefinitionValidator | None = None) -> None:
        self._validator = validator or DefinitionValidator()

    def compile(self, definition: ContentTypeDefinition) -> SchemaDocument:
        """Build the schema document for *definition*.

        Raises:
            TypeError: If *definition* is not a :class:`ContentTypeDefinition`
                (i.e. it did not come out of the definition validator).
            SchemaCompilationError: If the definition does not satisfy the
                generated schema.
        """
        if not isinstance(definition, ContentTypeDefinition):
            msg = (
                "SchemaCompiler.compile() expects a validated ContentTypeDefinition, "
                f"got {type(definition).__name__}"
            )
            raise TypeError(msg)

        document = SchemaDocument(
            json_schema=build_json_schema(), instance=definition.to_payload()
        )
        errors = document.errors()
        if errors:
            raise SchemaCompilationError(
                "Definition does not satisfy its schema", {"schema": errors}
            )
        logger.debug(
            "Compiled content type %r with %d field(s)", definition.name, len(definition.fields)
        )
        return document

    def load(
        self, raw: str | bytes | Mapping[str, Any] | SchemaDocument
    ) -> ContentTypeDefinition:
        """Re-parse a stored document and return the definition it holds.

        The instance is checked against the stored schema, then re-run
        through the definition validator.

        Raises:
            StructuralError: The document is malformed or its instance
                violates the schema.
            FieldValidationError: The instance fails definition validation.
        """
        document = raw if isinstance(raw, SchemaDocument) else SchemaDocument.from_json(raw)
        errors = document.errors()
        if errors:
            raise StructuralError("Stored definition does not match its schema", {"schema": errors})
        return self._validator.validate(document.instance)
