"""DefinitionValidator — definition-time validation of content types.

Runs as a two-phase pipeline:

1. Fail-fast phase: top-level attributes, field objects, unique names,
   known field kinds. The first problem raises a :class:`StructuralError`.
2. Accumulate phase: each field is checked against its kind's constraint
   set. Every offending field is collected before raising a single
   :class:`FieldValidationError`.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ctkit.domain.catalog import DEFINITION_CONSTRAINTS, get_kind_spec
from ctkit.domain.constraints import evaluate
from ctkit.domain.errors import FieldValidationError, StructuralError
from ctkit.domain.models import ContentTypeDefinition

logger = logging.getLogger(__name__)


def field_key(field: Mapping[str, Any], index: int) -> str:
    """Key under which a field's errors are reported.

    Fields are keyed by name; a field without a usable name falls back
    to its position (``#2``).
    """
    name = field.get("name")
    if isinstance(name, str) and name:
        return name
    return f"#{index}"


class DefinitionValidator:
    """Validate a raw content-type definition payload (camelCase keys)."""

    def validate(self, payload: Mapping[str, Any]) -> ContentTypeDefinition:
        """Validate *payload* and return the typed definition.

        Raises:
            StructuralError: Malformed top level, non-object fields,
                duplicate names, or an unknown field kind.
            FieldValidationError: One or more fields violate their kind's
                constraints; ``errors == {"fields": {name: {attr: [...]}}}``.
        """
        fields = self._check_structure(payload)
        field_errors = self._collect_field_errors(fields)
        if field_errors:
            logger.debug("Definition rejected: %d invalid field(s)", len(field_errors))
            raise FieldValidationError("Invalid field definitions", {"fields": field_errors})
        try:
            return ContentTypeDefinition.model_validate(_without_none(payload))
        except PydanticValidationError as exc:
            errors: dict[str, list[str]] = {}
            for error in exc.errors():
                location = ".".join(str(part) for part in error["loc"]) or "<root>"
                errors.setdefault(location, []).append(error["msg"])
            raise StructuralError("Invalid content type definition", errors) from exc

    def _check_structure(self, payload: Mapping[str, Any]) -> Sequence[Mapping[str, Any]]:
        if not isinstance(payload, Mapping):
            raise StructuralError("Content type definition must be an object")

        errors = evaluate(payload, DEFINITION_CONSTRAINTS)
        unknown = set(payload) - set(DEFINITION_CONSTRAINTS.attributes)
        for attribute in sorted(unknown):
            errors[attribute] = ["is not a recognised attribute"]
        if errors:
            raise StructuralError("Invalid content type attributes", errors)

        fields: Sequence[Any] = payload["fields"]
        for index, field in enumerate(fields):
            if not isinstance(field, Mapping):
                raise StructuralError(f"Field #{index} must be an object")

        names = [field.get("name") for field in fields if isinstance(field.get("name"), str)]
        duplicates = sorted(str(name) for name, count in Counter(names).items() if count > 1)
        if duplicates:
            raise StructuralError("Field names must be unique", {"duplicates": duplicates})

        for field in fields:
            get_kind_spec(field.get("fieldType"))
        return fields

    def _collect_field_errors(
        self, fields: Sequence[Mapping[str, Any]]
    ) -> dict[str, dict[str, list[str]]]:
        field_errors: dict[str, dict[str, list[str]]] = {}
        for index, field in enumerate(fields):
            spec = get_kind_spec(field["fieldType"])
            errors = evaluate(field, spec.constraints)
            for attribute in sorted(set(field) - set(spec.constraints.attributes)):
                errors[attribute] = [f"is not a recognised attribute for {spec.kind} fields"]
            if not errors:
                continue
            # A field literally named "#1" shares its key with the unnamed field at index 1.
            merged = field_errors.setdefault(field_key(field, index), {})
            for attribute, messages in errors.items():
                merged.setdefault(attribute, []).extend(messages)
        return field_errors


def validate_definition(payload: Mapping[str, Any]) -> ContentTypeDefinition:
    """Shortcut for ``DefinitionValidator().validate(payload)``."""
    return DefinitionValidator().validate(payload)


def _without_none(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Drop explicit ``None`` values so model defaults apply."""
    cleaned = {key: value for key, value in payload.items() if value is not None}
    cleaned["fields"] = [
        {key: value for key, value in field.items() if value is not None}
        for field in payload["fields"]
    ]
    return cleaned
