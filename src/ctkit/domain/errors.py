"""Error hierarchy for definition and record validation.

Two accumulation styles:

- :class:`StructuralError` is fatal. It aborts validation of the call it
  was raised from (unknown field kind, duplicate names, malformed
  top-level attributes).
- :class:`FieldValidationError` accumulates. It carries every offending
  field at once so the caller can correct them in one pass.

:class:`CollaboratorError` wraps a failure of an injected lookup
collaborator and is never folded into a field error map.
"""

from __future__ import annotations

from typing import Any


class CtkitError(Exception):
    """Base class for all errors raised by ctkit."""


class ValidationError(CtkitError):
    """A definition or record was rejected.

    Attributes:
        errors: Mapping of attribute (or field) name to violation
            messages. May be empty for errors described by the message
            alone.
    """

    def __init__(self, message: str = "Validation failed", errors: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.errors: dict[str, Any] = errors or {}


class StructuralError(ValidationError):
    """Fatal, non-accumulating validation failure."""


class UnknownFieldKindError(StructuralError):
    """A field declared a ``fieldType`` outside the catalog."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"'{kind}' is not a valid field type")
        self.kind = kind


class SchemaCompilationError(StructuralError):
    """A definition handed to the compiler does not satisfy its own schema."""


class FieldValidationError(ValidationError):
    """Accumulated per-field violations."""


class CollaboratorError(CtkitError):
    """A lookup collaborator failed while resolving references."""

    def __init__(self, message: str, *, field_name: str | None = None) -> None:
        super().__init__(message)
        self.field_name = field_name
