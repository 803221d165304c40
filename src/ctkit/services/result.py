"""ServiceResult and ServiceError — the service-layer return contract.

Service methods never raise for expected failures (invalid definitions,
invalid records, missing content types, failing lookups). They return a
ServiceResult whose ``error.code`` names the failure and whose
``error.detail`` carries the error map.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ctkit.domain.errors import (
    CollaboratorError,
    CtkitError,
    FieldValidationError,
    UnknownFieldKindError,
    ValidationError,
)

STRUCTURAL_ERROR = "STRUCTURAL_ERROR"
UNKNOWN_FIELD_KIND = "UNKNOWN_FIELD_KIND"
FIELD_VALIDATION_ERROR = "FIELD_VALIDATION_ERROR"
COLLABORATOR_ERROR = "COLLABORATOR_ERROR"
NOT_FOUND = "NOT_FOUND"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: CtkitError) -> ServiceError:
        if isinstance(exc, UnknownFieldKindError):
            return cls(
                code=UNKNOWN_FIELD_KIND, message=exc.message, detail={"fieldType": str(exc.kind)}
            )
        if isinstance(exc, FieldValidationError):
            return cls(code=FIELD_VALIDATION_ERROR, message=exc.message, detail=exc.errors)
        if isinstance(exc, ValidationError):
            return cls(code=STRUCTURAL_ERROR, message=exc.message, detail=exc.errors)
        if isinstance(exc, CollaboratorError):
            detail = {"field": exc.field_name} if exc.field_name else {}
            return cls(code=COLLABORATOR_ERROR, message=str(exc), detail=detail)
        return cls(code=type(exc).__name__, message=str(exc))


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"define_content_type"``).
        data: Operation-specific payload on success.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None

    @classmethod
    def failure(cls, op: str, exc: CtkitError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
