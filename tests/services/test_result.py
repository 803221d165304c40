"""Tests for ServiceResult and the exception-to-error mapping."""

import json

import pytest

from ctkit.domain.errors import (
    CollaboratorError,
    CtkitError,
    FieldValidationError,
    SchemaCompilationError,
    StructuralError,
    UnknownFieldKindError,
)
from ctkit.services.result import (
    COLLABORATOR_ERROR,
    FIELD_VALIDATION_ERROR,
    STRUCTURAL_ERROR,
    UNKNOWN_FIELD_KIND,
    ServiceError,
    ServiceResult,
)


class TestServiceError:
    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (StructuralError("bad"), STRUCTURAL_ERROR),
            (SchemaCompilationError("bad"), STRUCTURAL_ERROR),
            (UnknownFieldKindError("TABLE"), UNKNOWN_FIELD_KIND),
            (FieldValidationError("bad", {"title": ["x"]}), FIELD_VALIDATION_ERROR),
            (CollaboratorError("down", field_name="photos"), COLLABORATOR_ERROR),
        ],
    )
    def test_codes(self, exc: CtkitError, code: str) -> None:
        assert ServiceError.from_exception(exc).code == code

    def test_detail_carries_errors(self) -> None:
        error = ServiceError.from_exception(FieldValidationError("bad", {"title": ["x"]}))
        assert error.detail == {"title": ["x"]}
        assert error.message == "bad"

    def test_unknown_kind_detail(self) -> None:
        error = ServiceError.from_exception(UnknownFieldKindError("TABLE"))
        assert error.detail == {"fieldType": "TABLE"}
        assert error.message == "'TABLE' is not a valid field type"

    def test_collaborator_detail(self) -> None:
        error = ServiceError.from_exception(CollaboratorError("down", field_name="photos"))
        assert error.detail == {"field": "photos"}


class TestServiceResult:
    def test_failure(self) -> None:
        result = ServiceResult.failure("check_definition", StructuralError("bad"))
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == STRUCTURAL_ERROR

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="define_content_type", data={"id": 1})
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"] == {"id": 1}
        assert parsed["error"] is None
