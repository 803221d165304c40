"""Tests for DefinitionValidator — structural checks and field accumulation."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from ctkit.domain.errors import FieldValidationError, StructuralError, UnknownFieldKindError
from ctkit.domain.models import ContentTypeDefinition, TextField
from ctkit.validation.definition import DefinitionValidator, field_key, validate_definition

FieldFactory = Callable[..., dict[str, Any]]
DefinitionFactory = Callable[..., dict[str, Any]]


@pytest.fixture
def validator() -> DefinitionValidator:
    return DefinitionValidator()


class TestAccepts:
    def test_every_kind(self, validator: DefinitionValidator, article_payload: dict) -> None:
        definition = validator.validate(article_payload)
        assert isinstance(definition, ContentTypeDefinition)
        assert [f.field_type for f in definition.fields] == [
            "TEXT",
            "LONGTEXT",
            "BOOLEAN",
            "NUMBER",
            "DATE",
            "CHOICE",
            "COLOR",
            "MEDIA",
            "LINK",
            "LIST",
        ]

    def test_no_fields(self, make_definition: DefinitionFactory) -> None:
        assert validate_definition(make_definition()).fields == ()

    def test_explicit_nulls_use_defaults(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        payload = make_definition(make_field("LIST", description=None), id=None, metadata=None)
        definition = validate_definition(payload)
        assert definition.id is None
        assert definition.metadata == ""
        assert definition.fields[0].description == ""

    def test_timestamps(self, make_definition: DefinitionFactory) -> None:
        payload = make_definition(createdAt="2024-05-01T10:30:00+00:00")
        assert validate_definition(payload).created_at is not None


class TestStructuralErrors:
    def test_not_an_object(self, validator: DefinitionValidator) -> None:
        with pytest.raises(StructuralError, match="must be an object"):
            validator.validate(["not", "a", "mapping"])  # type: ignore[arg-type]

    def test_missing_top_level(self, validator: DefinitionValidator) -> None:
        with pytest.raises(StructuralError) as info:
            validator.validate({"name": "Article"})
        assert set(info.value.errors) == {"projectId", "userId", "fields"}

    def test_unknown_top_level_attribute(self, make_definition: DefinitionFactory) -> None:
        with pytest.raises(StructuralError) as info:
            validate_definition(make_definition(owner="me"))
        assert info.value.errors == {"owner": ["is not a recognised attribute"]}

    def test_name_too_long(self, make_definition: DefinitionFactory) -> None:
        with pytest.raises(StructuralError) as info:
            validate_definition(make_definition(name="x" * 65))
        assert info.value.errors == {"name": ["is too long (maximum is 64 characters)"]}

    def test_field_not_an_object(self, make_definition: DefinitionFactory) -> None:
        with pytest.raises(StructuralError, match="Field #0 must be an object"):
            validate_definition(make_definition("title"))

    def test_duplicate_names(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        payload = make_definition(
            make_field("TEXT", name="title"),
            make_field("LONGTEXT", name="title"),
        )
        with pytest.raises(StructuralError, match="unique") as info:
            validate_definition(payload)
        assert info.value.errors == {"duplicates": ["title"]}

    def test_duplicates_win_over_field_errors(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        payload = make_definition(
            make_field("TEXT", name="title", minLength=50, maxLength=10),
            make_field("TEXT", name="title"),
        )
        with pytest.raises(StructuralError):
            validate_definition(payload)

    def test_unknown_kind(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        payload = make_definition(make_field("TEXT"), make_field("LIST", fieldType="TABLE"))
        with pytest.raises(UnknownFieldKindError) as info:
            validate_definition(payload)
        assert info.value.message == "'TABLE' is not a valid field type"

    def test_unknown_kind_is_structural(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        with pytest.raises(StructuralError):
            validate_definition(make_definition(make_field("LIST", fieldType=None)))


class TestFieldErrors:
    def test_text_min_not_below_max(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        payload = make_definition(make_field("TEXT", minLength=10, maxLength=5))
        with pytest.raises(FieldValidationError) as info:
            validate_definition(payload)
        assert info.value.errors == {
            "fields": {"title": {"minLength": ["must be less than maxLength"]}}
        }

    def test_accumulates_every_field(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        payload = make_definition(
            make_field("TEXT", format="html"),
            make_field("NUMBER", minValue=9, maxValue=1),
            make_field("BOOLEAN"),
        )
        with pytest.raises(FieldValidationError) as info:
            validate_definition(payload)
        fields = info.value.errors["fields"]
        assert set(fields) == {"title", "rating"}
        assert fields["title"] == {"format": ["is invalid"]}
        assert fields["rating"] == {"minValue": ["must be less than maxValue"]}

    def test_unknown_field_attribute(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        payload = make_definition(make_field("COLOR", choices=["a", "b"]))
        with pytest.raises(FieldValidationError) as info:
            validate_definition(payload)
        assert info.value.errors["fields"]["accent"] == {
            "choices": ["is not a recognised attribute for COLOR fields"]
        }

    def test_missing_required_flag(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        payload = make_definition(make_field("DATE", drop=("required",)))
        with pytest.raises(FieldValidationError) as info:
            validate_definition(payload)
        assert info.value.errors["fields"]["publishedAt"] == {"required": ["can't be blank"]}

    def test_unnamed_field_keyed_by_position(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        payload = make_definition(make_field("TEXT"), make_field("LIST", drop=("name",)))
        with pytest.raises(FieldValidationError) as info:
            validate_definition(payload)
        assert info.value.errors["fields"] == {"#1": {"name": ["can't be blank"]}}

    def test_positional_key_shared_with_named_field(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        payload = make_definition(
            make_field("BOOLEAN", name="#1"), make_field("LIST", drop=("name",))
        )
        with pytest.raises(FieldValidationError) as info:
            validate_definition(payload)
        assert info.value.errors["fields"] == {
            "#1": {"name": ["is too short (minimum is 4 characters)", "can't be blank"]}
        }

    def test_choice_must_list_choices(
        self, make_definition: DefinitionFactory, make_field: FieldFactory
    ) -> None:
        payload = make_definition(make_field("CHOICE", choices=["solo"]))
        with pytest.raises(FieldValidationError) as info:
            validate_definition(payload)
        assert info.value.errors["fields"]["category"] == {
            "choices": ["must contain at least 2 items"]
        }


class TestFieldKey:
    def test_named(self) -> None:
        assert field_key({"name": "title"}, 3) == "title"

    @pytest.mark.parametrize("name", [None, "", 7])
    def test_positional(self, name: object) -> None:
        assert field_key({"name": name}, 3) == "#3"


def test_returned_field_types(make_definition: DefinitionFactory, make_field: FieldFactory) -> None:
    definition = validate_definition(make_definition(make_field("TEXT", format="email")))
    field = definition.fields[0]
    assert isinstance(field, TextField)
    assert field.format == "email"
