"""Field type catalog — definition constraints and schema fragments per kind.

Each field kind is a :class:`FieldKindSpec` pairing two pieces of data:

- the definition-time :class:`ConstraintSet` a field of that kind must
  satisfy (common attributes merged with the kind's own), and
- a generator for the JSON Schema fragment describing that field shape.

The registry is closed: :data:`FIELD_CATALOG` is populated once at import
time and looked up by kind tag.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ctkit.domain.constraints import (
    ArrayLength,
    ArrayOfStrings,
    ConstraintSet,
    DateTime,
    Inclusion,
    IsBoolean,
    IsString,
    Length,
    LessThanAttribute,
    Numericality,
    Presence,
    UniqueArray,
)
from ctkit.domain.errors import UnknownFieldKindError
from ctkit.domain.kinds import (
    CHOICE_FORMATS,
    COLOR_FORMATS,
    DATE_FORMATS,
    LONGTEXT_FORMATS,
    NUMBER_FORMATS,
    TEXT_FORMATS,
    FieldKind,
)

# ---------------------------------------------------------------------------
# Definition-time constraint sets
# ---------------------------------------------------------------------------

# Top-level attributes of a content-type definition.
DEFINITION_CONSTRAINTS = ConstraintSet(
    rules={
        "id": (Numericality(only_integer=True),),
        "name": (Presence(allow_empty=False), IsString(), Length(minimum=1, maximum=64)),
        "description": (IsString(), Length(maximum=128)),
        "metadata": (IsString(), Length(maximum=3000)),
        "projectId": (Presence(), Numericality(only_integer=True)),
        "userId": (Presence(), Numericality(only_integer=True)),
        "fields": (Presence(), ArrayLength()),
        "createdAt": (DateTime(),),
        "modifiedAt": (DateTime(),),
    }
)

COMMON_FIELD_CONSTRAINTS = ConstraintSet(
    rules={
        "fieldType": (Presence(allow_empty=False),),
        "name": (Presence(), IsString(), Length(minimum=4, maximum=64)),
        "label": (Presence(), IsString(), Length(minimum=4, maximum=64)),
        "description": (IsString(), Length(maximum=128)),
        "required": (Presence(allow_empty=False), IsBoolean()),
        "disabled": (Presence(allow_empty=False), IsBoolean()),
    }
)


def _length_range(min_upper: int, max_upper: int) -> ConstraintSet:
    """``minLength``/``maxLength`` pair with ``minLength < maxLength``."""
    return ConstraintSet(
        rules={
            "minLength": (
                Presence(),
                Numericality(
                    only_integer=True,
                    greater_than_or_equal_to=0,
                    less_than_or_equal_to=min_upper,
                ),
            ),
            "maxLength": (
                Presence(),
                Numericality(
                    only_integer=True,
                    greater_than_or_equal_to=1,
                    less_than_or_equal_to=max_upper,
                ),
            ),
        },
        relations=(LessThanAttribute("minLength", "maxLength"),),
    )


def _format_of(formats: tuple[str, ...]) -> ConstraintSet:
    return ConstraintSet(rules={"format": (Presence(), Inclusion(formats, message="is invalid"))})


_TEXT_CONSTRAINTS = _length_range(999, 1000).merge(_format_of(TEXT_FORMATS))

_LONGTEXT_CONSTRAINTS = _length_range(29999, 50000).merge(_format_of(LONGTEXT_FORMATS))

_BOOLEAN_CONSTRAINTS = ConstraintSet(
    rules={
        "labelTrue": (Presence(), IsString(), Length(minimum=1, maximum=32)),
        "labelFalse": (Presence(), IsString(), Length(minimum=1, maximum=32)),
    }
)

_NUMBER_CONSTRAINTS = ConstraintSet(
    rules={
        "minValue": (Presence(), Numericality()),
        "maxValue": (Presence(), Numericality()),
    },
    relations=(LessThanAttribute("minValue", "maxValue"),),
).merge(_format_of(NUMBER_FORMATS))

_CHOICE_CONSTRAINTS = ConstraintSet(
    rules={
        "choices": (
            Presence(),
            ArrayLength(minimum=2, maximum=128),
            ArrayOfStrings(),
            UniqueArray(),
        ),
    }
).merge(_format_of(CHOICE_FORMATS))

# MEDIA, LINK and LIST share the same item-count range.
_ARRAY_CONSTRAINTS = _length_range(999, 1000)


# ---------------------------------------------------------------------------
# Schema fragments
# ---------------------------------------------------------------------------


def _string(min_length: int | None = None, max_length: int | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "string"}
    if min_length is not None:
        schema["minLength"] = min_length
    if max_length is not None:
        schema["maxLength"] = max_length
    return schema


def _integer(minimum: int, maximum: int) -> dict[str, Any]:
    return {"type": "integer", "minimum": minimum, "maximum": maximum}


def _enum(values: tuple[str, ...]) -> dict[str, Any]:
    return {"type": "string", "enum": list(values)}


def common_field_properties() -> dict[str, Any]:
    return {
        "name": _string(4, 64),
        "label": _string(4, 64),
        "description": {"type": "string", "default": "", "maxLength": 128},
        "required": {"type": "boolean", "default": False},
        "disabled": {"type": "boolean", "default": False},
    }


_COMMON_REQUIRED: tuple[str, ...] = (
    "fieldType",
    "name",
    "label",
    "description",
    "required",
    "disabled",
)


def _fragment(kind: FieldKind, specific: dict[str, Any]) -> dict[str, Any]:
    """Assemble a closed object shape pinned to *kind*."""
    properties: dict[str, Any] = {"fieldType": {"type": "string", "pattern": f"^{kind}$"}}
    properties.update(specific)
    properties.update(common_field_properties())
    return {
        "properties": properties,
        "additionalProperties": False,
        "required": [*_COMMON_REQUIRED, *specific],
    }


def _text_fragment() -> dict[str, Any]:
    return _fragment(
        FieldKind.TEXT,
        {
            "minLength": _integer(0, 999),
            "maxLength": _integer(1, 1000),
            "format": _enum(TEXT_FORMATS),
        },
    )


def _longtext_fragment() -> dict[str, Any]:
    return _fragment(
        FieldKind.LONGTEXT,
        {
            "minLength": _integer(0, 29999),
            "maxLength": _integer(1, 50000),
            "format": _enum(LONGTEXT_FORMATS),
        },
    )


def _boolean_fragment() -> dict[str, Any]:
    return _fragment(
        FieldKind.BOOLEAN,
        {"labelTrue": _string(1, 32), "labelFalse": _string(1, 32)},
    )


def _number_fragment() -> dict[str, Any]:
    return _fragment(
        FieldKind.NUMBER,
        {
            "minValue": {"type": "number"},
            "maxValue": {"type": "number"},
            "format": _enum(NUMBER_FORMATS),
        },
    )


def _date_fragment() -> dict[str, Any]:
    return _fragment(FieldKind.DATE, {"format": _enum(DATE_FORMATS)})


def _choice_fragment() -> dict[str, Any]:
    return _fragment(
        FieldKind.CHOICE,
        {
            "choices": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": 2,
                "maxItems": 128,
                "uniqueItems": True,
            },
            "format": _enum(CHOICE_FORMATS),
        },
    )


def _color_fragment() -> dict[str, Any]:
    return _fragment(FieldKind.COLOR, {"format": _enum(COLOR_FORMATS)})


def _array_fragment(kind: FieldKind) -> Callable[[], dict[str, Any]]:
    def build() -> dict[str, Any]:
        return _fragment(kind, {"minLength": _integer(0, 999), "maxLength": _integer(1, 1000)})

    return build


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldKindSpec:
    """Catalog entry for one field kind."""

    kind: FieldKind
    constraints: ConstraintSet
    fragment: Callable[[], dict[str, Any]]

    @property
    def specific_attributes(self) -> tuple[str, ...]:
        """Attributes this kind adds on top of the common ones."""
        common = set(COMMON_FIELD_CONSTRAINTS.attributes)
        return tuple(attr for attr in self.constraints.attributes if attr not in common)


def _spec(
    kind: FieldKind, specific: ConstraintSet, fragment: Callable[[], dict[str, Any]]
) -> FieldKindSpec:
    return FieldKindSpec(kind, COMMON_FIELD_CONSTRAINTS.merge(specific), fragment)


# Ordered: the schema document lists kinds in this order.
FIELD_CATALOG: dict[str, FieldKindSpec] = {
    spec.kind.value: spec
    for spec in (
        _spec(FieldKind.TEXT, _TEXT_CONSTRAINTS, _text_fragment),
        _spec(FieldKind.LONGTEXT, _LONGTEXT_CONSTRAINTS, _longtext_fragment),
        _spec(FieldKind.BOOLEAN, _BOOLEAN_CONSTRAINTS, _boolean_fragment),
        _spec(FieldKind.NUMBER, _NUMBER_CONSTRAINTS, _number_fragment),
        _spec(FieldKind.DATE, _format_of(DATE_FORMATS), _date_fragment),
        _spec(FieldKind.CHOICE, _CHOICE_CONSTRAINTS, _choice_fragment),
        _spec(FieldKind.COLOR, _format_of(COLOR_FORMATS), _color_fragment),
        _spec(FieldKind.MEDIA, _ARRAY_CONSTRAINTS, _array_fragment(FieldKind.MEDIA)),
        _spec(FieldKind.LINK, _ARRAY_CONSTRAINTS, _array_fragment(FieldKind.LINK)),
        _spec(FieldKind.LIST, _ARRAY_CONSTRAINTS, _array_fragment(FieldKind.LIST)),
    )
}


def get_kind_spec(kind: object) -> FieldKindSpec:
    """Look up the catalog entry for *kind*.

    Raises:
        UnknownFieldKindError: If *kind* is not one of the ten field kinds.
    """
    if isinstance(kind, str) and kind in FIELD_CATALOG:
        return FIELD_CATALOG[kind]
    raise UnknownFieldKindError(kind)


def definition_constraints_for(kind: object) -> ConstraintSet:
    return get_kind_spec(kind).constraints


def schema_fragment_for(kind: object) -> dict[str, Any]:
    return get_kind_spec(kind).fragment()


def known_kinds() -> frozenset[str]:
    return frozenset(FIELD_CATALOG)
