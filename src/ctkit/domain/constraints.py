"""Constraint records shared by definition-time and value-time validation.

Every constraint is a small frozen dataclass with a ``check(value)``
method returning a violation message or ``None``. Constraint sets are
plain data: callers can read bounds and relations straight off them.

Only :class:`Presence` looks at missing values. Every other constraint
is skipped when the value is ``None`` so optional attributes stay
optional unless a presence rule says otherwise.

Cross-attribute ordering (``minLength < maxLength``) is not a per-value
constraint. It is a :class:`LessThanAttribute` relation attached to the
:class:`ConstraintSet` and compared only after both attributes pass
their own rules.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, ClassVar

from email_validator import EmailNotValidError, validate_email
from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def is_number(value: Any) -> bool:
    """True for finite ints and floats. Booleans are not numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_integral(value: int | float) -> bool:
    return isinstance(value, int) or value.is_integer()


def _is_empty(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


# ---------------------------------------------------------------------------
# Single-value constraints
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Presence:
    """Value must be present; with ``allow_empty=False`` it must not be blank."""

    checks_missing: ClassVar[bool] = True

    allow_empty: bool = True

    def check(self, value: Any) -> str | None:
        if value is None:
            return "can't be blank"
        if not self.allow_empty and _is_empty(value):
            return "can't be blank"
        return None


@dataclass(frozen=True)
class IsString:
    checks_missing: ClassVar[bool] = False

    def check(self, value: Any) -> str | None:
        return None if isinstance(value, str) else "must be a string"


@dataclass(frozen=True)
class IsBoolean:
    checks_missing: ClassVar[bool] = False

    def check(self, value: Any) -> str | None:
        return None if isinstance(value, bool) else "must be a boolean"


@dataclass(frozen=True)
class Length:
    """String length bounds, inclusive."""

    checks_missing: ClassVar[bool] = False

    minimum: int | None = None
    maximum: int | None = None

    def check(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return "has an incorrect length"
        if self.minimum is not None and len(value) < self.minimum:
            return f"is too short (minimum is {_plural(self.minimum, 'character')})"
        if self.maximum is not None and len(value) > self.maximum:
            return f"is too long (maximum is {_plural(self.maximum, 'character')})"
        return None


@dataclass(frozen=True)
class Numericality:
    """Numeric value with optional inclusive bounds and integer restriction."""

    checks_missing: ClassVar[bool] = False

    only_integer: bool = False
    greater_than_or_equal_to: int | float | None = None
    less_than_or_equal_to: int | float | None = None

    def check(self, value: Any) -> str | None:
        if not is_number(value):
            return "is not a number"
        if self.only_integer and not _is_integral(value):
            return "must be an integer"
        if self.greater_than_or_equal_to is not None and value < self.greater_than_or_equal_to:
            return f"must be greater than or equal to {self.greater_than_or_equal_to}"
        if self.less_than_or_equal_to is not None and value > self.less_than_or_equal_to:
            return f"must be less than or equal to {self.less_than_or_equal_to}"
        return None


@dataclass(frozen=True)
class Inclusion:
    checks_missing: ClassVar[bool] = False

    within: tuple[Any, ...]
    message: str = "is not included in the list"

    def check(self, value: Any) -> str | None:
        return None if value in self.within else self.message


@dataclass(frozen=True)
class ArrayLength:
    """Array item-count bounds, inclusive. ``exactly`` overrides both."""

    checks_missing: ClassVar[bool] = False

    minimum: int | None = None
    maximum: int | None = None
    exactly: int | None = None

    def check(self, value: Any) -> str | None:
        if not isinstance(value, (list, tuple)):
            return "must be an array"
        count = len(value)
        if self.exactly is not None:
            if count != self.exactly:
                return f"must contain exactly {_plural(self.exactly, 'item')}"
            return None
        if self.minimum is not None and count < self.minimum:
            return f"must contain at least {_plural(self.minimum, 'item')}"
        if self.maximum is not None and count > self.maximum:
            return f"must contain at most {_plural(self.maximum, 'item')}"
        return None


@dataclass(frozen=True)
class UniqueArray:
    checks_missing: ClassVar[bool] = False

    def check(self, value: Any) -> str | None:
        if not isinstance(value, (list, tuple)):
            return None
        for index, item in enumerate(value):
            if item in value[:index]:
                return "must contain unique values"
        return None


@dataclass(frozen=True)
class ArrayOfStrings:
    checks_missing: ClassVar[bool] = False

    def check(self, value: Any) -> str | None:
        if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
            return None
        return "must be an array of strings"


@dataclass(frozen=True)
class Pattern:
    """String must match *regex* in full."""

    checks_missing: ClassVar[bool] = False

    regex: str
    message: str = "is invalid"

    def check(self, value: Any) -> str | None:
        if isinstance(value, str) and re.fullmatch(self.regex, value):
            return None
        return self.message


@dataclass(frozen=True)
class Url:
    """Absolute URL with a host and one of the allowed schemes."""

    checks_missing: ClassVar[bool] = False

    schemes: tuple[str, ...] = ("http", "https")

    def check(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return "is not a valid url"
        try:
            url = _URL_ADAPTER.validate_python(value)
        except PydanticValidationError:
            return "is not a valid url"
        if url.scheme not in self.schemes or not url.host:
            return "is not a valid url"
        return None


@dataclass(frozen=True)
class Email:
    checks_missing: ClassVar[bool] = False

    check_deliverability: bool = False

    def check(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return "is not a valid email"
        try:
            validate_email(value, check_deliverability=self.check_deliverability)
        except EmailNotValidError:
            return "is not a valid email"
        return None


@dataclass(frozen=True)
class DateTime:
    """ISO 8601 date-time string (or a ``datetime``)."""

    checks_missing: ClassVar[bool] = False

    def check(self, value: Any) -> str | None:
        if isinstance(value, datetime):
            return None
        # A bare calendar date is not a date-time.
        if not isinstance(value, str) or len(value) <= 10:
            return "must be a valid date-time"
        try:
            datetime.fromisoformat(value)
        except ValueError:
            return "must be a valid date-time"
        return None


@dataclass(frozen=True)
class Date:
    """ISO 8601 calendar date string (or a ``date``), no time component."""

    checks_missing: ClassVar[bool] = False

    def check(self, value: Any) -> str | None:
        if isinstance(value, date) and not isinstance(value, datetime):
            return None
        if not isinstance(value, str):
            return "must be a valid date"
        try:
            date.fromisoformat(value)
        except ValueError:
            return "must be a valid date"
        return None


@dataclass(frozen=True)
class ChoicesUnion:
    """Every item of an array value must be one of *choices*."""

    checks_missing: ClassVar[bool] = False

    choices: tuple[str, ...]

    def check(self, value: Any) -> str | None:
        if not isinstance(value, (list, tuple)):
            return None
        invalid = [item for item in value if item not in self.choices]
        if invalid:
            listed = ", ".join(repr(item) for item in invalid)
            return f"contains values not in choices: {listed}"
        return None


Constraint = (
    Presence
    | IsString
    | IsBoolean
    | Length
    | Numericality
    | Inclusion
    | ArrayLength
    | UniqueArray
    | ArrayOfStrings
    | Pattern
    | Url
    | Email
    | DateTime
    | Date
    | ChoicesUnion
)


# ---------------------------------------------------------------------------
# Cross-attribute relation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LessThanAttribute:
    """``attribute`` must be strictly less than ``other`` on the same object."""

    attribute: str
    other: str

    def compare(self, value: Any, other_value: Any) -> str | None:
        if not (is_number(value) and is_number(other_value)):
            return None
        if value < other_value:
            return None
        return f"must be less than {self.other}"


# ---------------------------------------------------------------------------
# Constraint sets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConstraintSet:
    """Per-attribute constraints plus cross-attribute relations."""

    rules: Mapping[str, tuple[Constraint, ...]] = field(default_factory=dict)
    relations: tuple[LessThanAttribute, ...] = ()

    @property
    def attributes(self) -> tuple[str, ...]:
        return tuple(self.rules)

    def rules_for(self, attribute: str) -> tuple[Constraint, ...]:
        return tuple(self.rules.get(attribute, ()))

    def merge(self, other: ConstraintSet) -> ConstraintSet:
        """Return a new set; *other* wins for attributes defined in both."""
        return ConstraintSet(
            rules={**self.rules, **other.rules},
            relations=self.relations + other.relations,
        )

    def required_attributes(self) -> tuple[str, ...]:
        return tuple(
            name
            for name, rules in self.rules.items()
            if any(isinstance(rule, Presence) for rule in rules)
        )

    def relations_for(self, attribute: str) -> Iterator[LessThanAttribute]:
        for relation in self.relations:
            if attribute in (relation.attribute, relation.other):
                yield relation

    def bounds(self, attribute: str) -> tuple[int | float | None, int | float | None]:
        """Inclusive ``(lower, upper)`` bounds declared for *attribute*."""
        for rule in self.rules_for(attribute):
            if isinstance(rule, Numericality):
                return rule.greater_than_or_equal_to, rule.less_than_or_equal_to
            if isinstance(rule, (Length, ArrayLength)):
                return rule.minimum, rule.maximum
        return None, None


def check_value(value: Any, rules: Iterable[Constraint]) -> list[str]:
    """Messages for every rule in *rules* that *value* violates."""
    messages: list[str] = []
    for rule in rules:
        if value is None and not rule.checks_missing:
            continue
        message = rule.check(value)
        if message is not None:
            messages.append(message)
    return messages


def evaluate(obj: Mapping[str, Any], constraint_set: ConstraintSet) -> dict[str, list[str]]:
    """Apply *constraint_set* to *obj*.

    Returns:
        Mapping of attribute name to violation messages. Empty when
        every constraint and relation holds.
    """
    errors: dict[str, list[str]] = {}
    for attribute, rules in constraint_set.rules.items():
        messages = check_value(obj.get(attribute), rules)
        if messages:
            errors[attribute] = messages

    for relation in constraint_set.relations:
        if relation.attribute in errors or relation.other in errors:
            continue
        message = relation.compare(obj.get(relation.attribute), obj.get(relation.other))
        if message is not None:
            errors.setdefault(relation.attribute, []).append(message)
    return errors
