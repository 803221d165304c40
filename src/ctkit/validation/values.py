"""ValueValidator — value-time validation of content records.

For each enabled field of a definition a :class:`FieldRuleset` is built
from the field's kind, format and ``required`` flag. Synchronous rules
run immediately; referential rules (MEDIA, LINK) call the injected
:class:`~ctkit.validation.lookups.Lookups` concurrently. The call only
returns once every lookup has settled.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from ctkit.domain.constraints import (
    ArrayLength,
    ArrayOfStrings,
    ChoicesUnion,
    Constraint,
    Date,
    DateTime,
    Email,
    IsBoolean,
    Length,
    Numericality,
    Pattern,
    Presence,
    UniqueArray,
    Url,
    check_value,
)
from ctkit.domain.errors import CollaboratorError, FieldValidationError
from ctkit.domain.models import (
    BooleanField,
    ChoiceField,
    ColorField,
    ContentTypeDefinition,
    DateField,
    FieldDefinition,
    LinkField,
    ListField,
    LongTextField,
    MediaField,
    NumberField,
    TextField,
)
from ctkit.validation.lookups import Identifier, Lookups

logger = logging.getLogger(__name__)

HEX_COLOR_PATTERNS: dict[str, Pattern] = {
    "rgb": Pattern(
        r"#[0-9a-fA-F]{6}", message="invalid rgb hex value (should be formatted #000000)"
    ),
    "rgba": Pattern(
        r"#[0-9a-fA-F]{8}", message="invalid rgba hex value (should be formatted #00000000)"
    ),
}


@dataclass(frozen=True)
class ReferenceRule:
    """Ids in the value must all exist in *collection* within *project_id*."""

    collection: Literal["media", "entries"]
    project_id: int

    @property
    def message(self) -> str:
        if self.collection == "media":
            return "references media that does not exist in this project"
        return "references entries that do not exist in this project"

    def identifiers(self, value: Any) -> frozenset[Identifier] | None:
        """Ids to look up, or None when the value cannot be looked up."""
        if not isinstance(value, (list, tuple)) or not value:
            return None
        if any(isinstance(item, bool) or not isinstance(item, (int, str)) for item in value):
            return None
        return frozenset(value)


@dataclass(frozen=True)
class FieldRuleset:
    """Compiled value rules for one field."""

    field_name: str
    constraints: tuple[Constraint, ...]
    reference: ReferenceRule | None = None

    def check(self, value: Any) -> list[str]:
        messages = check_value(value, self.constraints)
        if (
            self.reference is not None
            and isinstance(value, (list, tuple))
            and value
            and self.reference.identifiers(value) is None
        ):
            messages.append("must contain only identifiers")
        return messages


class ValueValidator:
    """Validate content records against an accepted definition.

    Args:
        lookups: Collaborator resolving MEDIA and LINK references.
        url_schemes: Schemes accepted by TEXT fields with ``uri`` format.
        check_email_deliverability: Resolve email domains over DNS for
            TEXT fields with ``email`` format.
    """

    def __init__(
        self,
        lookups: Lookups,
        *,
        url_schemes: tuple[str, ...] = ("http", "https"),
        check_email_deliverability: bool = False,
    ) -> None:
        self._lookups = lookups
        self._url_schemes = tuple(url_schemes)
        self._check_email_deliverability = check_email_deliverability

    def build_ruleset(self, field: FieldDefinition, project_id: int) -> FieldRuleset:
        constraints: list[Constraint] = []
        reference: ReferenceRule | None = None
        if field.required:
            constraints.append(Presence(allow_empty=False))

        if isinstance(field, TextField):
            if field.format == "uri":
                constraints.append(Url(schemes=self._url_schemes))
            elif field.format == "email":
                constraints.append(Email(check_deliverability=self._check_email_deliverability))
            constraints.append(Length(minimum=field.min_length, maximum=field.max_length))
        elif isinstance(field, LongTextField):
            constraints.append(Length(minimum=field.min_length, maximum=field.max_length))
        elif isinstance(field, DateField):
            constraints.append(DateTime() if field.format == "datetime" else Date())
        elif isinstance(field, BooleanField):
            constraints.append(IsBoolean())
        elif isinstance(field, NumberField):
            constraints.append(
                Numericality(
                    only_integer=field.format == "integer",
                    greater_than_or_equal_to=field.min_value,
                    less_than_or_equal_to=field.max_value,
                )
            )
        elif isinstance(field, ChoiceField):
            if field.format == "single":
                constraints.append(ArrayLength(exactly=1))
            else:
                constraints.extend((ArrayLength(minimum=1), UniqueArray()))
            constraints.append(ChoicesUnion(choices=field.choices))
        elif isinstance(field, ColorField):
            constraints.append(HEX_COLOR_PATTERNS[field.format])
        elif isinstance(field, (MediaField, LinkField)):
            constraints.append(ArrayLength(minimum=field.min_length, maximum=field.max_length))
            collection = "media" if isinstance(field, MediaField) else "entries"
            reference = ReferenceRule(collection=collection, project_id=project_id)
        elif isinstance(field, ListField):
            constraints.extend(
                (ArrayOfStrings(), ArrayLength(minimum=field.min_length, maximum=field.max_length))
            )
        return FieldRuleset(field.name, tuple(constraints), reference)

    async def collect_errors(
        self,
        definition: ContentTypeDefinition,
        record: Mapping[str, Any],
        project_id: int | None = None,
    ) -> dict[str, list[str]]:
        """Validate *record* and return every violation, keyed by field name.

        An empty mapping means the record is valid. Disabled fields are
        never validated. Keys of *record* that are not fields of the
        definition are ignored.

        Raises:
            CollaboratorError: A lookup raised instead of answering.
        """
        project = definition.project_id if project_id is None else project_id
        errors: dict[str, list[str]] = {}
        pending: list[tuple[FieldRuleset, frozenset[Identifier]]] = []

        for field in definition.fields:
            if field.disabled:
                continue
            ruleset = self.build_ruleset(field, project)
            value = record.get(field.name)
            if self._check_email_deliverability:
                # Deliverability checks resolve DNS and block.
                messages = await asyncio.to_thread(ruleset.check, value)
            else:
                messages = ruleset.check(value)
            if messages:
                errors[field.name] = messages
            if ruleset.reference is not None:
                ids = ruleset.reference.identifiers(value)
                if ids:
                    pending.append((ruleset, ids))

        if pending:
            results = await asyncio.gather(
                *(self._resolve(ruleset.reference, ids) for ruleset, ids in pending),
                return_exceptions=True,
            )
            for (ruleset, _), result in zip(pending, results, strict=True):
                if isinstance(result, Exception):
                    msg = f"Lookup failed for field '{ruleset.field_name}': {result}"
                    raise CollaboratorError(msg, field_name=ruleset.field_name) from result
                if isinstance(result, BaseException):
                    raise result
            for (ruleset, _), exists in zip(pending, results, strict=True):
                if not exists:
                    errors.setdefault(ruleset.field_name, []).append(ruleset.reference.message)

        # Report fields in definition order regardless of lookup completion order.
        order = {field.name: index for index, field in enumerate(definition.fields)}
        return dict(sorted(errors.items(), key=lambda item: order[item[0]]))

    async def validate(
        self,
        definition: ContentTypeDefinition,
        record: Mapping[str, Any],
        project_id: int | None = None,
    ) -> None:
        """Like :meth:`collect_errors` but raise when the record is invalid.

        Raises:
            FieldValidationError: With the field error mapping.
            CollaboratorError: A lookup raised instead of answering.
        """
        errors = await self.collect_errors(definition, record, project_id)
        if errors:
            logger.debug("Record rejected for %r: %s", definition.name, sorted(errors))
            raise FieldValidationError("Invalid content record", errors)

    async def _resolve(self, reference: ReferenceRule, ids: frozenset[Identifier]) -> bool:
        if reference.collection == "media":
            return await self._lookups.media_exists_in_project(ids, reference.project_id)
        return await self._lookups.entries_exist_in_project(ids, reference.project_id)
