"""ContentTypeService — define content types and validate entries against them.

Glues the validators to persistence. Every method returns a
:class:`ServiceResult`; validation and collaborator failures are mapped
to structured errors rather than raised.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog

from ctkit.config.logging import bind_log_context
from ctkit.config.models import ValidationConfig
from ctkit.domain.errors import CtkitError
from ctkit.services.result import NOT_FOUND, ServiceError, ServiceResult
from ctkit.validation.definition import DefinitionValidator
from ctkit.validation.lookups import InMemoryLookups, Lookups
from ctkit.validation.schema import SchemaCompiler
from ctkit.validation.values import ValueValidator

if TYPE_CHECKING:
    from ctkit.config.settings import CtkitSettings
    from ctkit.domain.models import ContentTypeDefinition
    from ctkit.infrastructure.database.repository import ContentTypeRepository

log = structlog.get_logger(__name__)


class ContentTypeService:
    """Operations on content types and their entries.

    *repository* is only needed by operations that read or write stored
    definitions; :meth:`check_definition` and :meth:`compile_definition`
    work without one.
    """

    def __init__(
        self,
        repository: ContentTypeRepository | None = None,
        lookups: Lookups | None = None,
        *,
        validation: ValidationConfig | None = None,
    ) -> None:
        config = validation or ValidationConfig()
        self._repository = repository
        self._definitions = DefinitionValidator()
        self._compiler = SchemaCompiler(self._definitions)
        self._values = ValueValidator(
            lookups if lookups is not None else InMemoryLookups(),
            url_schemes=config.url_schemes,
            check_email_deliverability=config.check_email_deliverability,
        )

    @classmethod
    def from_settings(cls, settings: CtkitSettings) -> ContentTypeService:
        """Service wired to the SQLite database configured in *settings*."""
        from ctkit.infrastructure.database import (
            ContentTypeRepository,
            SqlLookups,
            init_database,
        )

        engine = init_database(settings.database_path, echo=settings.database.echo)
        return cls(
            ContentTypeRepository(engine),
            SqlLookups(engine),
            validation=settings.validation,
        )

    @property
    def repository(self) -> ContentTypeRepository:
        if self._repository is None:
            msg = "ContentTypeService has no repository configured"
            raise RuntimeError(msg)
        return self._repository

    # ── Definitions ───────────────────────────────────────────────────

    def check_definition(self, payload: Mapping[str, Any]) -> ServiceResult:
        """Validate a definition without storing it."""
        op = "check_definition"
        try:
            definition = self._definitions.validate(payload)
        except CtkitError as exc:
            log.info("definition_rejected", op=op, error=type(exc).__name__)
            return ServiceResult.failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": definition.name,
                "field_count": len(definition.fields),
                "fields": [f.name for f in definition.fields],
            },
        )

    def compile_definition(self, payload: Mapping[str, Any]) -> ServiceResult:
        """Validate a definition and return its schema document."""
        op = "compile_definition"
        try:
            document = self._compiler.compile(self._definitions.validate(payload))
        except CtkitError as exc:
            log.info("definition_rejected", op=op, error=type(exc).__name__)
            return ServiceResult.failure(op, exc)
        return ServiceResult(ok=True, op=op, data={"document": json.loads(document.to_json())})

    def define(self, payload: Mapping[str, Any]) -> ServiceResult:
        """Validate, compile and store a definition."""
        op = "define_content_type"
        now = datetime.now(UTC)
        try:
            definition = self._definitions.validate(payload)
            stamped = definition.model_copy(
                update={"created_at": definition.created_at or now, "modified_at": now}
            )
            document = self._compiler.compile(stamped)
        except CtkitError as exc:
            log.info("definition_rejected", op=op, error=type(exc).__name__)
            return ServiceResult.failure(op, exc)

        content_type_id = self.repository.add(document)
        log.info("content_type_defined", content_type_id=content_type_id, name=stamped.name)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": content_type_id,
                "name": stamped.name,
                "project_id": stamped.project_id,
                "field_count": len(stamped.fields),
            },
        )

    def get_definition(self, content_type_id: int) -> ServiceResult:
        op = "get_content_type"
        try:
            definition = self.repository.get(content_type_id)
        except CtkitError as exc:
            log.warning("stored_definition_invalid", content_type_id=content_type_id)
            return ServiceResult.failure(op, exc)
        if definition is None:
            return _not_found(op, content_type_id)
        return ServiceResult(ok=True, op=op, data={"definition": definition.to_payload()})

    # ── Entries ───────────────────────────────────────────────────────

    async def validate_entry(
        self,
        content_type_id: int,
        record: Mapping[str, Any],
        *,
        project_id: int | None = None,
    ) -> ServiceResult:
        """Validate *record* against a stored content type."""
        op = "validate_entry"
        checked = await self._check_entry(op, content_type_id, record, project_id)
        if isinstance(checked, ServiceResult):
            return checked
        return ServiceResult(
            ok=True,
            op=op,
            data={"content_type_id": content_type_id, "valid": True},
        )

    async def create_entry(
        self,
        content_type_id: int,
        record: Mapping[str, Any],
        *,
        project_id: int | None = None,
    ) -> ServiceResult:
        """Validate *record* and store it as a new entry."""
        op = "create_entry"
        checked = await self._check_entry(op, content_type_id, record, project_id)
        if isinstance(checked, ServiceResult):
            return checked

        project = checked.project_id if project_id is None else project_id
        entry_id = self.repository.add_entry(content_type_id, project, record)
        log.info("entry_created", entry_id=entry_id, content_type_id=content_type_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": entry_id, "content_type_id": content_type_id, "project_id": project},
        )

    async def _check_entry(
        self,
        op: str,
        content_type_id: int,
        record: Mapping[str, Any],
        project_id: int | None,
    ) -> ContentTypeDefinition | ServiceResult:
        """The definition *record* satisfies, or the failed result."""
        with bind_log_context(content_type_id=content_type_id, project_id=project_id):
            try:
                definition = self._load(content_type_id, project_id)
                if definition is None:
                    return _not_found(op, content_type_id)
                await self._values.validate(definition, record, project_id)
            except CtkitError as exc:
                log.info("entry_rejected", op=op, error=type(exc).__name__)
                return ServiceResult.failure(op, exc)
        return definition

    def _load(self, content_type_id: int, project_id: int | None) -> ContentTypeDefinition | None:
        if project_id is not None and not self.repository.exists_in_project(
            content_type_id, project_id
        ):
            return None
        return self.repository.get(content_type_id)


def _not_found(op: str, content_type_id: int) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code=NOT_FOUND,
            message=f"Content type {content_type_id} not found",
            detail={"id": content_type_id},
        ),
    )
