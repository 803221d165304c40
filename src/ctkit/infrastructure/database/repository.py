"""Content type persistence over SQLAlchemy Core.

Definitions are stored as compiled schema documents and reloaded through
:meth:`SchemaCompiler.load`, so a stored row is re-validated every time
it is read back.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Engine

from ctkit.domain.models import ContentTypeDefinition
from ctkit.infrastructure.database.schema import content_types, entries, media
from ctkit.validation.schema import SchemaCompiler, SchemaDocument

logger = logging.getLogger(__name__)


def _iso(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str):
        return value
    return datetime.now(UTC).isoformat()


class ContentTypeRepository:
    """Store and fetch content-type definitions."""

    def __init__(self, engine: Engine, compiler: SchemaCompiler | None = None) -> None:
        self._engine = engine
        self._compiler = compiler or SchemaCompiler()

    def add(self, document: SchemaDocument) -> int:
        """Insert a compiled document and return the new content type id."""
        instance = document.instance
        with self._engine.begin() as conn:
            result = conn.execute(
                insert(content_types).values(
                    project_id=instance["projectId"],
                    user_id=instance["userId"],
                    name=instance["name"],
                    document=document.to_json(),
                    created_at=_iso(instance.get("createdAt")),
                    modified_at=_iso(instance.get("modifiedAt")),
                )
            )
            new_id = int(result.inserted_primary_key[0])
        logger.debug("Stored content type %d (%s)", new_id, instance["name"])
        return new_id

    def get(self, content_type_id: int) -> ContentTypeDefinition | None:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(content_types.c.id, content_types.c.document).where(
                    content_types.c.id == content_type_id
                )
            ).first()
        if row is None:
            return None
        definition = self._compiler.load(row.document)
        return definition.model_copy(update={"id": row.id})

    def exists_in_project(self, content_type_id: int, project_id: int) -> bool:
        with self._engine.connect() as conn:
            count = conn.execute(
                select(func.count())
                .select_from(content_types)
                .where(
                    content_types.c.id == content_type_id,
                    content_types.c.project_id == project_id,
                )
            ).scalar_one()
        return count > 0

    def add_entry(
        self, content_type_id: int, project_id: int, record: Mapping[str, Any]
    ) -> int:
        """Insert an already-validated record and return the new entry id."""
        with self._engine.begin() as conn:
            result = conn.execute(
                insert(entries).values(
                    project_id=project_id,
                    content_type_id=content_type_id,
                    data=json.dumps(dict(record), sort_keys=True, default=str),
                    created_at=datetime.now(UTC).isoformat(),
                )
            )
            return int(result.inserted_primary_key[0])


def insert_media(engine: Engine, project_id: int, name: str) -> int:
    with engine.begin() as conn:
        result = conn.execute(insert(media).values(project_id=project_id, name=name))
        return int(result.inserted_primary_key[0])
