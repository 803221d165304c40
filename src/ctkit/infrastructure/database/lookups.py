"""SQL-backed lookup collaborator for MEDIA and LINK fields."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from sqlalchemy import Table, func, select
from sqlalchemy.engine import Engine

from ctkit.infrastructure.database.schema import entries, media
from ctkit.validation.lookups import Identifier

# SQLite INTEGER is a signed 64-bit value.
_MIN_ROW_ID = -(2**63)
_MAX_ROW_ID = 2**63 - 1


def _as_row_ids(ids: Iterable[Identifier]) -> set[int] | None:
    """Integer primary keys for *ids*, or None if any id cannot be one."""
    row_ids: set[int] = set()
    for item in ids:
        if isinstance(item, int):
            row_id = item
        elif isinstance(item, str) and item.isdecimal():
            row_id = int(item)
        else:
            return None
        if not _MIN_ROW_ID <= row_id <= _MAX_ROW_ID:
            return None
        row_ids.add(row_id)
    return row_ids


class SqlLookups:
    """Answer existence checks against the ``media`` and ``entries`` tables.

    Queries are blocking, so each call runs in a worker thread with its
    own connection. Database errors propagate to the caller.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def media_exists_in_project(self, ids: frozenset[Identifier], project_id: int) -> bool:
        return await asyncio.to_thread(self._all_exist, media, ids, project_id)

    async def entries_exist_in_project(self, ids: frozenset[Identifier], project_id: int) -> bool:
        return await asyncio.to_thread(self._all_exist, entries, ids, project_id)

    def _all_exist(self, table: Table, ids: frozenset[Identifier], project_id: int) -> bool:
        row_ids = _as_row_ids(ids)
        if not row_ids:
            return row_ids is not None
        with self._engine.connect() as conn:
            count = conn.execute(
                select(func.count())
                .select_from(table)
                .where(table.c.id.in_(row_ids), table.c.project_id == project_id)
            ).scalar_one()
        return count == len(row_ids)
