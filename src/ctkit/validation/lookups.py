"""Lookup collaborators used by referential field kinds (MEDIA, LINK).

A lookup answers one question: does *every* id in a set resolve inside
a given project? Implementations may do I/O and must tolerate being
called concurrently from several fields of the same record.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

Identifier = int | str


@runtime_checkable
class Lookups(Protocol):
    """Capability object injected into :class:`~ctkit.validation.values.ValueValidator`."""

    async def media_exists_in_project(
        self, ids: frozenset[Identifier], project_id: int
    ) -> bool: ...

    async def entries_exist_in_project(
        self, ids: frozenset[Identifier], project_id: int
    ) -> bool: ...


class InMemoryLookups:
    """Dict-backed lookups, keyed by project id.

    Useful for tests and offline tooling::

        lookups = InMemoryLookups(media={1: {7}}, entries={1: {3, 4}})
    """

    def __init__(
        self,
        *,
        media: dict[int, Iterable[Identifier]] | None = None,
        entries: dict[int, Iterable[Identifier]] | None = None,
    ) -> None:
        self._media = {project: set(ids) for project, ids in (media or {}).items()}
        self._entries = {project: set(ids) for project, ids in (entries or {}).items()}

    def add_media(self, project_id: int, *ids: Identifier) -> None:
        self._media.setdefault(project_id, set()).update(ids)

    def add_entries(self, project_id: int, *ids: Identifier) -> None:
        self._entries.setdefault(project_id, set()).update(ids)

    async def media_exists_in_project(self, ids: frozenset[Identifier], project_id: int) -> bool:
        return ids <= self._media.get(project_id, set())

    async def entries_exist_in_project(self, ids: frozenset[Identifier], project_id: int) -> bool:
        return ids <= self._entries.get(project_id, set())
