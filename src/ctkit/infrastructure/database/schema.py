"""SQLAlchemy Core table definitions for the ctkit database.

``content_types.document`` holds the compiled schema document as JSON;
the other columns duplicate the keys needed for lookups. ``media`` and
``entries`` only carry what the referential checks need: an id and the
owning project.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, MetaData, Table, Text

metadata = MetaData()

content_types = Table(
    "content_types",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("project_id", Integer, nullable=False),
    Column("user_id", Integer, nullable=False),
    Column("name", Text, nullable=False),
    Column("document", Text, nullable=False),  # JSON SchemaDocument
    Column("created_at", Text, nullable=False),
    Column("modified_at", Text, nullable=False),
    Index("ix_content_types_project", "project_id"),
)

media = Table(
    "media",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("project_id", Integer, nullable=False),
    Column("name", Text, nullable=False),
    Index("ix_media_project", "project_id"),
)

entries = Table(
    "entries",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("project_id", Integer, nullable=False),
    Column("content_type_id", Integer, ForeignKey("content_types.id"), nullable=False),
    Column("data", Text, nullable=False),  # JSON record
    Column("created_at", Text, nullable=False),
    Index("ix_entries_project", "project_id"),
)
