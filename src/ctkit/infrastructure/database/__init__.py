"""SQLite persistence via SQLAlchemy Core."""

from ctkit.infrastructure.database.engine import create_db_engine, init_database
from ctkit.infrastructure.database.lookups import SqlLookups
from ctkit.infrastructure.database.repository import ContentTypeRepository, insert_media
from ctkit.infrastructure.database.schema import content_types, entries, media, metadata

__all__ = [
    "ContentTypeRepository",
    "SqlLookups",
    "content_types",
    "create_db_engine",
    "entries",
    "init_database",
    "insert_media",
    "media",
    "metadata",
]
