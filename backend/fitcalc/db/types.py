"""
Custom SQLAlchemy types for database compatibility.
"""

from sqlalchemy import JSON, TypeDecorator
from sqlalchemy.dialects.postgresql import JSONB as PostgresJSONB


class JSONB(TypeDecorator):
    """
    Platform-independent JSONB type.
    Uses PostgreSQL JSONB when available, otherwise uses JSON (text on SQLite).
    """

    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PostgresJSONB())
        return dialect.type_descriptor(JSON())
