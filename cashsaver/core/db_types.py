"""Custom database types that work across PostgreSQL and SQLite."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, TypeDecorator
from sqlalchemy.dialects.postgresql import UUID as PostgreSQL_UUID

from cashsaver.utils.datetime_utils import local_zone


class UUID(TypeDecorator):
    """
    Platform-independent UUID type.

    Uses PostgreSQL's UUID type when available, otherwise uses
    String(36) to store UUIDs as strings in SQLite.
    """

    impl = String(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PostgreSQL_UUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if dialect.name == "postgresql":
            return value
        return str(value) if isinstance(value, uuid.UUID) else value

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


class LocalDateTime(TypeDecorator):
    """
    Timestamp stored as local wall-clock time, returned timezone-aware.

    SQLite has no timezone storage, so values are converted into the
    configured local zone before binding and the zone is re-attached on load.
    Deposit days are decided in that zone, so this keeps them stable.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        tz = local_zone()
        if value.tzinfo is None:
            value = value.replace(tzinfo=tz)
        value = value.astimezone(tz)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        tz = local_zone()
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=tz)
        return value.astimezone(tz)
