"""Columns every table carries: a UUID primary key and row timestamps."""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Uuid


def utcnow() -> datetime:
    # Timestamp columns are naive and hold UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UUIDPrimaryKeyMixin:
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class RecordMixin(UUIDPrimaryKeyMixin, TimestampMixin):
    """Primary key plus created/updated timestamps, used by entities and link rows."""
