"""Mixins for SQLAlchemy models."""

import uuid

from sqlalchemy import Column, DateTime, String, func


def generate_id() -> str:
    """Opaque string primary key."""
    return uuid.uuid4().hex


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class StringIdMixin:
    """Mixin for records keyed by a generated string id."""

    id = Column(String(32), primary_key=True, default=generate_id)
