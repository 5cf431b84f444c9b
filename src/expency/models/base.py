"""Declarative base and the columns shared by Expency tables.

Every table gets a UUID key and audit timestamps from ``Entity``. Tables
whose rows users can delete also mix in ``SoftDeletable``: a delete stamps
``deleted_at`` and leaves the row in place. Any query that serves a user
must filter on ``live()``, so deleted expenses never appear in listings,
statistics, suggestions or the monthly report. A stamped row is never
revived.
"""
from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import ColumnElement, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Entity(Base):
    """Abstract table with a UUID primary key and created/updated stamps."""

    __abstract__ = True

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


class SoftDeletable:
    """Mixin for rows that are hidden instead of removed."""

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def mark_deleted(self) -> None:
        """Stamp the row as deleted; a second call keeps the first timestamp."""
        if self.deleted_at is None:
            self.deleted_at = utcnow()

    @classmethod
    def live(cls) -> ColumnElement[bool]:
        """WHERE clause selecting rows that have not been deleted."""
        return cls.deleted_at.is_(None)
