"""
db/base.py

Declarative base for the dashboard tables.

Imported records (chat logs, stock items) carry audit timestamps through
TimestampMixin. Tables loaded from upstream exports (warranty claims,
store visits) keep whatever columns the export provides and do not use it.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Registry for every dashboard model; ``Base.metadata`` feeds Alembic."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """
    ``created_at`` is set by the database when an import row is inserted;
    ``updated_at`` also moves on every ORM update.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=_utc_now,
    )
