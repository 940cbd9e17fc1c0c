"""
Declarative base for the link service tables.

Every table shares one metadata object so the test suite can create the
whole schema with ``Base.metadata.create_all``. Folders, documents and
tasks carry creation timestamps, which order collections newest first.
"""

from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for communities, users, folders, documents and tasks."""

    # Timestamps are stored timezone-aware
    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }


class TimestampMixin:
    """
    created_at and updated_at columns filled by the database.

    ``created_at`` is the sort key for "most recent" collections and the
    Created row of a task preview.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        doc="Timestamp when the record was created",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
        doc="Timestamp when the record was last updated",
    )
