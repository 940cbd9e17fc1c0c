"""
SQLAlchemy ORM models for the Taaskly link preview service.

Models:
- Communities and users (platform identity linking)
- Folders and documents (privacy-scoped content)
- Tasks and task subscribers
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin


# ============================================================================
# Association Tables
# ============================================================================


task_subscribers = Table(
    "task_subscribers",
    Base.metadata,
    Column("task_id", Integer, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


# ============================================================================
# Identity Models
# ============================================================================


class Community(Base, TimestampMixin):
    """
    A platform community (workspace) that has installed the integration.

    Every webhook names a community; requests for unknown communities are rejected.
    """

    __tablename__ = "communities"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        doc="Community ID as issued by the platform",
    )

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        doc="Community display name",
    )

    access_token: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        doc="Platform access token for outbound API calls",
    )

    users: Mapped[list["User"]] = relationship(
        "User",
        back_populates="community",
        doc="Local users linked to this community",
    )

    def __repr__(self) -> str:
        return f"<Community(id={self.id}, name={self.name})>"


class User(Base, TimestampMixin):
    """
    Local user account.

    A user becomes a "linked user" once ``workplace_id`` holds their platform
    identity; until then webhooks from that person resolve to no user.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        doc="Local login name",
    )

    workplace_id: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        unique=True,
        index=True,
        doc="Platform user ID (NULL until the account is linked)",
    )

    community_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("communities.id", ondelete="SET NULL"),
        nullable=True,
        doc="Community this user is linked to",
    )

    community: Mapped["Community | None"] = relationship(
        "Community",
        back_populates="users",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, workplace_id={self.workplace_id})>"


# ============================================================================
# Content Models
# ============================================================================


class Folder(Base, TimestampMixin):
    """A named, privacy-scoped group of documents."""

    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    privacy: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="private",
        server_default="private",
        doc="'public' (visible to everyone) or 'private' (owner only)",
    )

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    owner: Mapped["User"] = relationship("User", foreign_keys=[owner_id])

    documents: Mapped[list["Document"]] = relationship(
        "Document",
        back_populates="folder",
    )

    __table_args__ = (
        CheckConstraint("privacy IN ('public', 'private')", name="ck_folders_privacy"),
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name={self.name}, privacy={self.privacy})>"


class Document(Base, TimestampMixin):
    """A text document, optionally filed in a folder."""

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default="",
    )

    privacy: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="private",
        server_default="private",
        doc="'public' (visible to everyone) or 'private' (owner only)",
    )

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    folder_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    owner: Mapped["User"] = relationship("User", foreign_keys=[owner_id])

    folder: Mapped["Folder | None"] = relationship("Folder", back_populates="documents")

    __table_args__ = (
        CheckConstraint("privacy IN ('public', 'private')", name="ck_documents_privacy"),
        Index("ix_documents_folder_created", "folder_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, name={self.name}, privacy={self.privacy})>"


# ============================================================================
# Task Models
# ============================================================================


class Task(Base, TimestampMixin):
    """
    A to-do item.

    Tasks are always personalized: previews render per-caller actions
    (close/reopen, subscribe/unsubscribe).
    """

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    priority: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
        doc="'high', 'medium', 'low' or NULL",
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    owner: Mapped["User"] = relationship("User", foreign_keys=[owner_id])

    __table_args__ = (
        CheckConstraint(
            "priority IS NULL OR priority IN ('high', 'medium', 'low')",
            name="ck_tasks_priority",
        ),
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title={self.title}, completed={self.completed})>"
