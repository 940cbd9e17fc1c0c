"""
Database package for Taaskly.

Provides async SQLAlchemy models, session management, typed query
parameters and repositories backing the link pipeline.
"""

from db.base import Base
from db.models import Community, Document, Folder, Task, User, task_subscribers
from db.queries import ListQuery, PrivacyFilter
from db.repositories import (
    CommunityRepository,
    DocumentRepository,
    FolderRepository,
    Store,
    TaskRepository,
    UserRepository,
)
from db.session import close_db, get_db, init_db

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "Community",
    "Document",
    "Folder",
    "Task",
    "User",
    "task_subscribers",
    "ListQuery",
    "PrivacyFilter",
    "CommunityRepository",
    "DocumentRepository",
    "FolderRepository",
    "Store",
    "TaskRepository",
    "UserRepository",
]
