"""
Common types and enums for schema definitions.

Provides shared enums used by the store, the link pipeline and the
response encoders.
"""

from enum import Enum


class Privacy(str, Enum):
    """Privacy setting of a stored document or folder."""

    PUBLIC = "public"
    PRIVATE = "private"


class TaskPriority(str, Enum):
    """Priority of a task. Tasks may also have no priority at all."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EntityKind(str, Enum):
    """Kind of record a shared link points at."""

    DOCUMENT = "document"
    TASK = "task"
    FOLDER = "folder"


class ChangeField(str, Enum):
    """Webhook change types handled by the link callback."""

    PREVIEW = "preview"
    COLLECTION = "collection"
    POSTBACK = "postback"


class ItemPrivacy(str, Enum):
    """Privacy value reported to the platform for an encoded item."""

    ORGANIZATION = "organization"
    ACCESSIBLE = "accessible"
    PERSONALIZED = "personalized"


class PostbackPayload(str, Enum):
    """Button payloads understood by the postback handler."""

    TASK_CLOSE = "Task.Close"
    TASK_REOPEN = "Task.Reopen"
    SUBSCRIBE = "Subscribe"
    UNSUBSCRIBE = "Unsubscribe"
