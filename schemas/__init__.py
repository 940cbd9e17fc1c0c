"""
Pydantic schemas for the Taaskly link preview service.

Provides data models for:
- The inbound link webhook envelope
- Encoded preview/collection items and the callback response
- Account linking requests
- Common enums
"""

# Common types
from schemas.common import (
    ChangeField,
    EntityKind,
    ItemPrivacy,
    PostbackPayload,
    Privacy,
    TaskPriority,
)

# Account linking schemas
from schemas.accounts import AccountLinkRequest, AccountLinkResponse

# Encoded item schemas
from schemas.items import (
    AdditionalData,
    DocumentItem,
    EncodedItem,
    FolderItem,
    LinkCallbackResponse,
    LinkErrorDetail,
    LinkErrorResponse,
    PostbackAction,
    TaskItem,
)

# Webhook envelope schemas
from schemas.webhook import Change, ChangeValue, Entry, IdRef, WebhookEnvelope

__all__ = [
    # Common
    "ChangeField",
    "EntityKind",
    "ItemPrivacy",
    "PostbackPayload",
    "Privacy",
    "TaskPriority",
    # Accounts
    "AccountLinkRequest",
    "AccountLinkResponse",
    # Items
    "AdditionalData",
    "DocumentItem",
    "EncodedItem",
    "FolderItem",
    "LinkCallbackResponse",
    "LinkErrorDetail",
    "LinkErrorResponse",
    "PostbackAction",
    "TaskItem",
    # Webhook
    "Change",
    "ChangeValue",
    "Entry",
    "IdRef",
    "WebhookEnvelope",
]
