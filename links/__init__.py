"""
Link webhook pipeline.

Resolves previews, collections and postbacks for links shared on the
collaboration platform.
"""

from links.authorization import Authorization, AuthorizationResolver
from links.dispatcher import (
    EventDispatcher,
    HandlerRegistry,
    assemble_response,
    read_change,
    register_link_handlers,
)
from links.encoders import LinkContext, encode_document, encode_folder, encode_task, tasks_folder
from links.errors import (
    InvalidTopic,
    InvalidUrl,
    LinkError,
    Malformed,
    NoHandlerForChange,
    UnknownCommunity,
    UnknownLink,
)
from links.extractor import EntityReference, extract_entity_reference
from links.handlers import HandlerResult, LinkHandlers

__all__ = [
    "Authorization",
    "AuthorizationResolver",
    "EventDispatcher",
    "HandlerRegistry",
    "assemble_response",
    "read_change",
    "register_link_handlers",
    "LinkContext",
    "encode_document",
    "encode_folder",
    "encode_task",
    "tasks_folder",
    "LinkError",
    "InvalidTopic",
    "InvalidUrl",
    "Malformed",
    "NoHandlerForChange",
    "UnknownCommunity",
    "UnknownLink",
    "EntityReference",
    "extract_entity_reference",
    "HandlerResult",
    "LinkHandlers",
]
