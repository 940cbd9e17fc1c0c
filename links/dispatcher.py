"""
Link webhook dispatch.

Provides:
- Envelope validation (topic, entry/change cardinality)
- A registry mapping change fields to handlers
- Response assembly into ``{data, linked_user}``
"""

from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError

from links.errors import InvalidTopic, Malformed, NoHandlerForChange
from links.handlers import HandlerResult, LinkHandlers
from schemas.common import ChangeField
from schemas.items import LinkCallbackResponse
from schemas.webhook import Change, ChangeValue, WebhookEnvelope
from utils.logging import get_webhook_logger

logger = get_webhook_logger("link.dispatcher")

ChangeHandler = Callable[[ChangeValue], Awaitable[HandlerResult]]


def read_change(payload: Any, topic: str) -> Change:
    """
    Validate a raw webhook body and return its single change.

    Args:
        payload: Decoded JSON body
        topic: Expected value of the envelope's ``object`` field

    Returns:
        The only Change in the envelope

    Raises:
        InvalidTopic: If ``object`` is not ``topic``
        Malformed: If the body is not an envelope, or does not hold exactly
            one entry with exactly one change
    """
    if not isinstance(payload, dict):
        logger.warning("Received non-object webhook body")
        raise Malformed()
    if payload.get("object") != topic:
        logger.warning("Received invalid link webhook", object=payload.get("object"))
        raise InvalidTopic()

    try:
        envelope = WebhookEnvelope.model_validate(payload)
    except ValidationError as e:
        logger.warning("Envelope failed validation", errors=e.error_count())
        raise Malformed() from e

    if len(envelope.entry) != 1:
        logger.warning(f"expected exactly one entry, got {len(envelope.entry)}")
        raise Malformed()
    changes = envelope.entry[0].changes
    if len(changes) != 1:
        logger.warning(f"expected exactly one change, got {len(changes)}")
        raise Malformed()
    return changes[0]


def assemble_response(result: HandlerResult) -> LinkCallbackResponse:
    """Wrap handler output into the callback response envelope."""
    return LinkCallbackResponse(data=result.data, linked_user=result.user is not None)


class HandlerRegistry:
    """
    Registry of change handlers keyed by change field.

    Provides centralized registration and lookup so the dispatcher never
    branches on field names itself.
    """

    def __init__(self):
        self._handlers: dict[str, ChangeHandler] = {}

    def register(self, field: str, handler: ChangeHandler) -> None:
        """
        Register a handler for a change field.

        Raises:
            ValueError: If a handler for this field already exists
        """
        if field in self._handlers:
            raise ValueError(f"Handler for '{field}' is already registered")
        self._handlers[field] = handler

    def get(self, field: str) -> ChangeHandler | None:
        return self._handlers.get(field)

    def fields(self) -> list[str]:
        return list(self._handlers.keys())

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, field: str) -> bool:
        return field in self._handlers


def register_link_handlers(registry: HandlerRegistry, handlers: LinkHandlers) -> None:
    """Register the preview, collection and postback handlers."""
    registry.register(ChangeField.PREVIEW.value, handlers.preview)
    registry.register(ChangeField.COLLECTION.value, handlers.collection)
    registry.register(ChangeField.POSTBACK.value, handlers.postback)


class EventDispatcher:
    """Validates a link webhook and routes its change to the matching handler."""

    def __init__(self, registry: HandlerRegistry, topic: str = "link"):
        self.registry = registry
        self.topic = topic

    @classmethod
    def for_handlers(cls, handlers: LinkHandlers, topic: str = "link") -> "EventDispatcher":
        registry = HandlerRegistry()
        register_link_handlers(registry, handlers)
        return cls(registry, topic=topic)

    async def dispatch(self, payload: Any) -> LinkCallbackResponse:
        """
        Handle one webhook body end to end.

        Args:
            payload: Decoded JSON body

        Returns:
            LinkCallbackResponse with the encoded items and linked_user flag

        Raises:
            LinkError: Any validation, authorization or dispatch failure
        """
        change = read_change(payload, self.topic)
        handler = self.registry.get(change.field)
        if handler is None:
            logger.warning("No handler for change", field=change.field)
            raise NoHandlerForChange()

        logger.received(change.field, link=change.value.link, payload=change.value.payload)
        result = await handler(change.value)
        return assemble_response(result)
