"""
Logging utilities for the Taaskly link preview service.

Provides:
- Request ID tracking across async contexts
- Structured logging of webhook steps (received, resolved, action)
- Request ID middleware for FastAPI
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from config import get_settings

# Context variable to track request_id across async contexts
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """
    Logging filter that injects request_id into every log record.

    If no request_id is set in the context, defaults to "-".
    This allows the formatter to safely use %(request_id)s.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("-")
        return True


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware that generates and tracks request IDs.

    - Generates a UUID for each request
    - Sets it in the context variable for logging
    - Adds X-Request-ID header to responses
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        # Reuse the caller's request ID when present
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))

        token = request_id_var.set(request_id)

        try:
            response: Response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            request_id_var.reset(token)


def configure_logging() -> None:
    """
    Configure the root logger with request_id-aware formatting.

    Sets up:
    - Request ID injection via RequestIdFilter
    - Structured log format with timestamp, level, module, function, request_id
    - Output to stdout (container/cloud-friendly)
    - Log level from settings
    """
    settings = get_settings()

    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s.%(funcName)s | %(request_id)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()  # Avoid duplicate handlers on reload
    root.setLevel(level)
    root.addHandler(handler)

    # Reduce noise from common libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


class WebhookLogger:
    """
    Specialized logger for tracking a webhook through the link pipeline.

    Logs the received change, the resolved caller, applied actions and
    errors in a structured format.

    Example:
        logger = WebhookLogger("link.dispatcher")
        logger.received("preview", link="https://example.com/document/5")
        logger.resolved(community_id=1, user_id=None)
        logger.action("Task.Close", task_id=7)
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"webhook.{name}")
        self.settings = get_settings()

    def received(self, field: str, **extra):
        """Log an incoming change before it is handled."""
        if self.settings.enable_webhook_tracing:
            self.logger.info(
                f"[RECEIVED] {field}",
                extra={"component": self.name, "step": "received", "field": field, **extra},
            )

    def resolved(
        self,
        community_id: int,
        user_id: int | None,
        **extra,
    ):
        """Log the community and (optional) user a change was resolved to."""
        if self.settings.enable_webhook_tracing:
            self.logger.info(
                f"[RESOLVED] community={community_id} user={user_id if user_id is not None else '-'}",
                extra={
                    "component": self.name,
                    "step": "resolved",
                    "community_id": community_id,
                    "user_id": user_id,
                    "linked_user": user_id is not None,
                    **extra,
                },
            )

    def action(self, action_type: str, details: dict[str, Any] | None = None, **extra):
        """Log a state change applied to a record."""
        if self.settings.enable_webhook_tracing:
            self.logger.info(
                f"[ACTION] {action_type}",
                extra={
                    "component": self.name,
                    "step": "action",
                    "action_type": action_type,
                    "details": details or {},
                    **extra,
                },
            )

    def warning(self, message: str, **extra):
        """Log a recoverable anomaly (unknown payload, bad link, etc.)."""
        self.logger.warning(
            f"[WARNING] {message}",
            extra={"component": self.name, "step": "warning", **extra},
        )

    def error(self, error: Exception, context: str = "", **extra):
        """Log errors with full context."""
        self.logger.error(
            f"[ERROR] {context}: {str(error)}",
            exc_info=True,
            extra={"component": self.name, "step": "error", **extra},
        )


def get_webhook_logger(name: str) -> WebhookLogger:
    """
    Factory function to create a WebhookLogger.

    Args:
        name: Name of the component (e.g., "link.dispatcher", "api.accounts")

    Returns:
        WebhookLogger: Logger instance for the component
    """
    return WebhookLogger(name)
