"""
Errors raised while handling a link webhook.

Each error carries a stable ``code`` and the HTTP status the callback
endpoint answers with.
"""

from fastapi import status


class LinkError(Exception):
    """Base class for every link webhook failure."""

    code: str = "bad_request"
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    def to_detail(self) -> dict[str, str]:
        """Body of the error response."""
        return {"error": self.code, "message": str(self)}


class UnknownLink(LinkError):
    """The link string matches no known entity pattern."""

    code = "unknown_link"
    default_message = "Unknown document link."


class Malformed(LinkError):
    """The webhook envelope does not have exactly one entry with one change."""

    code = "malformed"
    default_message = "Malformatted request."


class InvalidTopic(LinkError):
    """The envelope's ``object`` is not the expected topic."""

    code = "invalid_topic"
    default_message = "Invalid topic."


class UnknownCommunity(LinkError):
    """The community named by the change is not installed."""

    code = "unknown_community"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Unknown community."


class InvalidUrl(LinkError):
    """The link points at an entity kind the handler cannot act on."""

    code = "invalid_url"
    default_message = "Invalid url."


class NoHandlerForChange(LinkError):
    """The change ``field`` has no registered handler."""

    code = "no_handler"
    default_message = "No handler for change."
