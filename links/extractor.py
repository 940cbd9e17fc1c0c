"""Entity reference extraction from shared links."""

import re
from dataclasses import dataclass

from links.errors import UnknownLink
from schemas.common import EntityKind
from utils.logging import get_webhook_logger

logger = get_webhook_logger("link.extractor")

LINK_PATTERN = re.compile(r"/(document|task|folder)/([0-9]+)")


@dataclass(frozen=True)
class EntityReference:
    """The record a link points at."""

    kind: EntityKind
    id: int


def extract_entity_reference(link: str | None) -> EntityReference:
    """
    Find the first ``/<kind>/<digits>`` segment anywhere in ``link``.

    Args:
        link: Shared URL, e.g. ``https://taaskly.example.com/document/42?x=1``

    Returns:
        EntityReference with the matched kind and numeric id

    Raises:
        UnknownLink: If the link is missing or contains no such segment
    """
    match = LINK_PATTERN.search(link) if isinstance(link, str) else None
    if match is None:
        logger.warning("Received unknown link", link=link)
        raise UnknownLink()
    return EntityReference(kind=EntityKind(match.group(1)), id=int(match.group(2)))
