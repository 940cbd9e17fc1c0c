"""Typed query parameters for repository lookups.

The privacy predicate lives here so that repositories and the link
pipeline share a single definition of "visible to the caller".
"""

from dataclasses import dataclass, field

from sqlalchemy import ColumnElement, or_

from schemas.common import Privacy


@dataclass(frozen=True)
class PrivacyFilter:
    """
    Visibility rule for privacy-scoped records (documents and folders).

    A record is visible when it is public, or when it is owned by the caller.
    ``owner_id`` is None for an unlinked caller, who can only see public records.
    """

    owner_id: int | None = None

    def clause(self, model) -> ColumnElement[bool]:
        """Build the SQL WHERE clause for ``model``."""
        public = model.privacy == Privacy.PUBLIC.value
        if self.owner_id is None:
            return public
        return or_(public, model.owner_id == self.owner_id)


@dataclass(frozen=True)
class ListQuery:
    """Parameters for listing privacy-scoped records."""

    privacy: PrivacyFilter = field(default_factory=PrivacyFilter)
    folder_id: int | None = None
    limit: int | None = 5
    newest_first: bool = True
