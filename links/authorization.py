"""Caller resolution for link webhooks."""

from dataclasses import dataclass

from db.models import Community, User
from db.queries import PrivacyFilter
from db.repositories import Store
from links.errors import UnknownCommunity
from schemas.webhook import ChangeValue
from utils.logging import get_webhook_logger

logger = get_webhook_logger("link.authorization")


@dataclass(frozen=True)
class Authorization:
    """
    The community and (optional) local user behind a change.

    ``user`` is None when the platform user has not linked a local account.
    """

    community: Community
    user: User | None

    @property
    def linked(self) -> bool:
        return self.user is not None

    @property
    def privacy(self) -> PrivacyFilter:
        """Visibility rule for privacy-scoped lookups made on behalf of this caller."""
        return PrivacyFilter(owner_id=self.user.id if self.user is not None else None)


class AuthorizationResolver:
    """Resolves the calling community and user from a change value."""

    def __init__(self, store: Store):
        self.store = store

    async def resolve(self, value: ChangeValue) -> Authorization:
        """
        Look up the community, then the user linked to the platform identity.

        Args:
            value: Change value naming the community and user

        Returns:
            Authorization with the community and the user, or None for an unlinked caller

        Raises:
            UnknownCommunity: If the community ID is not numeric or not installed
        """
        try:
            community_id = int(value.community.id)
        except ValueError:
            logger.warning("Non-numeric community id", community_id=value.community.id)
            raise UnknownCommunity() from None

        community = await self.store.communities.get_by_id(community_id)
        if community is None:
            logger.warning("Unknown community", community_id=community_id)
            raise UnknownCommunity()

        user = await self.store.users.get_by_workplace_id(value.user.id)
        logger.resolved(community_id=community.id, user_id=user.id if user is not None else None)
        return Authorization(community=community, user=user)
