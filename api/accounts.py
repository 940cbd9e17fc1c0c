"""
Account linking API endpoints.

Connects a local user to their collaboration platform identity so that
link webhooks from that person resolve to a linked user.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from db.repositories import Store
from db.session import get_db
from schemas.accounts import AccountLinkRequest, AccountLinkResponse
from utils.logging import get_webhook_logger

router = APIRouter(tags=["Accounts"])
logger = get_webhook_logger("api.accounts")


@router.post("/link", status_code=status.HTTP_200_OK, response_model=AccountLinkResponse)
async def link_account(
    link_data: AccountLinkRequest,
    db: AsyncSession = Depends(get_db),
) -> AccountLinkResponse:
    """
    Link a local user to a platform user within a community.

    Re-linking the same user to the same identity is idempotent.

    **Request Body:**
    ```json
    {
      "user_id": 7,
      "community_id": 1,
      "workplace_id": "100012345"
    }
    ```

    **Response:**
    ```json
    {
      "success": true,
      "user_id": 7,
      "workplace_id": "100012345"
    }
    ```
    """
    logger.logger.info(
        "Linking account",
        extra={
            "user_id": link_data.user_id,
            "community_id": link_data.community_id,
            "workplace_id": link_data.workplace_id,
        },
    )
    store = Store(db)

    community = await store.communities.get_by_id(link_data.community_id)
    if community is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No community with id {link_data.community_id} found",
        )

    user = await store.users.get_by_id(link_data.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {link_data.user_id} not found",
        )

    existing = await store.users.get_by_workplace_id(link_data.workplace_id)
    if existing is not None and existing.id != user.id:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This user is already linked to somebody else.",
        )

    try:
        await store.users.link_workplace_identity(user, community, link_data.workplace_id)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(e, context="account_link_error", user_id=link_data.user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to link account",
        )

    logger.action(
        "account_linked",
        details={"user_id": user.id, "community_id": community.id},
    )
    return AccountLinkResponse(success=True, user_id=user.id, workplace_id=link_data.workplace_id)
