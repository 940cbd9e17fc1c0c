"""
Link webhook endpoint.

Provides POST /callback, answering preview, collection and postback
changes synchronously.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config import Settings, get_settings
from db.repositories import Store
from db.session import get_db
from links import EventDispatcher, LinkContext, LinkError, LinkHandlers, Malformed
from schemas.items import LinkCallbackResponse, LinkErrorResponse
from utils.logging import get_webhook_logger

router = APIRouter(tags=["Link"])
logger = get_webhook_logger("api.link")


def build_dispatcher(db: AsyncSession, settings: Settings) -> EventDispatcher:
    """Wire a dispatcher for one request's session."""
    handlers = LinkHandlers(
        Store(db),
        LinkContext.from_settings(settings),
        collection_limit=settings.collection_limit,
    )
    return EventDispatcher.for_handlers(handlers, topic=settings.link_topic)


@router.post(
    "/callback",
    status_code=status.HTTP_200_OK,
    response_model=LinkCallbackResponse,
    response_model_exclude_none=True,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": LinkErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": LinkErrorResponse},
    },
)
async def link_callback(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> LinkCallbackResponse:
    """
    Handle a link webhook from the collaboration platform.

    **Request Body:**
    ```json
    {
      "object": "link",
      "entry": [{"changes": [{"field": "preview", "value": {
        "link": "https://taaskly.example.com/document/42",
        "community": {"id": "1"},
        "user": {"id": "100012345"}
      }}]}]
    }
    ```

    **Response:**
    ```json
    {"data": [{"link": "...", "title": "...", "type": "doc", "...": "..."}], "linked_user": true}
    ```

    Every failure is answered: webhook errors with their status code and
    ``{"detail": {"error", "message"}}``, anything else with 500.
    """
    try:
        try:
            payload = await request.json()
        except ValueError:
            raise Malformed("Request body is not valid JSON.") from None

        response = await build_dispatcher(db, settings).dispatch(payload)
        await db.commit()
        return response

    except LinkError as e:
        await db.rollback()
        logger.warning(
            f"Rejected link webhook: {e}",
            error_code=e.code,
            status_code=e.status_code,
        )
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())

    except Exception as e:
        await db.rollback()
        logger.error(e, context="link_callback_error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "internal_error", "message": "Failed to handle link webhook"},
        )
