"""Newsletter route handlers: subscriber listing and subscribe."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from ideacanvas.database import get_database
from ideacanvas.schemas.common import ErrorResponse
from ideacanvas.schemas.newsletter import SubscribeRequest, SubscribeResponse
from ideacanvas.services.newsletter_service import newsletter_service

router = APIRouter(tags=["Newsletter"])


@router.get(
    "/newsletter_subscribers",
    response_model=List[Dict[str, Any]],
    summary="All newsletter subscribers",
)
async def list_subscribers(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await newsletter_service.list_subscribers(db)


@router.post(
    "/api/subscribe",
    status_code=201,
    response_model=SubscribeResponse,
    responses={
        201: {"description": "Subscribed", "model": SubscribeResponse},
        400: {"description": "Missing field or email already subscribed", "model": ErrorResponse},
    },
    summary="Subscribe to the newsletter",
    description=(
        "Requires name, email, age and country. Each new subscriber also "
        "creates an unread notification in the shared feed."
    ),
)
async def subscribe(
    request: SubscribeRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> SubscribeResponse:
    return await newsletter_service.subscribe(db, request)
