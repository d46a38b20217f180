"""
Idea Canvas Backend — Notification Route Handlers
==================================================

What:  The shared notification feed and its read state.

Path note:
    /notifications/read-all and /notifications/{id}/read differ in segment
    count, so "read-all" is never captured as an id.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from ideacanvas.database import get_database
from ideacanvas.schemas.common import CountResponse, ErrorResponse, MessageResponse
from ideacanvas.schemas.notification import ReadAllResponse
from ideacanvas.services.notification_service import notification_service

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[Dict[str, Any]], summary="Latest 50 notifications")
async def list_notifications(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await notification_service.list_recent(db)


@router.put(
    "/read-all",
    response_model=ReadAllResponse,
    summary="Mark every unread notification as read",
)
async def mark_all_read(db: AsyncIOMotorDatabase = Depends(get_database)) -> ReadAllResponse:
    return await notification_service.mark_all_read(db)


@router.get("/unread-count", response_model=CountResponse, summary="Number of unread notifications")
async def unread_count(db: AsyncIOMotorDatabase = Depends(get_database)) -> CountResponse:
    return CountResponse(count=await notification_service.unread_count(db))


@router.put(
    "/{notification_id}/read",
    response_model=MessageResponse,
    responses={
        400: {"description": "Malformed notification ID", "model": ErrorResponse},
        404: {"description": "Notification not found", "model": ErrorResponse},
    },
    summary="Mark one notification as read",
)
async def mark_read(
    notification_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> MessageResponse:
    return await notification_service.mark_read(db, notification_id)
