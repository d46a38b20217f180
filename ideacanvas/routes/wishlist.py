"""Wishlist route handlers: add, list by email, count, remove."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from ideacanvas.database import get_database
from ideacanvas.schemas.common import CountResponse, DeleteResult, ErrorResponse
from ideacanvas.schemas.wishlist import WishlistAddResponse, WishlistCreate
from ideacanvas.services.wishlist_service import wishlist_service

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


@router.post(
    "",
    response_model=WishlistAddResponse,
    response_model_exclude_none=True,
    summary="Save a blog to a user's wishlist",
)
async def add_to_wishlist(
    item: WishlistCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> WishlistAddResponse:
    return await wishlist_service.add_item(db, item)


@router.get("", response_model=List[Dict[str, Any]], summary="A user's wishlist")
async def get_wishlist(
    email: Optional[str] = Query(default=None, description="Owner's email; omitted returns []"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await wishlist_service.list_items(db, email)


@router.get("/count", response_model=CountResponse, summary="Count all wishlist items")
async def count_wishlist(db: AsyncIOMotorDatabase = Depends(get_database)) -> CountResponse:
    return CountResponse(count=await wishlist_service.count_items(db))


@router.delete(
    "/{item_id}",
    response_model=DeleteResult,
    responses={400: {"description": "Malformed wishlist ID", "model": ErrorResponse}},
    summary="Remove a wishlist item",
)
async def remove_from_wishlist(
    item_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> DeleteResult:
    return await wishlist_service.remove_item(db, item_id)
