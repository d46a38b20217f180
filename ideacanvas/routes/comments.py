"""Comment route handlers."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from ideacanvas.database import get_database
from ideacanvas.schemas.comment import CommentCreate, CommentCreateResponse
from ideacanvas.schemas.common import CountResponse
from ideacanvas.services.comment_service import comment_service

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.post("", response_model=CommentCreateResponse, summary="Post a comment")
async def add_comment(
    comment: CommentCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> CommentCreateResponse:
    return await comment_service.add_comment(db, comment)


# Registered before /{blog_id} so "count" is not taken as a blog id
@router.get("/count", response_model=CountResponse, summary="Count all comments")
async def count_comments(db: AsyncIOMotorDatabase = Depends(get_database)) -> CountResponse:
    return CountResponse(count=await comment_service.count_comments(db))


@router.get("/{blog_id}", response_model=List[Dict[str, Any]], summary="Comments on a blog, newest first")
async def comments_for_blog(
    blog_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await comment_service.list_for_blog(db, blog_id)
