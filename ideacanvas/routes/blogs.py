"""
Idea Canvas Backend — Blog Route Handlers
==========================================

What:  Blog CRUD, like toggle and the blog aggregates.
How:   Extracts path/query/body data, delegates to BlogService, returns JSON.

Route Inventory:
    POST /addBlog               create
    GET  /blogs                 filtered, paginated listing
    GET  /blogs/count           total blogs
    GET  /blogs/top             longest 10 by word count
    GET  /recent                8 newest
    GET  /recent-blogs          6 newest
    GET  /blog/{id}             single blog
    PUT  /blog/{id}             edit
    PUT  /blog/{id}/like        like / unlike
    GET  /likes/count           likes across all blogs
    GET  /user/blogs/{email}    author's blogs with comment counts
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from ideacanvas.config import settings
from ideacanvas.database import get_database
from ideacanvas.schemas.blog import (
    BlogCreate,
    BlogListResponse,
    BlogUpdate,
    LikeRequest,
    UserBlogsResponse,
)
from ideacanvas.schemas.common import (
    CountResponse,
    ErrorResponse,
    InsertResult,
    MessageResponse,
)
from ideacanvas.services.blog_service import blog_service

router = APIRouter(tags=["Blogs"])


@router.post(
    "/addBlog",
    response_model=InsertResult,
    summary="Create a blog post",
    description=(
        "Stores the posted blog as-is, stamped with createdAt. "
        "likes and likedBy default to 0 and []."
    ),
)
async def add_blog(
    blog: BlogCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> InsertResult:
    return await blog_service.create_blog(db, blog)


@router.get(
    "/blogs",
    response_model=BlogListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List blogs with filters and pagination",
)
async def list_blogs(
    response: Response,
    category: Optional[str] = Query(
        default=None, description="Exact category; omit or 'All' for every category"
    ),
    search: Optional[str] = Query(
        default=None, description="Case-insensitive text to look for in titles"
    ),
    page: int = Query(default=1, ge=1, description="1-based page number"),
    limit: int = Query(
        default=settings.blogs_page_size,
        ge=1,
        le=settings.blogs_max_page_size,
        description="Blogs per page",
    ),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> BlogListResponse:
    """
    Example client usage:
        GET /blogs?category=Tech&search=python&page=2&limit=12
    """
    result = await blog_service.list_blogs(
        db, category=category, search=search, page=page, limit=limit
    )
    response.headers["X-Total-Count"] = str(result.total_blogs)
    return result


@router.get("/blogs/count", response_model=CountResponse, summary="Count all blogs")
async def count_blogs(db: AsyncIOMotorDatabase = Depends(get_database)) -> CountResponse:
    return CountResponse(count=await blog_service.count_blogs(db))


@router.get(
    "/blogs/top",
    response_model=List[Dict[str, Any]],
    summary="Top blogs by word count",
    description="The 10 blogs with the longest longDescription, each with a wordCount field.",
)
async def top_blogs(db: AsyncIOMotorDatabase = Depends(get_database)) -> List[Dict[str, Any]]:
    return await blog_service.top_blogs(db)


@router.get("/recent", response_model=List[Dict[str, Any]], summary="8 most recent blogs")
async def recent(db: AsyncIOMotorDatabase = Depends(get_database)) -> List[Dict[str, Any]]:
    return await blog_service.recent_blogs(db, limit=blog_service.RECENT_LIMIT)


@router.get("/recent-blogs", response_model=List[Dict[str, Any]], summary="6 most recent blogs")
async def recent_blogs(db: AsyncIOMotorDatabase = Depends(get_database)) -> List[Dict[str, Any]]:
    return await blog_service.recent_blogs(db, limit=blog_service.RECENT_BLOGS_LIMIT)


@router.get(
    "/blog/{blog_id}",
    response_model=Dict[str, Any],
    responses={
        400: {"description": "Malformed blog ID", "model": ErrorResponse},
        404: {"description": "Blog not found", "model": ErrorResponse},
    },
    summary="Get a single blog",
)
async def get_blog(
    blog_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    return await blog_service.get_blog(db, blog_id)


@router.put(
    "/blog/{blog_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Malformed blog ID", "model": ErrorResponse},
        404: {"description": "Blog not found", "model": ErrorResponse},
    },
    summary="Edit a blog",
)
async def update_blog(
    blog_id: str,
    changes: BlogUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> MessageResponse:
    return await blog_service.update_blog(db, blog_id, changes)


@router.put(
    "/blog/{blog_id}/like",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing userEmail or malformed ID", "model": ErrorResponse},
        404: {"description": "Blog not found", "model": ErrorResponse},
    },
    summary="Like or unlike a blog",
    description="Likes the blog for userEmail, or removes the like if it is already there.",
)
async def toggle_like(
    blog_id: str,
    body: LikeRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> MessageResponse:
    return await blog_service.toggle_like(db, blog_id, body.user_email)


@router.get("/likes/count", response_model=CountResponse, summary="Total likes across all blogs")
async def count_likes(db: AsyncIOMotorDatabase = Depends(get_database)) -> CountResponse:
    return CountResponse(count=await blog_service.total_likes(db))


@router.get(
    "/user/blogs/{email}",
    response_model=UserBlogsResponse,
    summary="Blogs written by a user",
)
async def user_blogs(
    email: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserBlogsResponse:
    return await blog_service.user_blogs(db, email)
