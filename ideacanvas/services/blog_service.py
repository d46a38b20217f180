"""
Idea Canvas Backend — Blog Service
===================================

What:  Business logic for blog posts: create, filtered listing, single
       fetch, edit, like toggle and the read-only aggregates (counts,
       top-by-length, recent, per-author listing).
Who:   Called by the blog route handlers.

Like toggle:
    The toggle reads `likedBy`, decides between like and unlike, then
    issues ONE update whose filter re-asserts what was read:

        like:    {_id, likedBy: {$ne: email}}  → $inc likes +1, $push email
        unlike:  {_id, likedBy: email}         → $inc likes -1, $pull email

    If another request toggled the same user in between, the filter no
    longer matches, nothing is written, and the toggle re-reads. `likes`
    therefore moves by exactly one per applied toggle and always together
    with the matching `likedBy` change.

    Older documents whose `likedBy` is null or missing are repaired on
    their first like: `likedBy` becomes [email] and `likes` becomes 1.
"""

import asyncio
import logging
import re
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from ideacanvas.database import (
    BLOGS,
    COMMENTS,
    insert_result,
    parse_object_id,
    serialize_document,
    serialize_documents,
)
from ideacanvas.exceptions import DatabaseError, NotFoundError, ValidationError
from ideacanvas.schemas.blog import (
    BlogCreate,
    BlogListResponse,
    BlogUpdate,
    UserBlogsResponse,
)
from ideacanvas.schemas.common import InsertResult, MessageResponse
from ideacanvas.services.base import database_errors, utcnow

logger = logging.getLogger(__name__)


def word_count(text: Any) -> int:
    """
    Whitespace-separated words in `text`.

    0 for missing, empty or non-string values. A whitespace-only string
    counts as one (empty) word.
    """
    if not isinstance(text, str) or not text:
        return 0
    return len(text.split()) or 1


def with_like_defaults(blog: Dict[str, Any]) -> Dict[str, Any]:
    """Fill `likes`/`likedBy` on documents written before those fields existed."""
    if not blog.get("likes"):
        blog["likes"] = 0
    if not blog.get("likedBy"):
        blog["likedBy"] = []
    return blog


class BlogService:
    """
    Blog operations over the `blogs` collection.

    Stateless: every method receives the database handle it should use.
    """

    TOP_BLOGS_LIMIT = 10
    RECENT_LIMIT = 8
    RECENT_BLOGS_LIMIT = 6
    LIKE_TOGGLE_ATTEMPTS = 5

    async def create_blog(self, db: AsyncIOMotorDatabase, blog: BlogCreate) -> InsertResult:
        """
        Insert a new blog post exactly as sent, stamped with `createdAt`.

        `likes` and `likedBy` default to 0 and [] when the client leaves
        them out (or sends a falsy value).
        """
        document = blog.model_dump(by_alias=True, exclude_unset=True)
        document["createdAt"] = utcnow()
        if not document.get("likes"):
            document["likes"] = 0
        if not document.get("likedBy"):
            document["likedBy"] = []

        with database_errors("Failed to add blog"):
            result = await db[BLOGS].insert_one(document)

        logger.info("Blog created: %s (category=%s)", result.inserted_id, document.get("category"))
        return InsertResult.model_validate(insert_result(result))

    async def list_blogs(
        self,
        db: AsyncIOMotorDatabase,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 12,
    ) -> BlogListResponse:
        """
        One page of blogs, newest first, with the size of the filtered set.

        Filters:
            category: exact match; absent or "All" means every category
            search:   case-insensitive literal substring of the title;
                      surrounding whitespace is trimmed, blank is ignored
        """
        query: Dict[str, Any] = {}
        if category and category != "All":
            query["category"] = category
        if search and search.strip():
            query["title"] = {"$regex": re.escape(search.strip()), "$options": "i"}

        skip = (page - 1) * limit

        with database_errors("Failed to fetch blogs", category=category, search=search):
            total = await db[BLOGS].count_documents(query)
            cursor = (
                db[BLOGS]
                .find(query)
                .sort("createdAt", DESCENDING)
                .skip(skip)
                .limit(limit)
            )
            blogs = await cursor.to_list(length=limit)

        return BlogListResponse(blogs=serialize_documents(blogs), total_blogs=total)

    async def count_blogs(self, db: AsyncIOMotorDatabase) -> int:
        with database_errors("Failed to fetch blog count"):
            return await db[BLOGS].count_documents({})

    async def top_blogs(self, db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
        """
        The TOP_BLOGS_LIMIT blogs with the longest `longDescription`.

        Each returned document carries a computed `wordCount`. Ties keep
        the collection's natural order.
        """
        with database_errors("Failed to fetch top blogs"):
            blogs = await db[BLOGS].find({}).to_list(length=None)

        for blog in blogs:
            blog["wordCount"] = word_count(blog.get("longDescription"))
        blogs.sort(key=lambda blog: blog["wordCount"], reverse=True)
        return serialize_documents(blogs[: self.TOP_BLOGS_LIMIT])

    async def recent_blogs(self, db: AsyncIOMotorDatabase, limit: int) -> List[Dict[str, Any]]:
        """The `limit` newest blogs."""
        with database_errors("Failed to fetch recent blogs", limit=limit):
            cursor = db[BLOGS].find({}).sort("createdAt", DESCENDING).limit(limit)
            blogs = await cursor.to_list(length=limit)
        return serialize_documents(blogs)

    async def get_blog(self, db: AsyncIOMotorDatabase, blog_id: str) -> Dict[str, Any]:
        """
        Raises:
            InvalidIdError: `blog_id` is not an ObjectId (→ 400 "Invalid blog ID")
            NotFoundError:  no such blog (→ 404 "Blog not found")
        """
        oid = parse_object_id(blog_id, resource="blog")

        with database_errors("Failed to fetch blog", blog_id=blog_id):
            blog = await db[BLOGS].find_one({"_id": oid})

        if blog is None:
            raise NotFoundError(resource="blog", resource_id=blog_id)

        return serialize_document(with_like_defaults(blog))

    async def update_blog(
        self, db: AsyncIOMotorDatabase, blog_id: str, changes: BlogUpdate
    ) -> MessageResponse:
        """Overwrite the five editable fields and stamp `updatedAt`."""
        oid = parse_object_id(blog_id, resource="blog")
        fields = changes.model_dump(by_alias=True)
        fields["updatedAt"] = utcnow()

        with database_errors("Failed to update blog", blog_id=blog_id):
            result = await db[BLOGS].update_one({"_id": oid}, {"$set": fields})

        if result.matched_count == 0:
            raise NotFoundError(resource="blog", resource_id=blog_id)

        logger.info("Blog %s updated", blog_id)
        return MessageResponse(message="Blog updated successfully")

    async def toggle_like(
        self, db: AsyncIOMotorDatabase, blog_id: str, user_email: Optional[str]
    ) -> MessageResponse:
        """
        Like the blog for `user_email`, or unlike it if already liked.

        Raises:
            ValidationError: no user email (→ 400)
            NotFoundError:   unknown blog (→ 404)
            DatabaseError:   the membership kept changing under us for
                             LIKE_TOGGLE_ATTEMPTS rounds
        """
        if not user_email:
            raise ValidationError(message="User email is required.", field="userEmail")

        oid = parse_object_id(blog_id, resource="blog")

        for attempt in range(1, self.LIKE_TOGGLE_ATTEMPTS + 1):
            with database_errors("Failed to update like status.", blog_id=blog_id):
                blog = await db[BLOGS].find_one({"_id": oid}, {"likedBy": 1})
                if blog is None:
                    raise NotFoundError(
                        resource="blog", resource_id=blog_id, message="Blog not found."
                    )

                liked_by = blog.get("likedBy")
                has_liked = isinstance(liked_by, list) and user_email in liked_by
                if not isinstance(liked_by, list):
                    # null or missing on older documents; $push fails on null
                    guard = {"_id": oid, "likedBy": {"$not": {"$type": "array"}}}
                    update = {"$set": {"likedBy": [user_email], "likes": 1}}
                elif has_liked:
                    guard = {"_id": oid, "likedBy": user_email}
                    update = {"$inc": {"likes": -1}, "$pull": {"likedBy": user_email}}
                else:
                    guard = {"_id": oid, "likedBy": {"$ne": user_email}}
                    update = {"$inc": {"likes": 1}, "$push": {"likedBy": user_email}}

                result = await db[BLOGS].update_one(guard, update)

            if result.matched_count:
                logger.info(
                    "Blog %s %s by %s",
                    blog_id,
                    "unliked" if has_liked else "liked",
                    user_email,
                )
                return MessageResponse(message="Like status updated successfully.")

            logger.debug("Like toggle on blog %s lost a race (attempt %d)", blog_id, attempt)

        raise DatabaseError(
            message="Failed to update like status.",
            context={"blog_id": blog_id, "attempts": self.LIKE_TOGGLE_ATTEMPTS},
        )

    async def total_likes(self, db: AsyncIOMotorDatabase) -> int:
        """Sum of `likes` across every blog (0 for an empty collection)."""
        pipeline = [{"$group": {"_id": None, "totalLikes": {"$sum": "$likes"}}}]
        with database_errors("Failed to fetch total likes count"):
            rows = await db[BLOGS].aggregate(pipeline).to_list(length=1)
        return rows[0]["totalLikes"] if rows else 0

    async def user_blogs(self, db: AsyncIOMotorDatabase, email: str) -> UserBlogsResponse:
        """An author's blogs, newest first, each with its comment count."""
        with database_errors("Failed to fetch user blogs", email=email):
            blogs = await (
                db[BLOGS].find({"email": email}).sort("createdAt", DESCENDING).to_list(length=None)
            )
            comment_counts = await asyncio.gather(
                *(
                    db[COMMENTS].count_documents({"blogId": str(blog["_id"])})
                    for blog in blogs
                )
            )

        for blog, comment_count in zip(blogs, comment_counts):
            with_like_defaults(blog)
            blog["commentCount"] = comment_count

        return UserBlogsResponse(blogs=serialize_documents(blogs), total_blogs=len(blogs))


blog_service = BlogService()
