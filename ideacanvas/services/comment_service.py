"""Comment storage and per-blog listing."""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from ideacanvas.database import COMMENTS, insert_result, serialize_documents
from ideacanvas.schemas.comment import CommentCreate, CommentCreateResponse
from ideacanvas.schemas.common import InsertResult
from ideacanvas.services.base import database_errors, utcnow

logger = logging.getLogger(__name__)


class CommentService:
    """Comments over the `comments` collection. Comments are never edited or deleted."""

    async def add_comment(
        self, db: AsyncIOMotorDatabase, comment: CommentCreate
    ) -> CommentCreateResponse:
        """
        Store the comment as sent (extra keys included), stamped with `createdAt`.

        Raises:
            DatabaseError: insert failed (→ 500)
        """
        document = comment.model_dump(by_alias=True, exclude_unset=True)
        document["createdAt"] = utcnow()

        with database_errors("Failed to add comment", blog_id=comment.blog_id):
            result = await db[COMMENTS].insert_one(document)

        logger.info("Comment %s added to blog %s", result.inserted_id, comment.blog_id)
        return CommentCreateResponse(result=InsertResult.model_validate(insert_result(result)))

    async def count_comments(self, db: AsyncIOMotorDatabase) -> int:
        with database_errors("Failed to fetch comment count"):
            return await db[COMMENTS].count_documents({})

    async def list_for_blog(self, db: AsyncIOMotorDatabase, blog_id: str) -> List[Dict[str, Any]]:
        # blogId is stored as the blog's hex string, not an ObjectId
        with database_errors("Failed to fetch comments", blog_id=blog_id):
            cursor = db[COMMENTS].find({"blogId": blog_id}).sort("createdAt", DESCENDING)
            comments = await cursor.to_list(length=None)
        return serialize_documents(comments)


comment_service = CommentService()
