"""
Idea Canvas Backend — Wishlist Service
=======================================

What:  Saved-blog list per user email. A (blogId, userEmail) pair is
       stored at most once; re-adding reports "Already in wishlist".
How:   The lookup answers the common case; the unique
       (userEmail, blogId) index settles two concurrent adds, the loser
       getting the same "Already in wishlist" answer.
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from ideacanvas.database import (
    WISHLIST,
    delete_result,
    parse_object_id,
    serialize_documents,
    serialize_value,
)
from ideacanvas.schemas.common import DeleteResult
from ideacanvas.schemas.wishlist import WishlistAddResponse, WishlistCreate
from ideacanvas.services.base import database_errors, utcnow

logger = logging.getLogger(__name__)

ALREADY_IN_WISHLIST = "Already in wishlist"


class WishlistService:
    """
    Wishlist operations over the `wishlist` collection.

    Responsibilities:
        - add_item():    save a blog for a user, once
        - list_items():  a user's saved blogs
        - count_items(): size of the whole collection
        - remove_item(): delete one saved entry by its own `_id`
    """

    async def add_item(self, db: AsyncIOMotorDatabase, item: WishlistCreate) -> WishlistAddResponse:
        """
        Save `item` stamped with `addedAt`.

        What:    Returns success=False (not an error status) when the pair
                 is already saved, matching what the frontend expects.
        Raises:
            DatabaseError: lookup or insert failed (→ 500)
        """
        with database_errors("Failed to add to wishlist", blog_id=item.blog_id):
            existing = await db[WISHLIST].find_one(
                {"blogId": item.blog_id, "userEmail": item.user_email}
            )
            if existing:
                return WishlistAddResponse(success=False, message=ALREADY_IN_WISHLIST)

            document = item.model_dump(by_alias=True)
            document["addedAt"] = utcnow()
            try:
                result = await db[WISHLIST].insert_one(document)
            except DuplicateKeyError:
                # A concurrent add for the same pair won the insert
                return WishlistAddResponse(success=False, message=ALREADY_IN_WISHLIST)

        logger.info("Blog %s added to wishlist of %s", item.blog_id, item.user_email)
        return WishlistAddResponse(success=True, inserted_id=serialize_value(result.inserted_id))

    async def list_items(self, db: AsyncIOMotorDatabase, email: Optional[str]) -> List[Dict[str, Any]]:
        """Items saved by `email`; no email means an empty list, not every item."""
        if not email:
            return []
        with database_errors("Failed to fetch", email=email):
            items = await db[WISHLIST].find({"userEmail": email}).to_list(length=None)
        return serialize_documents(items)

    async def count_items(self, db: AsyncIOMotorDatabase) -> int:
        with database_errors("Failed to fetch wishlist count"):
            return await db[WISHLIST].count_documents({})

    async def remove_item(self, db: AsyncIOMotorDatabase, item_id: str) -> DeleteResult:
        """
        Delete by wishlist `_id`. An unknown id reports deletedCount 0.

        Raises:
            InvalidIdError: `item_id` is not an ObjectId (→ 400)
        """
        oid = parse_object_id(item_id, resource="wishlist item")
        with database_errors("Failed to remove from wishlist", item_id=item_id):
            result = await db[WISHLIST].delete_one({"_id": oid})
        return DeleteResult.model_validate(delete_result(result))


wishlist_service = WishlistService()
