"""
Idea Canvas Backend — Profile Service
======================================

What:  User profiles keyed by email, and the per-user activity stats.
How:   Writes are upserts: saving a profile (or just its image) for an
       email that has no document yet creates one. `createdAt` is only
       written on that first insert.

Stats:
    blogs     blogs whose `email` is the user
    wishlist  wishlist items whose `userEmail` is the user
    comments  comments whose `userEmail` is the user
    likes     sum of `likes` over the user's blogs
"""

import asyncio
import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase

from ideacanvas.database import (
    BLOGS,
    COMMENTS,
    USER_PROFILES,
    WISHLIST,
    serialize_document,
    update_result,
)
from ideacanvas.exceptions import NotFoundError, ValidationError
from ideacanvas.schemas.common import UpdateResult
from ideacanvas.schemas.profile import (
    PROFILE_FIELDS,
    ProfileImageUpdate,
    ProfileSaveResponse,
    ProfileUpsert,
    UserStats,
    UserStatsResponse,
)
from ideacanvas.services.base import database_errors, utcnow

logger = logging.getLogger(__name__)


class ProfileService:

    async def get_profile(self, db: AsyncIOMotorDatabase, email: str) -> Dict[str, Any]:
        with database_errors("Failed to fetch profile", email=email):
            profile = await db[USER_PROFILES].find_one({"email": email})

        if profile is None:
            raise NotFoundError(resource="profile", resource_id=email)
        return serialize_document(profile)

    async def save_profile(
        self, db: AsyncIOMotorDatabase, body: ProfileUpsert
    ) -> ProfileSaveResponse:
        """
        Create or replace the profile text fields for `body.email`.

        Every field in PROFILE_FIELDS is written; missing ones become "".
        """
        if not body.email:
            raise ValidationError(message="Email is required", field="email")

        now = utcnow()
        profile_data: Dict[str, Any] = {"email": body.email}
        for field in PROFILE_FIELDS:
            profile_data[field] = getattr(body, field) or ""
        profile_data["updatedAt"] = now

        with database_errors("Failed to save profile", email=body.email):
            result = await db[USER_PROFILES].update_one(
                {"email": body.email},
                {"$set": profile_data, "$setOnInsert": {"createdAt": now}},
                upsert=True,
            )

        logger.info("Profile saved for %s (upserted=%s)", body.email, result.upserted_id is not None)
        return ProfileSaveResponse(
            message="Profile saved successfully",
            result=UpdateResult.model_validate(update_result(result)),
        )

    async def update_image(
        self, db: AsyncIOMotorDatabase, body: ProfileImageUpdate
    ) -> ProfileSaveResponse:
        if not body.email or not body.photo_url:
            raise ValidationError(message="Email and photoURL are required")

        with database_errors("Failed to update profile image", email=body.email):
            result = await db[USER_PROFILES].update_one(
                {"email": body.email},
                {"$set": {"photoURL": body.photo_url, "updatedAt": utcnow()}},
                upsert=True,
            )

        return ProfileSaveResponse(
            message="Profile image updated successfully",
            result=UpdateResult.model_validate(update_result(result)),
        )

    async def user_stats(self, db: AsyncIOMotorDatabase, email: str) -> UserStatsResponse:
        likes_pipeline = [
            {"$match": {"email": email}},
            {"$group": {"_id": None, "totalLikes": {"$sum": "$likes"}}},
        ]

        with database_errors("Failed to fetch user stats", email=email):
            blog_count, wishlist_count, comment_count, like_rows = await asyncio.gather(
                db[BLOGS].count_documents({"email": email}),
                db[WISHLIST].count_documents({"userEmail": email}),
                db[COMMENTS].count_documents({"userEmail": email}),
                db[BLOGS].aggregate(likes_pipeline).to_list(length=1),
            )

        return UserStatsResponse(
            stats=UserStats(
                blogs=blog_count,
                wishlist=wishlist_count,
                comments=comment_count,
                likes=like_rows[0]["totalLikes"] if like_rows else 0,
            )
        )


profile_service = ProfileService()
