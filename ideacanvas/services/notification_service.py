"""
Idea Canvas Backend — Notification Service
===========================================

What:  The shared notification feed. Notifications are not addressed to a
       user; every logged-in user sees the same feed and read state.
Who:   Feed routes, and NewsletterService (writes a notification for every
       new subscriber).
"""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from ideacanvas.database import NOTIFICATIONS, parse_object_id, serialize_documents
from ideacanvas.exceptions import NotFoundError
from ideacanvas.schemas.common import MessageResponse
from ideacanvas.schemas.notification import ReadAllResponse
from ideacanvas.services.base import database_errors, utcnow

logger = logging.getLogger(__name__)

NEW_SUBSCRIBER = "new_subscriber"


class NotificationService:
    """
    Feed operations over the `notifications` collection.

    Read state is global: marking a notification read marks it for
    everyone. Entries are only created by other services (currently the
    newsletter subscribe flow), never through the API.
    """

    FEED_LIMIT = 50

    async def list_recent(self, db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
        """The FEED_LIMIT newest notifications, read or not."""
        with database_errors("Failed to fetch notifications"):
            cursor = (
                db[NOTIFICATIONS]
                .find({})
                .sort("createdAt", DESCENDING)
                .limit(self.FEED_LIMIT)
            )
            notifications = await cursor.to_list(length=self.FEED_LIMIT)
        return serialize_documents(notifications)

    async def mark_read(self, db: AsyncIOMotorDatabase, notification_id: str) -> MessageResponse:
        """
        Set `read` and stamp `readAt` on one notification.

        Raises:
            InvalidIdError: malformed id (→ 400)
            NotFoundError:  no such notification (→ 404)
        """
        oid = parse_object_id(notification_id, resource="notification")

        with database_errors("Failed to mark notification as read", notification_id=notification_id):
            result = await db[NOTIFICATIONS].update_one(
                {"_id": oid},
                {"$set": {"read": True, "readAt": utcnow()}},
            )

        if result.matched_count == 0:
            raise NotFoundError(resource="notification", resource_id=notification_id)
        return MessageResponse(message="Notification marked as read")

    async def mark_all_read(self, db: AsyncIOMotorDatabase) -> ReadAllResponse:
        """Mark every unread notification read; reports how many changed."""
        with database_errors("Failed to mark all notifications as read"):
            result = await db[NOTIFICATIONS].update_many(
                {"read": False},
                {"$set": {"read": True, "readAt": utcnow()}},
            )

        logger.info("Marked %d notifications as read", result.modified_count)
        return ReadAllResponse(
            message="All notifications marked as read",
            modified_count=result.modified_count,
        )

    async def unread_count(self, db: AsyncIOMotorDatabase) -> int:
        with database_errors("Failed to fetch unread count"):
            return await db[NOTIFICATIONS].count_documents({"read": False})

    async def notify_new_subscriber(
        self, db: AsyncIOMotorDatabase, subscriber: Dict[str, Any]
    ) -> None:
        """Insert the unread "New Subscriber!" feed entry for `subscriber`."""
        notification = {
            "title": "New Subscriber! 🎉",
            "message": (
                f"{subscriber['name']} from {subscriber['country']} "
                "just subscribed to our newsletter"
            ),
            "type": NEW_SUBSCRIBER,
            "subscriberData": subscriber,
            "read": False,
            "createdAt": utcnow(),
        }
        await db[NOTIFICATIONS].insert_one(notification)


notification_service = NotificationService()
