"""
Idea Canvas Backend — Newsletter Service
=========================================

What:  Newsletter subscription and the subscriber listing.

Subscribe flow (POST /api/subscribe):
    1. name, email, age and country must all be present and non-empty
    2. an email may subscribe once (checked, and backed by a unique index)
    3. insert the subscriber with `subscribedAt`
    4. insert a "new_subscriber" notification into the shared feed
"""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from ideacanvas.database import NEWSLETTER_SUBSCRIBERS, serialize_documents, serialize_value
from ideacanvas.exceptions import ValidationError
from ideacanvas.schemas.newsletter import SubscribeRequest, SubscribeResponse
from ideacanvas.services.base import database_errors, utcnow
from ideacanvas.services.notification_service import notification_service

logger = logging.getLogger(__name__)

ALREADY_SUBSCRIBED = "This email is already subscribed."


class NewsletterService:

    async def list_subscribers(self, db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
        with database_errors("Internal server error"):
            subscribers = await db[NEWSLETTER_SUBSCRIBERS].find({}).to_list(length=None)
        return serialize_documents(subscribers)

    async def subscribe(self, db: AsyncIOMotorDatabase, request: SubscribeRequest) -> SubscribeResponse:
        """
        Raises:
            ValidationError: a field is missing/empty, or the email is
                             already subscribed (→ 400)
            DatabaseError:   insert failed (→ 500)
        """
        if not (request.name and request.email and request.age and request.country):
            raise ValidationError(message="All fields are required.")

        subscriber = {
            "name": request.name,
            "email": request.email,
            "age": request.age,
            "country": request.country,
        }

        with database_errors("An error occurred during subscription.", email=request.email):
            existing = await db[NEWSLETTER_SUBSCRIBERS].find_one({"email": request.email})
            if existing:
                raise ValidationError(message=ALREADY_SUBSCRIBED, field="email")

            try:
                result = await db[NEWSLETTER_SUBSCRIBERS].insert_one(
                    {**subscriber, "subscribedAt": utcnow()}
                )
            except DuplicateKeyError:
                # Lost a race with a concurrent subscribe for the same email
                raise ValidationError(message=ALREADY_SUBSCRIBED, field="email")

            await notification_service.notify_new_subscriber(db, subscriber)

        logger.info("New newsletter subscriber from %s", request.country)
        return SubscribeResponse(id=serialize_value(result.inserted_id))


newsletter_service = NewsletterService()
