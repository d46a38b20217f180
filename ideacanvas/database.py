"""
Idea Canvas Backend — MongoDB Client Management
================================================

What:  Async Motor client, database dependency, index bootstrap and
       document helpers shared by every service.
How:   One AsyncIOMotorClient per process, created lazily on first use.
       Route handlers receive the database through the get_database()
       dependency, which tests override with a mock.
When:  Client is created on first request (or at startup ping); closed
       during application shutdown.

Collections:
    blogs                   blog posts, likes and likedBy
    wishlist                saved blogs per user email
    comments                comments keyed by blogId (string)
    newsletter_subscribers  newsletter sign-ups
    notifications           feed entries shown to every logged-in user
    user_profiles           profile data keyed by email
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ideacanvas.config import settings
from ideacanvas.exceptions import InvalidIdError

logger = logging.getLogger(__name__)

# ── Collection Names ──────────────────────────────────────────────────────
BLOGS = "blogs"
WISHLIST = "wishlist"
COMMENTS = "comments"
NEWSLETTER_SUBSCRIBERS = "newsletter_subscribers"
NOTIFICATIONS = "notifications"
USER_PROFILES = "user_profiles"

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """Return the process-wide Motor client, creating it on first call."""
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(
            settings.mongodb_connection_uri,
            maxPoolSize=settings.mongodb_max_pool_size,
            serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
            tz_aware=True,
        )
        logger.info("MongoDB client created for database '%s'", settings.mongodb_database)
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that provides the application database.

    Example usage in a route:
        @router.get("/blogs/count")
        async def count(db: AsyncIOMotorDatabase = Depends(get_database)):
            ...
    """
    return get_client()[settings.mongodb_database]


@retry(
    retry=retry_if_exception_type((ConnectionFailure, ServerSelectionTimeoutError)),
    stop=stop_after_attempt(settings.retry_max_attempts),
    wait=wait_exponential_jitter(
        initial=settings.retry_min_wait,
        max=settings.retry_max_wait,
        jitter=1,
    ),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def ping_database(db: AsyncIOMotorDatabase) -> None:
    """
    Round-trip a `ping` command to the server.

    Retried with exponential backoff on connection failures; the last
    failure is re-raised once attempts are exhausted.
    """
    await db.command("ping")


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Create the indexes the routes rely on. Idempotent.

    The unique indexes on wishlist (userEmail, blogId), newsletter email
    and profile email back the duplicate checks done in the services.
    """
    await db[BLOGS].create_index([("createdAt", DESCENDING)])
    await db[BLOGS].create_index([("category", ASCENDING), ("createdAt", DESCENDING)])
    await db[BLOGS].create_index([("email", ASCENDING)])
    await db[WISHLIST].create_index(
        [("userEmail", ASCENDING), ("blogId", ASCENDING)], unique=True
    )
    await db[COMMENTS].create_index([("blogId", ASCENDING), ("createdAt", DESCENDING)])
    await db[COMMENTS].create_index([("userEmail", ASCENDING)])
    await db[NEWSLETTER_SUBSCRIBERS].create_index("email", unique=True)
    await db[NOTIFICATIONS].create_index([("read", ASCENDING), ("createdAt", DESCENDING)])
    await db[USER_PROFILES].create_index("email", unique=True)
    logger.info("MongoDB indexes ensured")


def close_client() -> None:
    """Close the Motor client and drop the cached instance."""
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB client closed")


# ── Document Helpers ──────────────────────────────────────────────────────

def parse_object_id(raw_id: str, resource: str = "resource") -> ObjectId:
    """Convert a path parameter to an ObjectId or raise InvalidIdError (400)."""
    try:
        return ObjectId(raw_id)
    except (InvalidId, TypeError):
        raise InvalidIdError(resource=resource, raw_id=raw_id)


def serialize_value(value: Any) -> Any:
    """Recursively render ObjectIds as hex strings; other values pass through."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """JSON-ready copy of a MongoDB document (`_id` becomes a string)."""
    return serialize_value(document)


def serialize_documents(documents: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_document(document) for document in documents]


def insert_result(result) -> Dict[str, Any]:
    """Shape an InsertOneResult like the driver's JSON form."""
    return {
        "acknowledged": result.acknowledged,
        "insertedId": serialize_value(result.inserted_id),
    }


def update_result(result) -> Dict[str, Any]:
    """Shape an UpdateResult like the driver's JSON form."""
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedId": serialize_value(result.upserted_id),
        "upsertedCount": 1 if result.upserted_id is not None else 0,
    }


def delete_result(result) -> Dict[str, Any]:
    """Shape a DeleteResult like the driver's JSON form."""
    return {
        "acknowledged": result.acknowledged,
        "deletedCount": result.deleted_count,
    }
