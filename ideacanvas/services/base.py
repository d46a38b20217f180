"""
Idea Canvas Backend — Shared Service Helpers
=============================================

What:  Translation of driver failures into the application exception
       hierarchy, plus the UTC clock every service stamps documents with.
How:   Services wrap each database round-trip in `database_errors(...)`.
       A PyMongoError inside the block is logged with full context and
       re-raised as DatabaseError carrying the user-facing message given.
       Application exceptions (NotFoundError, ValidationError) pass through.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from pymongo.errors import PyMongoError

from ideacanvas.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@contextmanager
def database_errors(message: str, **context: Any) -> Iterator[None]:
    """
    Convert PyMongoError raised inside the block into DatabaseError.

    Example:
        with database_errors("Failed to fetch blogs", category=category):
            total = await db[BLOGS].count_documents(query)
    """
    try:
        yield
    except PyMongoError as e:
        logger.error("%s: %s | Context: %s", message, str(e), context, exc_info=True)
        raise DatabaseError(
            message=message,
            context={**context, "error_type": type(e).__name__},
        ) from e
