"""
Idea Canvas Backend — Health Check and Root Routes
===================================================

What:  Liveness endpoint for monitoring / load balancer probes, and the
       API info document served at "/".
How:   /health always answers 200 with status "OK" while the process is
       serving; MongoDB reachability is reported alongside it so a probe
       can tell "up but disconnected" apart from "up".
"""

import logging
import time

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from ideacanvas import __version__
from ideacanvas.database import get_database
from ideacanvas.schemas.common import HealthResponse, RootResponse
from ideacanvas.services.base import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(db: AsyncIOMotorDatabase = Depends(get_database)) -> HealthResponse:
    """
    Check database:
        A single `ping` command with no retry; the driver's server
        selection timeout bounds how long this can take.
    """
    db_status = "connected"
    try:
        await db.command("ping")
    except PyMongoError as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status="OK",
        timestamp=utcnow(),
        uptime=round(time.time() - _start_time, 2),
        version=__version__,
        database=db_status,
    )


@router.get("/", response_model=RootResponse, summary="API information")
async def root() -> RootResponse:
    return RootResponse(
        message="Welcome to Idea Canvas Blogs API",
        version=__version__,
        features={
            "notifications": "All logged in users can see new subscriber notifications",
            "blogs": "Full CRUD operations",
            "newsletter": "Subscribe with notifications",
        },
    )
