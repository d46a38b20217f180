"""
Idea Canvas Backend — Profile Route Handlers
=============================================

Route Inventory:
    GET  /profile/{email}         profile document
    POST /profile                 create or update profile fields
    PUT  /profile/image           set photoURL (creates the profile if needed)
    GET  /profile/{email}/stats   blog / wishlist / comment / like totals
"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from ideacanvas.database import get_database
from ideacanvas.schemas.common import ErrorResponse
from ideacanvas.schemas.profile import (
    ProfileImageUpdate,
    ProfileResponse,
    ProfileSaveResponse,
    ProfileUpsert,
    UserStatsResponse,
)
from ideacanvas.services.profile_service import profile_service

router = APIRouter(prefix="/profile", tags=["Profiles"])


@router.get(
    "/{email}",
    response_model=ProfileResponse,
    responses={404: {"description": "Profile not found", "model": ErrorResponse}},
    summary="Get a user's profile",
)
async def get_profile(
    email: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ProfileResponse:
    return ProfileResponse(profile=await profile_service.get_profile(db, email))


@router.post(
    "",
    response_model=ProfileSaveResponse,
    responses={400: {"description": "Email missing", "model": ErrorResponse}},
    summary="Create or update a profile",
)
async def save_profile(
    body: ProfileUpsert,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ProfileSaveResponse:
    return await profile_service.save_profile(db, body)


@router.put(
    "/image",
    response_model=ProfileSaveResponse,
    responses={400: {"description": "Email or photoURL missing", "model": ErrorResponse}},
    summary="Update a profile picture",
)
async def update_profile_image(
    body: ProfileImageUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ProfileSaveResponse:
    return await profile_service.update_image(db, body)


@router.get("/{email}/stats", response_model=UserStatsResponse, summary="Activity totals for a user")
async def profile_stats(
    email: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserStatsResponse:
    return await profile_service.user_stats(db, email)
