"""
Idea Canvas Backend — Profile Schemas
======================================

What:  Bodies for the profile upsert and profile image routes, and the
       profile / stats response envelopes.
"""

from typing import Any, Dict, Optional

from pydantic import Field

from ideacanvas.schemas.common import CamelModel, UpdateResult

# Profile text fields; each defaults to "" when the client leaves it out
PROFILE_FIELDS = ("name", "bio", "location", "website", "twitter", "github", "linkedin")


class ProfileUpsert(CamelModel):
    email: Optional[str] = None
    name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    twitter: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None


class ProfileImageUpdate(CamelModel):
    email: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoURL")


class ProfileResponse(CamelModel):
    success: bool = True
    profile: Dict[str, Any]


class ProfileSaveResponse(CamelModel):
    success: bool = True
    message: str
    result: UpdateResult


class UserStats(CamelModel):
    blogs: int = Field(description="Blogs authored by the user")
    wishlist: int = Field(description="Blogs in the user's wishlist")
    comments: int = Field(description="Comments posted by the user")
    likes: int = Field(description="Likes received across the user's blogs")


class UserStatsResponse(CamelModel):
    success: bool = True
    stats: UserStats
