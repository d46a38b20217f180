"""
Idea Canvas Backend — Blog Schemas
===================================

What:  Request bodies for creating, editing and liking blogs, plus the
       list and per-author response envelopes.
How:   Blog bodies allow extra keys; whatever the client sends beyond the
       known fields is stored on the document as-is.
"""

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from ideacanvas.schemas.common import CamelModel


class BlogCreate(CamelModel):
    """
    Body of POST /addBlog.

    Known fields are untyped: values are stored exactly as sent (a string
    `likes` or a numeric `title` included). The model only maps the
    camelCase keys and carries the extras.
    """

    model_config = ConfigDict(extra="allow")

    title: Any = None
    image: Any = None
    category: Any = None
    short_description: Any = None
    long_description: Any = None
    email: Any = Field(default=None, description="Author email")
    likes: Any = None
    liked_by: Any = None


class BlogUpdate(CamelModel):
    """
    Body of PUT /blog/{id}.

    All five fields are written on every update; an omitted field is
    stored as null.
    """

    title: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None


class LikeRequest(CamelModel):
    user_email: Optional[str] = None


class BlogListResponse(CamelModel):
    """GET /blogs: one page of blogs plus the size of the filtered set."""
    blogs: List[Dict[str, Any]]
    total_blogs: int


class UserBlogsResponse(CamelModel):
    success: bool = True
    blogs: List[Dict[str, Any]]
    total_blogs: int
