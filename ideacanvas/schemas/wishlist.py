"""Wishlist request/response schemas."""

from typing import Optional

from ideacanvas.schemas.common import CamelModel


class WishlistCreate(CamelModel):
    blog_id: Optional[str] = None
    title: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    user_email: Optional[str] = None


class WishlistAddResponse(CamelModel):
    """`success` is False (with a message) when the blog is already saved."""
    success: bool
    message: Optional[str] = None
    inserted_id: Optional[str] = None
