"""Comment request/response schemas."""

from typing import Optional

from pydantic import ConfigDict

from ideacanvas.schemas.common import CamelModel, InsertResult


class CommentCreate(CamelModel):
    """Body of POST /comments. Extra keys (comment text, user name, photo) are stored as sent."""

    model_config = ConfigDict(extra="allow")

    blog_id: Optional[str] = None
    user_email: Optional[str] = None


class CommentCreateResponse(CamelModel):
    success: bool = True
    result: InsertResult
