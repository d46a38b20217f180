"""Notification response schemas."""

from ideacanvas.schemas.common import CamelModel


class ReadAllResponse(CamelModel):
    success: bool = True
    message: str
    modified_count: int
