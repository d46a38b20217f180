"""
Idea Canvas Backend — Newsletter Schemas
=========================================

What:  Body of POST /api/subscribe and its 201 response.

Every field is optional at the schema level: a missing or empty value is
answered with 400 "All fields are required." by the service rather than
FastAPI's 422.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class SubscribeRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[Union[int, str]] = Field(default=None, description="Subscriber age as entered")
    country: Optional[str] = None


class SubscribeResponse(BaseModel):
    message: str = "Successfully subscribed!"
    id: str = Field(description="ObjectId of the new subscriber document")
