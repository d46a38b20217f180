"""
Idea Canvas Backend — Shared Pydantic Schemas
==============================================

What:  Base model and the response envelopes reused by several resources
       (counts, driver write results, errors, health).
How:   The wire format is camelCase, matching the field names stored in
       MongoDB. Python attributes stay snake_case; CamelModel generates the
       aliases and accepts either spelling on input.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for models whose JSON keys are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Driver Result Envelopes
# ══════════════════════════════════════════════════════════════════════════


class CountResponse(BaseModel):
    count: int = Field(description="Number of matching documents (or summed value)")


class InsertResult(CamelModel):
    acknowledged: bool
    inserted_id: Optional[str] = Field(default=None, description="ObjectId of the new document")


class UpdateResult(CamelModel):
    acknowledged: bool
    matched_count: int
    modified_count: int
    upserted_id: Optional[str] = None
    upserted_count: int = 0


class DeleteResult(CamelModel):
    acknowledged: bool
    deleted_count: int


class MessageResponse(BaseModel):
    """`{success, message}` acknowledgement used by most write routes."""
    success: bool = True
    message: str


# ══════════════════════════════════════════════════════════════════════════
# Error / Health
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "success": false,
            "error": "not_found",
            "message": "Blog not found",
            "request_id": "1a2b3c4d"
        }
    """
    success: bool = False
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="OK when the process is serving requests")
    timestamp: datetime = Field(description="Server time (UTC)")
    uptime: float = Field(description="Seconds since the service started")
    version: str
    database: str = Field(description="MongoDB connectivity: connected, disconnected")


class RootResponse(BaseModel):
    message: str
    version: str
    features: Dict[str, str]
