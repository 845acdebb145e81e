"""
Common response models and utilities.

Generic response wrappers and error schemas.

Dependencies: pydantic
System role: Common API response structures
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """Error response schema."""

    detail: str = Field(description="Error message")


class StatusResponse(BaseModel):
    """Acknowledgement for actions without a resource body."""

    success: bool = True
    message: str


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic offset-paginated response wrapper."""

    items: list[T]
    total: int
    limit: int
    offset: int
    has_more: bool = False


class PresignedUploadRequest(BaseModel):
    """Request schema for a presigned upload URL."""

    filename: str = Field(..., min_length=1, max_length=255, description="Original filename")
    content_type: str = Field(
        default="application/octet-stream",
        max_length=255,
        description="MIME type sent with the upload",
    )
    file_size: int = Field(..., gt=0, description="File size in bytes")


class PresignedUploadResponse(BaseModel):
    """Presigned PUT URL plus the key to send back once uploaded."""

    upload_url: str
    key: str
    expires_at: datetime
    public_url: str | None = None
