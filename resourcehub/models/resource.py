"""
Resource domain schemas.

Request/response schemas for browsing, uploading and moderating resources.

Dependencies: pydantic
System role: Resource API contracts
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class CreateResourceRequest(BaseModel):
    """
    Request schema for creating a resource after its file was uploaded.

    file_key and thumbnail_key are keys returned by the presign endpoint.
    Tags may be a list or a comma-separated string.
    """

    title: str = Field(..., max_length=255)
    description: str = Field(..., max_length=20000)
    price: Decimal = Field(..., max_digits=10, decimal_places=2)
    category: str = Field(..., max_length=64)
    tags: list[str] | str = Field(default_factory=list)
    file_key: str = Field(..., min_length=1, max_length=1024)
    file_name: str = Field(..., min_length=1, max_length=255)
    file_type: str = Field(default="application/octet-stream", max_length=255)
    file_size: int = Field(..., gt=0)
    thumbnail_key: str | None = Field(None, max_length=1024)


class UpdateResourceRequest(BaseModel):
    """Partial metadata update by the owning creator."""

    title: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=20000)
    price: Decimal | None = Field(None, max_digits=10, decimal_places=2)
    category: str | None = Field(None, max_length=64)
    tags: list[str] | str | None = None
    thumbnail_key: str | None = Field(None, max_length=1024)


class UploadUrlRequest(BaseModel):
    """Presign request for a resource file or its thumbnail."""

    kind: Literal["resources", "thumbnails"] = "resources"
    filename: str = Field(..., min_length=1, max_length=255)
    content_type: str = Field(default="application/octet-stream", max_length=255)
    file_size: int = Field(..., gt=0)


class ResourceResponse(BaseModel):
    """Response schema for a resource with read-time defaults applied."""

    id: uuid.UUID
    title: str
    description: str
    price: float
    category: str
    creator_id: uuid.UUID
    creator_name: str
    tags: list[str]
    thumbnail: str | None
    file_name: str | None
    file_type: str | None
    file_size: int | None
    status: Literal["pending", "approved", "rejected"]
    downloads: int
    views: int
    featured: bool
    created_at: datetime
    updated_at: datetime


class ResourceDetailResponse(ResourceResponse):
    """Resource with rating summary and the caller's access."""

    average_rating: float | None
    review_count: int
    has_access: bool = False


class DownloadResponse(BaseModel):
    """Presigned download link for a resource file."""

    url: str
    file_name: str
    expires_at: datetime


class FeatureRequest(BaseModel):
    featured: bool = True
