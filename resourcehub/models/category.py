"""
Category schemas.

Dependencies: pydantic
System role: Category API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CreateCategoryRequest(BaseModel):
    """Request schema for creating a category. Slug is derived from name when omitted."""

    name: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=64)
    description: str = Field(default="", max_length=1024)
    icon: str = Field(default="folder", max_length=64)
    featured: bool = False


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=64)
    description: str | None = Field(None, max_length=1024)
    icon: str | None = Field(None, max_length=64)
    featured: bool | None = None


class CategoryResponse(BaseModel):
    id: uuid.UUID
    slug: str
    name: str
    description: str
    icon: str
    count: int
    featured: bool
    created_at: datetime
    updated_at: datetime
