"""
Review schemas.

Dependencies: pydantic
System role: Review API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CreateReviewRequest(BaseModel):
    rating: int
    comment: str = Field(default="", max_length=5000)


class ReviewResponse(BaseModel):
    id: uuid.UUID
    resource_id: uuid.UUID
    user_id: uuid.UUID
    user_name: str
    rating: int
    comment: str
    created_at: datetime


class ReviewListResponse(BaseModel):
    items: list[ReviewResponse]
    total: int
    average_rating: float | None
