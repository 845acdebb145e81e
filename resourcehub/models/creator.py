"""
Creator schemas.

Request/response schemas for creator onboarding, dashboards and the
admin creator listing.

Dependencies: pydantic
System role: Creator API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from resourcehub.models.user import UserResponse


class CreatorApplicationRequest(BaseModel):
    """Request schema for applying to become a creator."""

    portfolio_url: str | None = Field(None, max_length=1024)
    experience: str | None = Field(None, max_length=5000)
    application_text: str | None = Field(None, max_length=5000)
    plan: Literal["free", "basic", "premium", "professional"] = "free"


class CreatorApplicationResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    portfolio_url: str | None
    experience: str | None
    application_text: str | None
    plan: str
    status: Literal["pending", "approved", "rejected"]
    created_at: datetime


class CreatorSummaryResponse(UserResponse):
    """Creator row in the admin listing with aggregated stats."""

    resource_count: int
    downloads: int
    revenue: float


class CreatorDashboardResponse(BaseModel):
    """Headline numbers for a creator's own dashboard."""

    total_resources: int
    approved_resources: int
    pending_resources: int
    rejected_resources: int
    total_downloads: int
    total_views: int
    gross_revenue: float
    net_earnings: float
    commission_rate: float
    plan: str
    upload_limit: int | None
