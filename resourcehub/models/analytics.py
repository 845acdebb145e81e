"""
Analytics and dashboard schemas.

Dependencies: pydantic
System role: Analytics API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel


class AnalyticsEventResponse(BaseModel):
    id: uuid.UUID
    event_type: str
    user_id: uuid.UUID | None
    resource_id: uuid.UUID | None
    data: dict
    created_at: datetime


class ResourceStats(BaseModel):
    id: uuid.UUID
    title: str
    views: int
    downloads: int
    status: str


class SaleResponse(BaseModel):
    id: uuid.UUID
    resource_id: uuid.UUID | None
    resource_title: str
    amount: float
    created_at: datetime


class CreatorAnalyticsResponse(BaseModel):
    """Creator activity within a reporting period."""

    period: str
    start: datetime
    end: datetime
    resources: list[ResourceStats]
    purchases: list[SaleResponse]
    revenue: float
    events: list[AnalyticsEventResponse]


class DailyRevenue(BaseModel):
    date: str
    revenue: float


class AdminDashboardResponse(BaseModel):
    """Headline numbers for the admin dashboard."""

    total_resources: int
    pending_resources: int
    total_users: int
    total_creators: int
    total_downloads: int
    open_reports: int
    total_revenue: float
    revenue_last_7_days: list[DailyRevenue]


class AdminAnalyticsResponse(BaseModel):
    """Platform totals and activity within a reporting period."""

    period: str
    start: datetime
    end: datetime
    total_users: int
    new_users: int
    total_resources: int
    new_resources: int
    total_purchases: int
    new_purchases: int
    revenue: float
    events: list[AnalyticsEventResponse]
