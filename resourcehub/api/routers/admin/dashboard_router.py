"""
Admin dashboard endpoints.

Routes:
- GET /admin/dashboard - Headline numbers and last 7 days of revenue
- GET /admin/analytics - Platform activity within a period
"""

from fastapi import APIRouter, Depends, Query

from resourcehub.api.deps.dependencies import get_analytics_service
from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.application.services import AnalyticsService
from resourcehub.core.periods import Period
from resourcehub.models.analytics import AdminAnalyticsResponse, AdminDashboardResponse

router = APIRouter(tags=["admin"])


@router.get("/dashboard", response_model=AdminDashboardResponse)
@handle_service_errors
async def dashboard(
    analytics_service: AnalyticsService = Depends(get_analytics_service),
) -> AdminDashboardResponse:
    return AdminDashboardResponse(**await analytics_service.admin_dashboard())


@router.get("/analytics", response_model=AdminAnalyticsResponse)
@handle_service_errors
async def analytics(
    period: Period = Query(Period.MONTH),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
) -> AdminAnalyticsResponse:
    return AdminAnalyticsResponse(**await analytics_service.admin_analytics(period))
