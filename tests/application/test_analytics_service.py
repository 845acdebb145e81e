"""
Test suite for AnalyticsService.

Tests event persistence rules and the creator and admin reports.

System role: Verification of activity tracking and dashboards
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

from resourcehub.application.services.analytics_service import AnalyticsService
from resourcehub.boundary.db.CRUD import analytics_event_crud, purchase_crud, report_crud
from resourcehub.boundary.db.models import (
    AnalyticsEventType,
    PurchaseStatus,
    ReportStatus,
    ReportType,
    ResourceStatus,
    UserRole,
)
from resourcehub.configs import Settings
from resourcehub.configs.marketplace import MarketplaceSettings
from resourcehub.core.periods import Period


@pytest.fixture
def analytics_service(test_async_db, settings) -> AnalyticsService:
    return AnalyticsService(test_async_db, settings)


async def _sell(db, buyer, resource):
    return await purchase_crud.create(
        db,
        user_id=buyer.id,
        resource_id=resource.id,
        creator_id=resource.creator_id,
        resource_title=resource.title,
        amount=resource.price,
        status=PurchaseStatus.COMPLETED,
    )


class TestTrackEvent:
    """Test suite for AnalyticsService.track_event()."""

    async def test_event_should_persist_outside_development(
        self, analytics_service: AnalyticsService, test_async_db, make_user
    ) -> None:
        # Arrange
        user = await make_user()

        # Act
        await analytics_service.track_event(AnalyticsEventType.USER_LOGIN, user_id=user.id)

        # Assert
        events = await analytics_event_crud.get_all(test_async_db)
        assert len(events) == 1
        assert events[0].event_type == "user_login"
        assert events[0].data == {}

    async def test_development_should_skip_persistence(self, test_async_db) -> None:
        # Arrange
        service = AnalyticsService(test_async_db, Settings(environment="development"))

        # Act
        await service.track_event("custom_event", {"a": 1})

        # Assert
        assert await analytics_event_crud.get_all(test_async_db) == []

    async def test_development_flag_should_enable_persistence(self, test_async_db) -> None:
        settings = Settings(
            environment="development",
            marketplace=MarketplaceSettings(enable_dev_analytics=True),
        )
        await AnalyticsService(test_async_db, settings).track_event("custom_event")
        assert len(await analytics_event_crud.get_all(test_async_db)) == 1

    async def test_storage_failure_should_not_raise(
        self, analytics_service: AnalyticsService
    ) -> None:
        with patch.object(
            analytics_event_crud, "create", AsyncMock(side_effect=RuntimeError("db down"))
        ):
            await analytics_service.track_event(AnalyticsEventType.SEARCH, {"term": "x"})

    async def test_failed_insert_should_leave_session_usable(
        self, analytics_service: AnalyticsService, test_async_db, make_user
    ) -> None:
        # Arrange
        user = await make_user()

        # Act
        await analytics_service.track_event(AnalyticsEventType.SEARCH, {"bad": object()})
        await analytics_service.track_event(AnalyticsEventType.USER_LOGIN, user_id=user.id)
        await test_async_db.commit()

        # Assert
        events = await analytics_event_crud.get_all(test_async_db)
        assert [e.event_type for e in events] == ["user_login"]
        assert await purchase_crud.count(test_async_db) == 0


class TestCreatorAnalytics:
    """Test suite for AnalyticsService.creator_analytics()."""

    async def test_should_report_resources_sales_and_revenue(
        self, analytics_service: AnalyticsService, make_user, make_creator, make_resource, test_async_db
    ) -> None:
        # Arrange
        creator = await make_creator()
        resource = await make_resource(creator, price="15.00", views=4)
        await _sell(test_async_db, await make_user(), resource)
        await _sell(test_async_db, await make_user(), resource)
        await analytics_service.track_event("dashboard_open", user_id=creator.id)

        # Act
        report = await analytics_service.creator_analytics(creator.id, Period.WEEK)

        # Assert
        assert report["period"] == "week"
        assert report["resources"][0]["views"] == 4
        assert len(report["purchases"]) == 2
        assert report["revenue"] == Decimal("30.00")
        assert [e["event_type"] for e in report["events"]] == ["dashboard_open"]


class TestAdminReports:
    """Test suite for admin_analytics() and admin_dashboard()."""

    async def test_admin_analytics_should_count_totals(
        self, analytics_service: AnalyticsService, make_user, make_creator, make_resource, test_async_db
    ) -> None:
        # Arrange
        creator = await make_creator()
        resource = await make_resource(creator, price="2.00")
        await _sell(test_async_db, await make_user(), resource)

        # Act
        report = await analytics_service.admin_analytics(Period.DAY)

        # Assert
        assert report["total_users"] == 2
        assert report["new_users"] == 2
        assert report["total_resources"] == 1
        assert report["new_purchases"] == 1
        assert report["revenue"] == Decimal("2.00")

    async def test_dashboard_should_zero_fill_seven_days(
        self, analytics_service: AnalyticsService, make_user, make_creator, make_resource, test_async_db
    ) -> None:
        # Arrange
        creator = await make_creator()
        await make_resource(creator, status=ResourceStatus.PENDING)
        paid = await make_resource(creator, price="10.00", downloads=5)
        buyer = await make_user()
        await make_user(role=UserRole.ADMIN)
        await _sell(test_async_db, buyer, paid)
        await report_crud.create(
            test_async_db,
            user_id=buyer.id,
            type=ReportType.OTHER,
            reason="spam",
            description="",
            status=ReportStatus.PENDING,
        )

        # Act
        dashboard = await analytics_service.admin_dashboard(datetime.now(timezone.utc))

        # Assert
        assert dashboard["total_resources"] == 2
        assert dashboard["pending_resources"] == 1
        assert dashboard["total_users"] == 3
        assert dashboard["total_creators"] == 1
        assert dashboard["total_downloads"] == 5
        assert dashboard["open_reports"] == 1
        assert dashboard["total_revenue"] == Decimal("10.00")
        days = dashboard["revenue_last_7_days"]
        assert len(days) == 7
        assert days[-1]["revenue"] == Decimal("10.00")
        assert all(day["revenue"] == Decimal("0.00") for day in days[:-1])
