"""
Analytics service orchestrator.

Records activity events and builds creator and admin dashboards.
Event tracking is fire-and-forget: failures are logged, never raised.

Dependencies: resourcehub.boundary.db.CRUD, resourcehub.core.periods
System role: Activity tracking and reporting use cases
"""

import logging
from datetime import datetime, time, timedelta, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.boundary.db.CRUD import (
    analytics_event_crud,
    purchase_crud,
    report_crud,
    resource_crud,
    user_crud,
)
from resourcehub.boundary.db.models import (
    AnalyticsEventType,
    PurchaseModel,
    ReportModel,
    ReportStatus,
    ResourceModel,
    UserModel,
    UserRole,
)
from resourcehub.application.services.mappers import enum_value, event_to_dict, money
from resourcehub.configs import Settings, get_settings
from resourcehub.core.periods import Period, last_n_days, period_range

logger = logging.getLogger(__name__)

ADMIN_EVENT_LIMIT = 100
DASHBOARD_REVENUE_DAYS = 7


def _within(column, start: datetime, end: datetime) -> tuple:
    return column >= start, column <= end


class AnalyticsService:
    """Analytics service orchestrator."""

    def __init__(self, db: AsyncSession, settings: Settings | None = None) -> None:
        """
        Initialize analytics service.

        Args:
            db: Async SQLAlchemy session
            settings: Application settings (defaults to the cached singleton)
        """
        self.db = db
        self.settings = settings or get_settings()

    def _should_persist(self) -> bool:
        return (
            not self.settings.is_development
            or self.settings.marketplace.enable_dev_analytics
        )

    async def track_event(
        self,
        event_type: AnalyticsEventType | str,
        data: dict | None = None,
        user_id: UUID | None = None,
        resource_id: UUID | None = None,
    ) -> None:
        """
        Record an analytics event.

        In development the event is only logged unless dev analytics are
        enabled. Never raises.

        Args:
            event_type: AnalyticsEventType or custom event name
            data: Arbitrary JSON-serializable payload
            user_id: Acting user
            resource_id: Resource involved
        """
        event_name = enum_value(event_type)
        context = {
            "event_type": event_name,
            "user_id": str(user_id) if user_id else None,
            "resource_id": str(resource_id) if resource_id else None,
        }

        if not self._should_persist():
            logger.debug("Analytics event (dev mode)", extra=context)
            return

        try:
            # a failed insert only rolls back this savepoint
            async with self.db.begin_nested():
                await analytics_event_crud.create(
                    self.db,
                    event_type=event_name,
                    user_id=user_id,
                    resource_id=resource_id,
                    data=data or {},
                )
        except Exception as e:
            logger.error("Failed to track analytics event", extra={**context, "error": str(e)})

    async def creator_analytics(self, creator_id: UUID, period: Period = Period.MONTH) -> dict:
        """
        Creator activity within a period.

        Args:
            creator_id: Creator user UUID
            period: Reporting window ending now

        Returns:
            dict: period, start, end, per-resource stats, completed sales in
            the window with their revenue, and the creator's own events
        """
        start, end = period_range(period)
        try:
            resources = await resource_crud.list_by_creator(self.db, creator_id)
            purchases = await purchase_crud.list_completed(
                self.db, creator_id=creator_id, start=start, end=end
            )
            events = await analytics_event_crud.list_in_range(
                self.db, start, end, user_id=creator_id
            )
        except Exception as e:
            logger.error(
                "Failed to build creator analytics",
                extra={"error": str(e), "creator_id": str(creator_id), "period": period.value},
            )
            raise

        return {
            "period": period.value,
            "start": start,
            "end": end,
            "resources": [
                {
                    "id": r.id,
                    "title": r.title,
                    "views": r.views or 0,
                    "downloads": r.downloads or 0,
                    "status": enum_value(r.status),
                }
                for r in resources
            ],
            "purchases": [
                {
                    "id": p.id,
                    "resource_id": p.resource_id,
                    "resource_title": p.resource_title or "",
                    "amount": money(p.amount),
                    "created_at": p.created_at,
                }
                for p in purchases
            ],
            "revenue": sum((money(p.amount) for p in purchases), Decimal("0.00")),
            "events": [event_to_dict(e) for e in events],
        }

    async def admin_analytics(self, period: Period = Period.MONTH) -> dict:
        """
        Platform totals plus new-in-period counts and recent events.

        Returns:
            dict: period bounds, user/resource/purchase totals and new counts,
            completed revenue in the window, up to 100 most recent events
        """
        start, end = period_range(period)
        try:
            result = {
                "period": period.value,
                "start": start,
                "end": end,
                "total_users": await user_crud.count(self.db),
                "new_users": await user_crud.count(
                    self.db, *_within(UserModel.created_at, start, end)
                ),
                "total_resources": await resource_crud.count(self.db),
                "new_resources": await resource_crud.count(
                    self.db, *_within(ResourceModel.created_at, start, end)
                ),
                "total_purchases": await purchase_crud.count(self.db),
                "new_purchases": await purchase_crud.count(
                    self.db, *_within(PurchaseModel.created_at, start, end)
                ),
                "revenue": await purchase_crud.revenue(self.db, start=start, end=end),
            }
            events = await analytics_event_crud.list_in_range(
                self.db, start, end, limit=ADMIN_EVENT_LIMIT
            )
        except Exception as e:
            logger.error(
                "Failed to build admin analytics",
                extra={"error": str(e), "period": period.value},
            )
            raise

        result["events"] = [event_to_dict(e) for e in events]
        return result

    async def admin_dashboard(self, now: datetime | None = None) -> dict:
        """
        Headline numbers for the admin dashboard.

        Revenue per day covers the last 7 days including today, zero-filled,
        oldest first.
        """
        now = now or datetime.now(timezone.utc)
        days = last_n_days(DASHBOARD_REVENUE_DAYS, now)
        window_start = datetime.combine(
            now.date() - timedelta(days=DASHBOARD_REVENUE_DAYS - 1),
            time.min,
            tzinfo=timezone.utc,
        )

        try:
            status_counts = await resource_crud.status_counts(self.db)
            totals = await resource_crud.totals(self.db)
            recent_sales = await purchase_crud.list_completed(self.db, start=window_start, end=now)
            dashboard = {
                "total_resources": sum(status_counts.values()),
                "pending_resources": status_counts["pending"],
                "total_users": await user_crud.count(self.db),
                "total_creators": await user_crud.count(
                    self.db, UserModel.role == UserRole.CREATOR
                ),
                "total_downloads": totals["downloads"],
                "open_reports": await report_crud.count(
                    self.db, ReportModel.status == ReportStatus.PENDING
                ),
                "total_revenue": await purchase_crud.revenue(self.db),
            }
        except Exception as e:
            logger.error("Failed to build admin dashboard", extra={"error": str(e)})
            raise

        per_day = {day: Decimal("0.00") for day in days}
        for sale in recent_sales:
            day = sale.created_at.date().isoformat()
            if day in per_day:
                per_day[day] += money(sale.amount)
        dashboard["revenue_last_7_days"] = [
            {"date": day, "revenue": revenue} for day, revenue in per_day.items()
        ]
        return dashboard
