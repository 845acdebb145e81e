"""
Creator service orchestrator.

Creator onboarding (apply, approve, reject), the admin creator listing
and the creator's own dashboard.

Dependencies: resourcehub.boundary.db.CRUD, resourcehub.core.plans
System role: Creator use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.application.services.analytics_service import AnalyticsService
from resourcehub.application.services.mappers import application_to_dict, money, user_to_dict
from resourcehub.boundary.db.CRUD import (
    creator_application_crud,
    purchase_crud,
    resource_crud,
    user_crud,
)
from resourcehub.boundary.db.models import (
    AnalyticsEventType,
    ApplicationStatus,
    CreatorStatus,
    UserModel,
    UserRole,
)
from resourcehub.configs import Settings, get_settings
from resourcehub.core.exceptions import ConflictError, NotFoundError, ValidationError
from resourcehub.core.listing import CreatorSort, Page, normalize_search
from resourcehub.core.plans import PLANS, get_plan, net_earnings

logger = logging.getLogger(__name__)


class CreatorService:
    """Creator service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings | None = None,
        analytics: AnalyticsService | None = None,
    ) -> None:
        self.db = db
        self.settings = settings or get_settings()
        self.analytics = analytics or AnalyticsService(db, self.settings)

    async def apply(
        self,
        user: UserModel,
        portfolio_url: str | None = None,
        experience: str | None = None,
        application_text: str | None = None,
        plan: str = "free",
    ) -> dict:
        """
        Submit a creator application.

        Sets the user's role to creator with status pending and records
        the application.

        Args:
            user: Applicant
            portfolio_url: Link to previous work
            experience: Free-text experience summary
            application_text: Why they want to sell here
            plan: Requested plan name

        Returns:
            dict: application and updated user

        Raises:
            ValidationError: Unknown plan or applicant is an admin
            ConflictError: Applicant is already an approved creator
        """
        if plan not in PLANS:
            raise ValidationError(f"Unknown plan '{plan}'", field="plan")
        if user.role == UserRole.ADMIN:
            raise ValidationError("Admins cannot apply as creators", field="role")
        if user.creator_status == CreatorStatus.APPROVED:
            raise ConflictError("You are already an approved creator", {"user_id": str(user.id)})

        try:
            application = await creator_application_crud.create(
                self.db,
                user_id=user.id,
                portfolio_url=portfolio_url,
                experience=experience,
                application_text=application_text,
                plan=plan,
                status=ApplicationStatus.PENDING,
            )
            updated = await user_crud.update_by_id(
                self.db,
                user.id,
                role=UserRole.CREATOR,
                creator_status=CreatorStatus.PENDING,
                plan=plan,
            )
        except Exception as e:
            logger.error(
                "Failed to submit creator application",
                extra={"error": str(e), "user_id": str(user.id)},
            )
            raise

        logger.info(
            "Creator application submitted",
            extra={"user_id": str(user.id), "application_id": str(application.id), "plan": plan},
        )
        await self.analytics.track_event(
            AnalyticsEventType.CREATOR_APPLICATION,
            {"plan": plan},
            user_id=user.id,
        )
        return {"application": application_to_dict(application), "user": user_to_dict(updated)}

    async def _set_creator_status(
        self,
        user_id: UUID,
        status: CreatorStatus,
        application_status: ApplicationStatus,
    ) -> dict:
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise NotFoundError("creator", user_id)
        if user.role != UserRole.CREATOR and user.creator_status is None:
            raise ValidationError("User has not applied as a creator", field="user_id")

        user = await user_crud.update_by_id(self.db, user_id, creator_status=status)
        application = await creator_application_crud.latest_pending(self.db, user_id)
        if application is not None:
            await creator_application_crud.update_by_id(
                self.db, application.id, status=application_status
            )

        logger.info(
            "Creator status changed",
            extra={"user_id": str(user_id), "creator_status": status.value},
        )
        return user_to_dict(user)

    async def approve(self, user_id: UUID) -> dict:
        """
        Approve a creator and their pending application.

        Raises:
            NotFoundError: Unknown user
            ValidationError: User never applied
        """
        return await self._set_creator_status(
            user_id, CreatorStatus.APPROVED, ApplicationStatus.APPROVED
        )

    async def reject(self, user_id: UUID) -> dict:
        """Reject a creator and their pending application."""
        return await self._set_creator_status(
            user_id, CreatorStatus.REJECTED, ApplicationStatus.REJECTED
        )

    async def list_creators(
        self,
        creator_status: CreatorStatus | None = None,
        search: str | None = None,
        sort: CreatorSort = CreatorSort.NEWEST,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict:
        """
        Admin creator listing with resource count, downloads and revenue.

        Returns:
            dict: items, total, limit, offset, has_more
        """
        market = self.settings.marketplace
        page = Page.clamp(limit, offset, market.page_size, market.max_page_size)
        rows, total = await user_crud.list_creators(
            self.db,
            creator_status=creator_status,
            search=normalize_search(search),
            sort=sort,
            limit=page.limit,
            offset=page.offset,
        )
        items = [
            {
                **user_to_dict(row["user"]),
                "resource_count": row["resource_count"],
                "downloads": row["downloads"],
                "revenue": money(row["revenue"]),
            }
            for row in rows
        ]
        return {
            "items": items,
            "total": total,
            "limit": page.limit,
            "offset": page.offset,
            "has_more": page.offset + len(items) < total,
        }

    async def dashboard(self, user: UserModel) -> dict:
        """
        Headline numbers for a creator.

        Gross revenue sums completed sales; net earnings subtract the
        plan's commission.
        """
        try:
            counts = await resource_crud.status_counts(self.db, creator_id=user.id)
            totals = await resource_crud.totals(self.db, creator_id=user.id)
            gross = await purchase_crud.revenue(self.db, creator_id=user.id)
        except Exception as e:
            logger.error(
                "Failed to build creator dashboard",
                extra={"error": str(e), "user_id": str(user.id)},
            )
            raise

        plan = get_plan(user.plan)
        return {
            "total_resources": sum(counts.values()),
            "approved_resources": counts["approved"],
            "pending_resources": counts["pending"],
            "rejected_resources": counts["rejected"],
            "total_downloads": totals["downloads"],
            "total_views": totals["views"],
            "gross_revenue": gross,
            "net_earnings": net_earnings(plan.name, gross),
            "commission_rate": plan.commission_rate,
            "plan": plan.name,
            "upload_limit": plan.max_resources,
        }
