"""
Report service orchestrator.

Users file reports; admins triage them.

Dependencies: resourcehub.boundary.db.CRUD
System role: Moderation queue use cases
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.application.services.mappers import report_to_dict
from resourcehub.boundary.db.CRUD import report_crud, resource_crud, user_crud
from resourcehub.boundary.db.models import ReportStatus, ReportType, UserModel
from resourcehub.configs import Settings, get_settings
from resourcehub.core.exceptions import NotFoundError, ValidationError
from resourcehub.core.listing import Page

logger = logging.getLogger(__name__)


class ReportService:
    """Report service orchestrator."""

    def __init__(self, db: AsyncSession, settings: Settings | None = None) -> None:
        self.db = db
        self.settings = settings or get_settings()

    async def create_report(
        self,
        user: UserModel,
        type: ReportType,
        reason: str,
        description: str = "",
        resource_id: UUID | None = None,
        creator_id: UUID | None = None,
    ) -> dict:
        """
        File a report.

        Resource reports need an existing resource_id; user reports need an
        existing creator_id.

        Raises:
            ValidationError: Missing target or empty reason
            NotFoundError: Target does not exist
        """
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("A reason is required", field="reason")

        if type == ReportType.RESOURCE:
            if resource_id is None:
                raise ValidationError("resource_id is required for resource reports", field="resource_id")
            if not await resource_crud.exists(self.db, resource_id):
                raise NotFoundError("resource", resource_id)
        elif type == ReportType.USER:
            if creator_id is None:
                raise ValidationError("creator_id is required for user reports", field="creator_id")
            if not await user_crud.exists(self.db, creator_id):
                raise NotFoundError("user", creator_id)

        report = await report_crud.create(
            self.db,
            user_id=user.id,
            type=type,
            resource_id=resource_id,
            creator_id=creator_id,
            reason=reason,
            description=(description or "").strip(),
            status=ReportStatus.PENDING,
        )
        logger.info(
            "Report filed",
            extra={"report_id": str(report.id), "report_type": type.value, "user_id": str(user.id)},
        )
        return report_to_dict(report)

    async def list_reports(
        self,
        status: ReportStatus | None = None,
        type: ReportType | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict:
        """Admin report queue, newest first."""
        market = self.settings.marketplace
        page = Page.clamp(limit, offset, market.page_size, market.max_page_size)
        reports, total = await report_crud.search(
            self.db, status=status, type=type, limit=page.limit, offset=page.offset
        )
        return {
            "items": [report_to_dict(r) for r in reports],
            "total": total,
            "limit": page.limit,
            "offset": page.offset,
            "has_more": page.offset + len(reports) < total,
        }

    async def _set_status(self, report_id: UUID, status: ReportStatus) -> dict:
        report = await report_crud.update_by_id(self.db, report_id, status=status)
        if report is None:
            raise NotFoundError("report", report_id)
        logger.info(
            "Report status changed",
            extra={"report_id": str(report_id), "status": status.value},
        )
        return report_to_dict(report)

    async def resolve(self, report_id: UUID) -> dict:
        return await self._set_status(report_id, ReportStatus.RESOLVED)

    async def dismiss(self, report_id: UUID) -> dict:
        return await self._set_status(report_id, ReportStatus.DISMISSED)
