"""
User CRUD operations.

Adds lookups by email, the admin user listing and the creator listing
with per-creator resource, download and revenue totals.

Dependencies: sqlalchemy, resourcehub.boundary.db.models
System role: User persistence operations
"""

from decimal import Decimal
from typing import Any, Sequence

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.boundary.db.CRUD.base_crud import BaseCRUD
from resourcehub.boundary.db.models.purchase_model import PurchaseModel, PurchaseStatus
from resourcehub.boundary.db.models.resource_model import ResourceModel
from resourcehub.boundary.db.models.user_model import CreatorStatus, UserModel, UserRole
from resourcehub.core.listing import CreatorSort


def _name_or_email_matches(term: str):
    return or_(
        UserModel.name.icontains(term, autoescape=True),
        UserModel.email.icontains(term, autoescape=True),
    )


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """Look up a user by (lower-cased) email."""
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_names(self, session: AsyncSession, ids: set) -> dict:
        """Map user ids to display names for the given ids."""
        if not ids:
            return {}
        stmt = select(UserModel.id, UserModel.name).where(UserModel.id.in_(ids))
        result = await session.execute(stmt)
        return {row.id: row.name for row in result}

    async def search(
        self,
        session: AsyncSession,
        role: UserRole | None = None,
        status: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[Sequence[UserModel], int]:
        """
        Admin user listing, newest first.

        Args:
            session: Async database session
            role: Restrict to one role
            status: Restrict to one account status
            search: Case-insensitive match on name or email
            limit: Page size
            offset: Rows to skip

        Returns:
            (users, total matching rows)
        """
        criteria: list[Any] = []
        if role is not None:
            criteria.append(UserModel.role == role)
        if status is not None:
            criteria.append(UserModel.status == status)
        if search:
            criteria.append(_name_or_email_matches(search))

        stmt = select(UserModel).where(*criteria).order_by(UserModel.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all(), await self.count(session, *criteria)

    def _creator_stats_select(self) -> Select:
        resources = (
            select(
                ResourceModel.creator_id.label("creator_id"),
                func.count(ResourceModel.id).label("resource_count"),
                func.coalesce(func.sum(ResourceModel.downloads), 0).label("downloads"),
            )
            .group_by(ResourceModel.creator_id)
            .subquery()
        )
        revenue = (
            select(
                PurchaseModel.creator_id.label("creator_id"),
                func.coalesce(func.sum(PurchaseModel.amount), 0).label("revenue"),
            )
            .where(PurchaseModel.status == PurchaseStatus.COMPLETED)
            .group_by(PurchaseModel.creator_id)
            .subquery()
        )
        resource_count = func.coalesce(resources.c.resource_count, 0).label("resource_count")
        downloads = func.coalesce(resources.c.downloads, 0).label("downloads")
        total_revenue = func.coalesce(revenue.c.revenue, 0).label("revenue")
        return (
            select(UserModel, resource_count, downloads, total_revenue)
            .outerjoin(resources, resources.c.creator_id == UserModel.id)
            .outerjoin(revenue, revenue.c.creator_id == UserModel.id)
        )

    async def list_creators(
        self,
        session: AsyncSession,
        creator_status: CreatorStatus | None = None,
        search: str | None = None,
        sort: CreatorSort = CreatorSort.NEWEST,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[dict], int]:
        """
        Creator listing with aggregated stats.

        A creator is any user with the creator role or a creator status.

        Returns:
            (rows, total) where each row is a dict with keys
            user, resource_count, downloads, revenue
        """
        criteria: list[Any] = [
            or_(UserModel.role == UserRole.CREATOR, UserModel.creator_status.is_not(None))
        ]
        if creator_status is not None:
            criteria.append(UserModel.creator_status == creator_status)
        if search:
            criteria.append(_name_or_email_matches(search))

        stmt = self._creator_stats_select().where(*criteria)
        order = {
            CreatorSort.NEWEST: UserModel.created_at.desc(),
            CreatorSort.OLDEST: UserModel.created_at.asc(),
            CreatorSort.NAME_ASC: UserModel.name.asc(),
            CreatorSort.NAME_DESC: UserModel.name.desc(),
            CreatorSort.RESOURCES: stmt.selected_columns.resource_count.desc(),
            CreatorSort.DOWNLOADS: stmt.selected_columns.downloads.desc(),
            CreatorSort.REVENUE: stmt.selected_columns.revenue.desc(),
        }[sort]
        stmt = stmt.order_by(order, UserModel.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await session.execute(stmt)
        rows = [
            {
                "user": user,
                "resource_count": int(resource_count),
                "downloads": int(downloads),
                "revenue": Decimal(str(revenue)),
            }
            for user, resource_count, downloads, revenue in result.all()
        ]
        return rows, await self.count(session, *criteria)


user_crud = UserCRUD()
