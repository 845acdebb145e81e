"""
Resource CRUD operations.

Hosts the single query layer used by every resource listing: public
browse, creator dashboards and admin moderation all go through search().
Rows are returned together with the creator's display name.

Dependencies: sqlalchemy, resourcehub.boundary.db.models, resourcehub.core.listing
System role: Resource persistence operations
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.boundary.db.CRUD.base_crud import BaseCRUD
from resourcehub.boundary.db.models.resource_model import ResourceModel, ResourceStatus
from resourcehub.boundary.db.models.user_model import UserModel
from resourcehub.core.listing import Page, ResourceFilters, ResourceSort

ResourceRow = tuple[ResourceModel, str | None]

_SORT_ORDER = {
    ResourceSort.NEWEST: (ResourceModel.created_at.desc(),),
    ResourceSort.OLDEST: (ResourceModel.created_at.asc(),),
    ResourceSort.TITLE_ASC: (ResourceModel.title.asc(),),
    ResourceSort.TITLE_DESC: (ResourceModel.title.desc(),),
    ResourceSort.PRICE_HIGH: (ResourceModel.price.desc(),),
    ResourceSort.PRICE_LOW: (ResourceModel.price.asc(),),
    ResourceSort.DOWNLOADS: (ResourceModel.downloads.desc(),),
    ResourceSort.POPULAR: (ResourceModel.views.desc(),),
}


class ResourceCRUD(BaseCRUD[ResourceModel]):
    """
    CRUD operations for ResourceModel.

    Extends BaseCRUD with filtered listings, creator-name joins and
    counter increments.
    """

    def __init__(self) -> None:
        super().__init__(ResourceModel)

    @staticmethod
    def _with_creator() -> Select:
        return select(ResourceModel, UserModel.name.label("creator_name")).outerjoin(
            UserModel, UserModel.id == ResourceModel.creator_id
        )

    @staticmethod
    def _criteria(filters: ResourceFilters) -> list[Any]:
        criteria: list[Any] = []
        if filters.status is not None:
            criteria.append(ResourceModel.status == filters.status)
        if filters.category is not None:
            criteria.append(ResourceModel.category == filters.category)
        if filters.creator_id is not None:
            criteria.append(ResourceModel.creator_id == filters.creator_id)
        if filters.featured is not None:
            criteria.append(ResourceModel.featured.is_(filters.featured))
        if filters.min_price is not None:
            criteria.append(ResourceModel.price >= filters.min_price)
        if filters.max_price is not None:
            criteria.append(ResourceModel.price <= filters.max_price)
        if filters.search:
            term = filters.search
            criteria.append(
                or_(
                    ResourceModel.title.icontains(term, autoescape=True),
                    ResourceModel.description.icontains(term, autoescape=True),
                    UserModel.name.icontains(term, autoescape=True),
                )
            )
        return criteria

    async def search(
        self,
        session: AsyncSession,
        filters: ResourceFilters,
        sort: ResourceSort = ResourceSort.NEWEST,
        page: Page | None = None,
    ) -> tuple[list[ResourceRow], int]:
        """
        Filter, sort and paginate resources.

        Args:
            session: Async database session
            filters: Field filters; None fields are ignored
            sort: Sort order (ties broken by id for stable paging)
            page: Offset window, None for everything

        Returns:
            ([(resource, creator_name), ...], total matching rows)
        """
        criteria = self._criteria(filters)

        stmt = self._with_creator().where(*criteria).order_by(*_SORT_ORDER[sort], ResourceModel.id)
        if page is not None:
            stmt = stmt.limit(page.limit).offset(page.offset)
        result = await session.execute(stmt)
        rows = [(resource, creator_name) for resource, creator_name in result.all()]

        count_stmt = (
            select(func.count(ResourceModel.id))
            .select_from(ResourceModel)
            .outerjoin(UserModel, UserModel.id == ResourceModel.creator_id)
            .where(*criteria)
        )
        total = (await session.execute(count_stmt)).scalar_one()
        return rows, int(total)

    async def get_with_creator(self, session: AsyncSession, id: UUID) -> ResourceRow | None:
        """Retrieve one resource with its creator's display name."""
        stmt = self._with_creator().where(ResourceModel.id == id)
        result = await session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def list_by_creator(
        self,
        session: AsyncSession,
        creator_id: UUID,
        status: ResourceStatus | None = None,
    ) -> Sequence[ResourceModel]:
        """A creator's resources, newest first."""
        stmt = select(ResourceModel).where(ResourceModel.creator_id == creator_id)
        if status is not None:
            stmt = stmt.where(ResourceModel.status == status)
        stmt = stmt.order_by(ResourceModel.created_at.desc())
        result = await session.execute(stmt)
        return result.scalars().all()

    async def increment_views(self, session: AsyncSession, id: UUID) -> None:
        stmt = (
            update(ResourceModel)
            .where(ResourceModel.id == id)
            .values(views=ResourceModel.views + 1)
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)

    async def increment_downloads(self, session: AsyncSession, id: UUID) -> None:
        stmt = (
            update(ResourceModel)
            .where(ResourceModel.id == id)
            .values(downloads=ResourceModel.downloads + 1)
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)

    async def status_counts(
        self,
        session: AsyncSession,
        creator_id: UUID | None = None,
    ) -> dict[str, int]:
        """
        Count resources per status.

        Returns:
            {"pending": n, "approved": n, "rejected": n}
        """
        stmt = select(ResourceModel.status, func.count(ResourceModel.id)).group_by(
            ResourceModel.status
        )
        if creator_id is not None:
            stmt = stmt.where(ResourceModel.creator_id == creator_id)
        result = await session.execute(stmt)
        counts = {status.value: 0 for status in ResourceStatus}
        for status, count in result.all():
            key = status.value if isinstance(status, ResourceStatus) else str(status)
            counts[key] = int(count)
        return counts

    async def totals(
        self,
        session: AsyncSession,
        creator_id: UUID | None = None,
    ) -> dict[str, int]:
        """Summed downloads and views, optionally for one creator."""
        stmt = select(
            func.coalesce(func.sum(ResourceModel.downloads), 0),
            func.coalesce(func.sum(ResourceModel.views), 0),
        )
        if creator_id is not None:
            stmt = stmt.where(ResourceModel.creator_id == creator_id)
        downloads, views = (await session.execute(stmt)).one()
        return {"downloads": int(downloads), "views": int(views)}

    async def count_approved_in_category(self, session: AsyncSession, slug: str) -> int:
        return await self.count(
            session,
            ResourceModel.category == slug,
            ResourceModel.status == ResourceStatus.APPROVED,
        )

    async def reassign_category(
        self,
        session: AsyncSession,
        old_slug: str,
        new_slug: str | None,
    ) -> int:
        """
        Move every resource from one category to another (or to none).

        Returns:
            Number of resources moved
        """
        stmt = (
            update(ResourceModel)
            .where(ResourceModel.category == old_slug)
            .values(category=new_slug)
        )
        result = await session.execute(stmt)
        return result.rowcount


resource_crud = ResourceCRUD()
