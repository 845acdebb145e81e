"""
Resource service orchestrator.

Coordinates the resource lifecycle: presigned uploads, creation, public
browsing, detail views, downloads, creator edits and admin moderation.
All listings share ResourceCRUD.search().

Dependencies: resourcehub.boundary.db.CRUD, resourcehub.boundary.aws, resourcehub.core
System role: Resource use case orchestration
"""

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.application.services.analytics_service import AnalyticsService
from resourcehub.application.services.category_service import CategoryService
from resourcehub.application.services.mappers import money, resource_to_dict
from resourcehub.application.services.purchase_service import has_access
from resourcehub.boundary.aws.s3_client import S3StorageClient
from resourcehub.boundary.db.CRUD import resource_crud, review_crud
from resourcehub.boundary.db.models import (
    AnalyticsEventType,
    CreatorStatus,
    ResourceModel,
    ResourceStatus,
    UserModel,
    UserRole,
)
from resourcehub.configs import Settings, get_settings
from resourcehub.core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from resourcehub.core.listing import (
    Page,
    ResourceFilters,
    ResourceSort,
    normalize_search,
    parse_tags,
)
from resourcehub.core.plans import can_upload, get_plan
from resourcehub.core.uploads import (
    UploadKind,
    generate_object_key,
    key_belongs_to,
    validate_filename,
    validate_size,
)

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 3
MIN_DESCRIPTION_LENGTH = 10


def _validate_title(title: str) -> str:
    title = (title or "").strip()
    if len(title) < MIN_TITLE_LENGTH:
        raise ValidationError(
            f"Title must be at least {MIN_TITLE_LENGTH} characters", field="title"
        )
    return title


def _validate_description(description: str) -> str:
    description = (description or "").strip()
    if len(description) < MIN_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters",
            field="description",
        )
    return description


def _validate_price(price: Any) -> Decimal:
    try:
        value = money(price)
    except ArithmeticError as e:
        raise ValidationError("Price must be a number", field="price") from e
    if value < 0:
        raise ValidationError("Price cannot be negative", field="price")
    return value


def _is_admin(user: UserModel | None) -> bool:
    return user is not None and user.role == UserRole.ADMIN


class ResourceService:
    """Resource service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        storage: S3StorageClient,
        settings: Settings | None = None,
        analytics: AnalyticsService | None = None,
    ) -> None:
        """
        Initialize resource service.

        Args:
            db: Async SQLAlchemy session
            storage: Object storage client for files and thumbnails
            settings: Application settings (defaults to the cached singleton)
            analytics: Event tracker (defaults to one bound to db)
        """
        self.db = db
        self.storage = storage
        self.settings = settings or get_settings()
        self.analytics = analytics or AnalyticsService(db, self.settings)
        self.categories = CategoryService(db)

    def _page(self, limit: int | None, offset: int | None) -> Page:
        market = self.settings.marketplace
        return Page.clamp(limit, offset, market.page_size, market.max_page_size)

    async def _paginate(
        self,
        filters: ResourceFilters,
        sort: ResourceSort,
        limit: int | None,
        offset: int | None,
    ) -> dict:
        page = self._page(limit, offset)
        rows, total = await resource_crud.search(self.db, filters, sort=sort, page=page)
        return {
            "items": [resource_to_dict(resource, name) for resource, name in rows],
            "total": total,
            "limit": page.limit,
            "offset": page.offset,
            "has_more": page.offset + len(rows) < total,
        }

    async def _get_owned(self, user: UserModel, resource_id: UUID) -> ResourceModel:
        resource = await resource_crud.get_by_id(self.db, resource_id)
        if resource is None:
            raise NotFoundError("resource", resource_id)
        if resource.creator_id != user.id and not _is_admin(user):
            raise PermissionDeniedError(
                "You can only manage your own resources", user_id=str(user.id)
            )
        return resource

    async def _ensure_can_upload(self, user: UserModel) -> None:
        if _is_admin(user):
            return
        if user.role != UserRole.CREATOR or user.creator_status != CreatorStatus.APPROVED:
            raise PermissionDeniedError(
                "Only approved creators can upload resources", user_id=str(user.id)
            )
        current = await resource_crud.count(self.db, ResourceModel.creator_id == user.id)
        if not can_upload(user.plan, current):
            plan = get_plan(user.plan)
            raise PermissionDeniedError(
                f"The {plan.name} plan allows {plan.max_resources} resources; upgrade to upload more",
                user_id=str(user.id),
            )

    def _thumbnail_url(self, owner_id: UUID, key: str) -> str:
        if not key_belongs_to(key, UploadKind.THUMBNAIL, str(owner_id)):
            raise ValidationError("Thumbnail key was not issued to you", field="thumbnail_key")
        if not self.storage.file_exists(key):
            raise ValidationError("Thumbnail has not been uploaded", field="thumbnail_key")
        return self.storage.public_url(key)

    def _remove_objects(self, resource: ResourceModel) -> None:
        for key in (resource.file_key, resource.thumbnail_key):
            if not key:
                continue
            try:
                self.storage.delete_object(key)
            except StorageError as e:
                logger.warning(
                    "Failed to delete stored object",
                    extra={"resource_id": str(resource.id), "key": key, "error": str(e)},
                )

    async def request_upload_url(
        self,
        user: UserModel,
        kind: str,
        filename: str,
        content_type: str,
        file_size: int,
    ) -> dict:
        """
        Issue a presigned PUT URL for a resource file or thumbnail.

        Args:
            user: Uploading creator
            kind: "resources" or "thumbnails"
            filename: Original filename (extension checked per kind)
            content_type: MIME type the client will send
            file_size: Declared size in bytes (checked per kind)

        Returns:
            dict: upload_url, key, expires_at and, for thumbnails, public_url

        Raises:
            PermissionDeniedError: Caller may not upload
            ValidationError: Bad filename, size or kind
        """
        try:
            upload_kind = UploadKind(kind)
        except ValueError as e:
            raise ValidationError(f"Unknown upload kind '{kind}'", field="kind") from e
        if upload_kind == UploadKind.AVATAR:
            raise ValidationError("Use the avatar endpoint for avatars", field="kind")

        await self._ensure_can_upload(user)
        validate_filename(upload_kind, filename)
        storage_settings = self.settings.storage
        validate_size(
            upload_kind,
            file_size,
            storage_settings.max_resource_size,
            storage_settings.max_image_size,
        )

        key = generate_object_key(upload_kind, str(user.id), filename)
        upload_url, expires_at = self.storage.generate_presigned_upload_url(
            key,
            content_type=content_type,
            expires_in=storage_settings.presigned_url_expiry,
        )
        logger.info(
            "Issued upload URL",
            extra={"user_id": str(user.id), "key": key, "kind": upload_kind.value},
        )
        return {
            "upload_url": upload_url,
            "key": key,
            "expires_at": expires_at,
            "public_url": self.storage.public_url(key) if upload_kind == UploadKind.THUMBNAIL else None,
        }

    async def create_resource(
        self,
        user: UserModel,
        title: str,
        description: str,
        price: Any,
        category: str,
        file_key: str,
        file_name: str,
        file_size: int,
        file_type: str = "application/octet-stream",
        tags: list[str] | str | None = None,
        thumbnail_key: str | None = None,
    ) -> dict:
        """
        Create a pending resource for an uploaded file.

        Returns:
            dict: Created resource

        Raises:
            PermissionDeniedError: Caller is not an approved creator or is at the plan limit
            ValidationError: Invalid fields, unknown category or missing upload
        """
        await self._ensure_can_upload(user)

        title = _validate_title(title)
        description = _validate_description(description)
        price = _validate_price(price)
        if not category or not await self.categories.category_exists(category):
            raise ValidationError(f"Unknown category '{category}'", field="category")

        if not key_belongs_to(file_key, UploadKind.RESOURCE, str(user.id)):
            raise ValidationError("File key was not issued to you", field="file_key")
        if not self.storage.file_exists(file_key):
            raise ValidationError("File has not been uploaded", field="file_key")
        thumbnail = self._thumbnail_url(user.id, thumbnail_key) if thumbnail_key else None

        try:
            resource = await resource_crud.create(
                self.db,
                title=title,
                description=description,
                price=price,
                category=category,
                creator_id=user.id,
                tags=parse_tags(tags),
                thumbnail=thumbnail,
                thumbnail_key=thumbnail_key,
                file_key=file_key,
                file_name=file_name,
                file_type=file_type,
                file_size=file_size,
                status=ResourceStatus.PENDING,
                downloads=0,
                views=0,
                featured=False,
            )
        except Exception as e:
            logger.error(
                "Failed to create resource",
                extra={"error": str(e), "user_id": str(user.id), "title": title},
            )
            raise

        logger.info(
            "Resource created",
            extra={"resource_id": str(resource.id), "creator_id": str(user.id)},
        )
        await self.analytics.track_event(
            AnalyticsEventType.UPLOAD_RESOURCE,
            {"title": title, "category": category},
            user_id=user.id,
            resource_id=resource.id,
        )
        return resource_to_dict(resource, user.name)

    async def browse_resources(
        self,
        category: str | None = None,
        featured: bool | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
        search: str | None = None,
        sort: ResourceSort = ResourceSort.NEWEST,
        limit: int | None = None,
        offset: int | None = None,
        user_id: UUID | None = None,
    ) -> dict:
        """
        Public catalog: approved resources only.

        Args:
            category: Category slug
            featured: Only featured (True) or non-featured (False)
            min_price, max_price: Inclusive price bounds
            search: Case-insensitive match on title, description or creator name
            sort: Sort order
            limit, offset: Page window (default 12 per page)
            user_id: Caller, recorded with search events

        Returns:
            dict: items, total, limit, offset, has_more
        """
        search = normalize_search(search)
        filters = ResourceFilters(
            status=ResourceStatus.APPROVED,
            category=category or None,
            featured=featured,
            min_price=min_price,
            max_price=max_price,
            search=search,
        )
        page = await self._paginate(filters, sort, limit, offset)
        if search:
            await self.analytics.track_event(
                AnalyticsEventType.SEARCH,
                {"term": search, "results": page["total"]},
                user_id=user_id,
            )
        return page

    async def get_resource(self, resource_id: UUID, viewer: UserModel | None = None) -> dict:
        """
        Resource detail with rating summary.

        Views are counted best-effort. Non-approved resources are only
        visible to their creator and admins.

        Raises:
            NotFoundError: Missing, or hidden from this viewer
        """
        row = await resource_crud.get_with_creator(self.db, resource_id)
        if row is None:
            raise NotFoundError("resource", resource_id)
        resource, creator_name = row

        is_owner = viewer is not None and resource.creator_id == viewer.id
        if resource.status != ResourceStatus.APPROVED and not (is_owner or _is_admin(viewer)):
            raise NotFoundError("resource", resource_id)

        try:
            async with self.db.begin_nested():
                await resource_crud.increment_views(self.db, resource_id)
        except Exception as e:
            logger.warning(
                "Failed to increment views",
                extra={"resource_id": str(resource_id), "error": str(e)},
            )

        average, count = await review_crud.rating_summary(self.db, resource_id)
        detail = resource_to_dict(resource, creator_name)
        detail.update(
            {
                "average_rating": average,
                "review_count": count,
                "has_access": await has_access(self.db, resource, viewer),
            }
        )

        await self.analytics.track_event(
            AnalyticsEventType.RESOURCE_VIEW,
            {"title": resource.title},
            user_id=viewer.id if viewer else None,
            resource_id=resource.id,
        )
        return detail

    async def download_resource(self, resource_id: UUID, user: UserModel) -> dict:
        """
        Presigned download for an entitled user. Counts the download.

        Returns:
            dict: url, file_name, expires_at

        Raises:
            NotFoundError: Unknown resource or no stored file
            PermissionDeniedError: User has not bought a paid resource
        """
        resource = await resource_crud.get_by_id(self.db, resource_id)
        if resource is None:
            raise NotFoundError("resource", resource_id)
        if not await has_access(self.db, resource, user):
            raise PermissionDeniedError(
                "Purchase this resource to download it", user_id=str(user.id)
            )
        if not resource.file_key:
            raise NotFoundError("file", resource_id)

        url, expires_at = self.storage.generate_presigned_download_url(
            resource.file_key,
            expires_in=self.settings.storage.presigned_url_expiry,
            filename=resource.file_name,
        )
        await resource_crud.increment_downloads(self.db, resource_id)

        logger.info(
            "Resource downloaded",
            extra={"resource_id": str(resource_id), "user_id": str(user.id)},
        )
        await self.analytics.track_event(
            AnalyticsEventType.RESOURCE_DOWNLOAD,
            {"title": resource.title},
            user_id=user.id,
            resource_id=resource.id,
        )
        return {
            "url": url,
            "file_name": resource.file_name or resource.file_key.rsplit("/", 1)[-1],
            "expires_at": expires_at,
        }

    async def list_creator_resources(
        self,
        creator_id: UUID,
        status: ResourceStatus | None = None,
        creator_name: str | None = None,
    ) -> list[dict]:
        """A creator's own resources, newest first, optionally by status."""
        resources = await resource_crud.list_by_creator(self.db, creator_id, status=status)
        return [resource_to_dict(r, creator_name) for r in resources]

    async def update_resource(self, user: UserModel, resource_id: UUID, **changes) -> dict:
        """
        Edit resource metadata.

        An approved resource edited by its creator goes back to pending.

        Args:
            user: Owning creator or an admin
            resource_id: Resource UUID
            **changes: title, description, price, category, tags, thumbnail_key

        Raises:
            NotFoundError: Unknown resource
            PermissionDeniedError: Not the owner
            ValidationError: Invalid field values
        """
        resource = await self._get_owned(user, resource_id)
        values: dict[str, Any] = {}

        if changes.get("title") is not None:
            values["title"] = _validate_title(changes["title"])
        if changes.get("description") is not None:
            values["description"] = _validate_description(changes["description"])
        if changes.get("price") is not None:
            values["price"] = _validate_price(changes["price"])
        if changes.get("category") is not None:
            if not await self.categories.category_exists(changes["category"]):
                raise ValidationError(f"Unknown category '{changes['category']}'", field="category")
            values["category"] = changes["category"]
        if changes.get("tags") is not None:
            values["tags"] = parse_tags(changes["tags"])
        if changes.get("thumbnail_key"):
            values["thumbnail"] = self._thumbnail_url(resource.creator_id, changes["thumbnail_key"])
            values["thumbnail_key"] = changes["thumbnail_key"]

        old_category = resource.category
        old_thumbnail_key = resource.thumbnail_key
        if values:
            if resource.creator_id == user.id and resource.status == ResourceStatus.APPROVED:
                values["status"] = ResourceStatus.PENDING
            await resource_crud.update_by_id(self.db, resource_id, **values)
            await self.categories.refresh_counts(old_category, values.get("category"))
            if "thumbnail_key" in values and old_thumbnail_key and old_thumbnail_key != values["thumbnail_key"]:
                try:
                    self.storage.delete_object(old_thumbnail_key)
                except StorageError as e:
                    logger.warning(
                        "Failed to delete old thumbnail",
                        extra={"key": old_thumbnail_key, "error": str(e)},
                    )
            logger.info(
                "Resource updated",
                extra={"resource_id": str(resource_id), "fields": sorted(values)},
            )

        resource, creator_name = await resource_crud.get_with_creator(self.db, resource_id)
        return resource_to_dict(resource, creator_name)

    async def delete_resource(self, user: UserModel, resource_id: UUID) -> None:
        """
        Delete a resource and, best-effort, its stored objects.

        Raises:
            NotFoundError: Unknown resource
            PermissionDeniedError: Not the owner or an admin
        """
        resource = await self._get_owned(user, resource_id)
        self._remove_objects(resource)
        await resource_crud.delete_by_id(self.db, resource_id)
        await self.categories.refresh_counts(resource.category)
        logger.info(
            "Resource deleted",
            extra={"resource_id": str(resource_id), "deleted_by": str(user.id)},
        )

    async def delete_creator_resources(self, creator_id: UUID) -> int:
        """Delete every resource of a creator (account removal)."""
        resources = await resource_crud.list_by_creator(self.db, creator_id)
        for resource in resources:
            self._remove_objects(resource)
            await resource_crud.delete_by_id(self.db, resource.id)
        await self.categories.refresh_counts(*(r.category for r in resources))
        return len(resources)

    async def admin_list_resources(
        self,
        status: ResourceStatus | None = None,
        category: str | None = None,
        search: str | None = None,
        sort: ResourceSort = ResourceSort.NEWEST,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict:
        """Moderation listing across all statuses."""
        filters = ResourceFilters(
            status=status,
            category=category or None,
            search=normalize_search(search),
        )
        return await self._paginate(filters, sort, limit, offset)

    async def set_status(self, resource_id: UUID, status: ResourceStatus) -> dict:
        """
        Approve or reject a resource and refresh its category count.

        Raises:
            NotFoundError: Unknown resource
        """
        resource = await resource_crud.update_by_id(self.db, resource_id, status=status)
        if resource is None:
            raise NotFoundError("resource", resource_id)
        await self.categories.refresh_counts(resource.category)
        logger.info(
            "Resource status changed",
            extra={"resource_id": str(resource_id), "status": status.value},
        )
        resource, creator_name = await resource_crud.get_with_creator(self.db, resource_id)
        return resource_to_dict(resource, creator_name)

    async def set_featured(self, resource_id: UUID, featured: bool) -> dict:
        """
        Feature or unfeature a resource.

        Raises:
            NotFoundError: Unknown resource
        """
        resource = await resource_crud.update_by_id(self.db, resource_id, featured=featured)
        if resource is None:
            raise NotFoundError("resource", resource_id)
        logger.info(
            "Resource featured flag changed",
            extra={"resource_id": str(resource_id), "featured": featured},
        )
        resource, creator_name = await resource_crud.get_with_creator(self.db, resource_id)
        return resource_to_dict(resource, creator_name)
