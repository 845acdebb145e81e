"""
User service orchestrator.

Profile and preference management for signed-in users, plus the admin
user directory (role/status changes and account removal).

Dependencies: resourcehub.boundary.db.CRUD, resourcehub.boundary.aws
System role: Account use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from resourcehub.application.services.analytics_service import AnalyticsService
from resourcehub.application.services.mappers import (
    UNCATEGORIZED,
    UNKNOWN_CREATOR,
    effective_settings,
    purchase_to_dict,
    user_to_dict,
)
from resourcehub.application.services.resource_service import ResourceService
from resourcehub.boundary.aws.s3_client import S3StorageClient
from resourcehub.boundary.db.CRUD import purchase_crud, user_crud
from resourcehub.boundary.db.models import AnalyticsEventType, UserModel, UserRole, UserStatus
from resourcehub.configs import Settings, get_settings
from resourcehub.core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from resourcehub.core.listing import Page, normalize_search
from resourcehub.core.uploads import (
    UploadKind,
    generate_object_key,
    key_belongs_to,
    validate_filename,
    validate_size,
)

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "bio", "website")


class UserService:
    """User service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        storage: S3StorageClient,
        settings: Settings | None = None,
        analytics: AnalyticsService | None = None,
    ) -> None:
        """
        Initialize user service.

        Args:
            db: Async SQLAlchemy session
            storage: Object storage client for avatars
            settings: Application settings (defaults to the cached singleton)
            analytics: Event tracker (defaults to one bound to db)
        """
        self.db = db
        self.storage = storage
        self.settings = settings or get_settings()
        self.analytics = analytics or AnalyticsService(db, self.settings)

    async def _get_user(self, user_id: UUID) -> UserModel:
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    async def get_profile(self, user_id: UUID) -> dict:
        """
        Get a user with read-time defaults applied.

        Raises:
            NotFoundError: Unknown user
        """
        return user_to_dict(await self._get_user(user_id))

    async def update_profile(
        self,
        user_id: UUID,
        name: str | None = None,
        bio: str | None = None,
        website: str | None = None,
        social: dict | None = None,
    ) -> dict:
        """
        Update name, bio, website and social links.

        Omitted (None) fields keep their value; social links are merged.
        """
        user = await self._get_user(user_id)
        values = {
            field: value.strip()
            for field, value in zip(PROFILE_FIELDS, (name, bio, website))
            if value is not None
        }
        if social is not None:
            links = {k: v for k, v in social.items() if v is not None}
            values["social"] = {**(user.social or {}), **links}

        if values:
            user = await user_crud.update_by_id(self.db, user_id, **values)
            logger.info(
                "Profile updated",
                extra={"user_id": str(user_id), "fields": sorted(values)},
            )
            await self.analytics.track_event(
                AnalyticsEventType.UPDATE_PROFILE,
                {"fields": sorted(values)},
                user_id=user_id,
            )
        return user_to_dict(user)

    async def update_settings(self, user_id: UUID, changes: dict) -> dict:
        """
        Shallow-merge preference changes over the stored settings.

        Returns:
            dict: Effective settings after the merge
        """
        user = await self._get_user(user_id)
        changes = {k: v for k, v in changes.items() if v is not None}
        merged = {**(user.settings or {}), **changes}
        await user_crud.update_by_id(self.db, user_id, settings=merged)

        logger.info("Settings updated", extra={"user_id": str(user_id), "keys": sorted(changes)})
        await self.analytics.track_event(
            AnalyticsEventType.UPDATE_SETTINGS,
            {"keys": sorted(changes)},
            user_id=user_id,
        )
        return effective_settings(merged)

    async def request_avatar_upload(
        self,
        user_id: UUID,
        filename: str,
        content_type: str,
        file_size: int,
    ) -> dict:
        """
        Issue a presigned PUT URL for a new avatar image.

        Raises:
            ValidationError: Not an allowed image or too large
        """
        validate_filename(UploadKind.AVATAR, filename)
        storage_settings = self.settings.storage
        validate_size(
            UploadKind.AVATAR,
            file_size,
            storage_settings.max_resource_size,
            storage_settings.max_image_size,
        )
        key = generate_object_key(UploadKind.AVATAR, str(user_id), filename)
        upload_url, expires_at = self.storage.generate_presigned_upload_url(
            key,
            content_type=content_type,
            expires_in=storage_settings.presigned_url_expiry,
        )
        return {
            "upload_url": upload_url,
            "key": key,
            "expires_at": expires_at,
            "public_url": self.storage.public_url(key),
        }

    async def confirm_avatar(self, user_id: UUID, key: str) -> dict:
        """
        Point the profile at an uploaded avatar; remove the previous one.

        Raises:
            ValidationError: Key not issued to this user or not uploaded
        """
        user = await self._get_user(user_id)
        if not key_belongs_to(key, UploadKind.AVATAR, str(user_id)):
            raise ValidationError("Avatar key was not issued to you", field="key")
        if not self.storage.file_exists(key):
            raise ValidationError("Avatar has not been uploaded", field="key")

        previous_key = user.avatar_key
        user = await user_crud.update_by_id(
            self.db,
            user_id,
            avatar=self.storage.public_url(key),
            avatar_key=key,
        )
        if previous_key and previous_key != key:
            try:
                self.storage.delete_object(previous_key)
            except StorageError as e:
                logger.warning(
                    "Failed to delete previous avatar",
                    extra={"user_id": str(user_id), "key": previous_key, "error": str(e)},
                )

        logger.info("Avatar updated", extra={"user_id": str(user_id)})
        return user_to_dict(user)

    async def get_purchases(self, user_id: UUID) -> list[dict]:
        """
        A user's purchase history with resource summaries, newest first.

        Purchases whose resource was deleted are skipped.
        """
        rows = await purchase_crud.list_for_user_with_resources(self.db, user_id)
        rows = [(purchase, resource) for purchase, resource in rows if resource is not None]
        names = await user_crud.get_names(self.db, {r.creator_id for _, r in rows})

        history = []
        for purchase, resource in rows:
            item = purchase_to_dict(purchase)
            item["resource"] = {
                "id": resource.id,
                "title": resource.title,
                "thumbnail": resource.thumbnail,
                "category": resource.category or UNCATEGORIZED,
                "creator_name": names.get(resource.creator_id) or UNKNOWN_CREATOR,
            }
            history.append(item)
        return history

    async def list_users(
        self,
        role: UserRole | None = None,
        status: UserStatus | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict:
        """
        Admin user directory, newest first.

        Returns:
            dict: items, total, limit, offset, has_more
        """
        market = self.settings.marketplace
        page = Page.clamp(limit, offset, market.page_size, market.max_page_size)
        users, total = await user_crud.search(
            self.db,
            role=role,
            status=status,
            search=normalize_search(search),
            limit=page.limit,
            offset=page.offset,
        )
        return {
            "items": [user_to_dict(u) for u in users],
            "total": total,
            "limit": page.limit,
            "offset": page.offset,
            "has_more": page.offset + len(users) < total,
        }

    async def change_role(self, admin: UserModel, user_id: UUID, role: UserRole) -> dict:
        """
        Set a user's role.

        Raises:
            PermissionDeniedError: Admin demoting themselves
            NotFoundError: Unknown user
        """
        if admin.id == user_id and role != UserRole.ADMIN:
            raise PermissionDeniedError("Admins cannot demote themselves", user_id=str(admin.id))
        await self._get_user(user_id)
        user = await user_crud.update_by_id(self.db, user_id, role=role)
        logger.info(
            "User role changed",
            extra={"user_id": str(user_id), "role": role.value, "changed_by": str(admin.id)},
        )
        return user_to_dict(user)

    async def change_status(self, admin: UserModel, user_id: UUID, status: UserStatus) -> dict:
        """
        Set a user's account status.

        Raises:
            PermissionDeniedError: Admin suspending themselves
            NotFoundError: Unknown user
        """
        if admin.id == user_id and status != UserStatus.ACTIVE:
            raise PermissionDeniedError(
                "Admins cannot change their own status", user_id=str(admin.id)
            )
        await self._get_user(user_id)
        user = await user_crud.update_by_id(self.db, user_id, status=status)
        logger.info(
            "User status changed",
            extra={"user_id": str(user_id), "status": status.value, "changed_by": str(admin.id)},
        )
        return user_to_dict(user)

    async def delete_user(self, admin: UserModel, user_id: UUID) -> None:
        """
        Remove an account with its resources and avatar.

        Raises:
            PermissionDeniedError: Admin deleting themselves
            NotFoundError: Unknown user
        """
        if admin.id == user_id:
            raise PermissionDeniedError("Admins cannot delete themselves", user_id=str(admin.id))
        user = await self._get_user(user_id)

        resources = ResourceService(self.db, self.storage, self.settings, self.analytics)
        removed = await resources.delete_creator_resources(user_id)
        if user.avatar_key:
            try:
                self.storage.delete_object(user.avatar_key)
            except StorageError as e:
                logger.warning(
                    "Failed to delete avatar",
                    extra={"user_id": str(user_id), "key": user.avatar_key, "error": str(e)},
                )

        await user_crud.delete_by_id(self.db, user_id)
        logger.info(
            "User deleted",
            extra={"user_id": str(user_id), "resources_removed": removed, "deleted_by": str(admin.id)},
        )
