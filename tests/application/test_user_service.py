"""
Test suite for UserService.

Tests profile and settings updates, avatar uploads, purchase history and
admin account management.

System role: Verification of account use cases
"""

import uuid
from unittest.mock import MagicMock

import pytest

from resourcehub.application.services.purchase_service import PurchaseService
from resourcehub.application.services.user_service import UserService
from resourcehub.boundary.db.CRUD import resource_crud, user_crud
from resourcehub.boundary.db.models import UserRole, UserStatus
from resourcehub.core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)


@pytest.fixture
def user_service(test_async_db, mock_storage: MagicMock, settings) -> UserService:
    return UserService(test_async_db, mock_storage, settings)


class TestProfile:
    """Test suite for get_profile(), update_profile() and update_settings()."""

    async def test_update_profile_should_merge_social_links(
        self, user_service: UserService, make_user, test_async_db
    ) -> None:
        # Arrange
        user = await make_user(name="Old")
        await user_crud.update_by_id(test_async_db, user.id, social={"twitter": "@old"})

        # Act
        profile = await user_service.update_profile(
            user.id, name=" New ", social={"linkedin": "in/new", "facebook": None}
        )

        # Assert
        assert profile["name"] == "New"
        assert profile["social"] == {"twitter": "@old", "linkedin": "in/new"}

    async def test_update_settings_should_return_effective_settings(
        self, user_service: UserService, make_user
    ) -> None:
        # Arrange
        user = await make_user()

        # Act
        await user_service.update_settings(user.id, {"theme": "dark"})
        merged = await user_service.update_settings(user.id, {"marketingEmails": True})

        # Assert
        assert merged["theme"] == "dark"
        assert merged["marketingEmails"] is True
        assert merged["language"] == "en"

    async def test_unknown_user_should_raise(self, user_service: UserService) -> None:
        with pytest.raises(NotFoundError):
            await user_service.get_profile(uuid.uuid4())


class TestAvatar:
    """Test suite for request_avatar_upload() and confirm_avatar()."""

    async def test_confirm_should_swap_avatar_and_delete_previous(
        self, user_service: UserService, make_user, mock_storage
    ) -> None:
        # Arrange
        user = await make_user()
        first = await user_service.request_avatar_upload(user.id, "me.png", "image/png", 1000)
        await user_service.confirm_avatar(user.id, first["key"])
        second = await user_service.request_avatar_upload(user.id, "me2.png", "image/png", 1000)

        # Act
        profile = await user_service.confirm_avatar(user.id, second["key"])

        # Assert
        assert profile["avatar"] == f"https://cdn.example.com/{second['key']}"
        mock_storage.delete_object.assert_called_once_with(first["key"])

    async def test_foreign_key_should_be_rejected(
        self, user_service: UserService, make_user
    ) -> None:
        user = await make_user()
        with pytest.raises(ValidationError):
            await user_service.confirm_avatar(user.id, f"avatars/{uuid.uuid4()}/x-me.png")

    async def test_non_image_should_be_rejected(self, user_service: UserService, make_user) -> None:
        user = await make_user()
        with pytest.raises(ValidationError):
            await user_service.request_avatar_upload(user.id, "me.pdf", "application/pdf", 10)


class TestPurchaseHistory:
    """Test suite for get_purchases()."""

    async def test_history_should_skip_deleted_resources(
        self, user_service: UserService, test_async_db, make_user, make_creator, make_resource
    ) -> None:
        # Arrange
        creator = await make_creator(name="Maker")
        buyer = await make_user()
        kept = await make_resource(creator, title="Kept")
        gone = await make_resource(creator, title="Gone")
        purchases = PurchaseService(test_async_db)
        await purchases.purchase(buyer, kept.id)
        await purchases.purchase(buyer, gone.id)
        await resource_crud.delete_by_id(test_async_db, gone.id)

        # Act
        history = await user_service.get_purchases(buyer.id)

        # Assert
        assert len(history) == 1
        assert history[0]["resource"]["title"] == "Kept"
        assert history[0]["resource"]["creator_name"] == "Maker"


class TestAdminManagement:
    """Test suite for list_users(), change_role(), change_status() and delete_user()."""

    async def test_list_users_should_filter_by_status(
        self, user_service: UserService, make_user
    ) -> None:
        await make_user(status=UserStatus.SUSPENDED, name="Banned")
        await make_user(name="Fine")
        page = await user_service.list_users(status=UserStatus.SUSPENDED)
        assert [u["name"] for u in page["items"]] == ["Banned"]

    async def test_admin_should_not_demote_or_suspend_self(
        self, user_service: UserService, make_user
    ) -> None:
        admin = await make_user(role=UserRole.ADMIN)
        with pytest.raises(PermissionDeniedError):
            await user_service.change_role(admin, admin.id, UserRole.USER)
        with pytest.raises(PermissionDeniedError):
            await user_service.change_status(admin, admin.id, UserStatus.SUSPENDED)
        with pytest.raises(PermissionDeniedError):
            await user_service.delete_user(admin, admin.id)

    async def test_change_role_and_status(self, user_service: UserService, make_user) -> None:
        admin = await make_user(role=UserRole.ADMIN)
        target = await make_user()
        assert (await user_service.change_role(admin, target.id, UserRole.CREATOR))["role"] == "creator"
        assert (await user_service.change_status(admin, target.id, UserStatus.SUSPENDED))["status"] == "suspended"

    async def test_delete_user_should_remove_resources_and_avatar(
        self, user_service: UserService, make_user, make_creator, make_resource, mock_storage, test_async_db
    ) -> None:
        # Arrange
        admin = await make_user(role=UserRole.ADMIN)
        creator = await make_creator()
        resource = await make_resource(creator)
        await user_crud.update_by_id(test_async_db, creator.id, avatar_key="avatars/x/me.png")
        mock_storage.delete_object.side_effect = [None, StorageError("gone")]

        # Act
        await user_service.delete_user(admin, creator.id)

        # Assert
        assert await user_crud.get_by_id(test_async_db, creator.id) is None
        assert await resource_crud.get_by_id(test_async_db, resource.id) is None
        deleted_keys = [c.args[0] for c in mock_storage.delete_object.call_args_list]
        assert deleted_keys == [resource.file_key, "avatars/x/me.png"]
