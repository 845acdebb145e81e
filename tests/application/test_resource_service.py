"""
Test suite for ResourceService.

Tests presigned uploads, creation, browsing, detail visibility, downloads,
edits and moderation. Storage is mocked; the database is in-memory SQLite.

System role: Verification of resource lifecycle orchestration
"""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import text

from resourcehub.application.services.resource_service import ResourceService
from resourcehub.boundary.db.CRUD import analytics_event_crud, category_crud, resource_crud
from resourcehub.boundary.db.models import CreatorStatus, ResourceStatus, UserRole
from resourcehub.core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from resourcehub.core.listing import ResourceSort


@pytest.fixture
def resource_service(test_async_db, mock_storage: MagicMock, settings) -> ResourceService:
    """Provide ResourceService with mocked storage."""
    return ResourceService(test_async_db, mock_storage, settings)


def _create_kwargs(creator, **overrides) -> dict:
    values = {
        "title": "Watercolor Brushes",
        "description": "Forty hand-made watercolor brushes",
        "price": "12.50",
        "category": "graphic-design",
        "file_key": f"resources/{creator.id}/abcd1234-brushes.zip",
        "file_name": "brushes.zip",
        "file_size": 2048,
        "file_type": "application/zip",
        "tags": "brushes, watercolor, brushes",
    }
    values.update(overrides)
    return values


class TestRequestUploadUrl:
    """Test suite for ResourceService.request_upload_url()."""

    async def test_approved_creator_should_get_scoped_key(
        self, resource_service: ResourceService, make_creator, mock_storage
    ) -> None:
        # Arrange
        creator = await make_creator()

        # Act
        upload = await resource_service.request_upload_url(
            creator, kind="resources", filename="pack.zip", content_type="application/zip", file_size=1000
        )

        # Assert
        assert upload["key"].startswith(f"resources/{creator.id}/")
        assert upload["public_url"] is None
        mock_storage.generate_presigned_upload_url.assert_called_once()

    async def test_thumbnail_upload_should_return_public_url(
        self, resource_service: ResourceService, make_creator
    ) -> None:
        creator = await make_creator()
        upload = await resource_service.request_upload_url(
            creator, kind="thumbnails", filename="cover.png", content_type="image/png", file_size=1000
        )
        assert upload["public_url"] == f"https://cdn.example.com/{upload['key']}"

    async def test_pending_creator_should_be_refused(
        self, resource_service: ResourceService, make_user
    ) -> None:
        # Arrange
        pending = await make_user(role=UserRole.CREATOR, creator_status=CreatorStatus.PENDING)

        # Act / Assert
        with pytest.raises(PermissionDeniedError):
            await resource_service.request_upload_url(
                pending, kind="resources", filename="pack.zip", content_type="application/zip", file_size=10
            )

    async def test_plan_limit_should_block_sixth_free_upload(
        self, resource_service: ResourceService, make_creator, make_resource
    ) -> None:
        # Arrange
        creator = await make_creator(plan="free")
        for i in range(5):
            await make_resource(creator, title=f"Resource {i}")

        # Act / Assert
        with pytest.raises(PermissionDeniedError, match="free plan"):
            await resource_service.request_upload_url(
                creator, kind="resources", filename="pack.zip", content_type="application/zip", file_size=10
            )

    async def test_admin_should_bypass_creator_checks(
        self, resource_service: ResourceService, make_user
    ) -> None:
        admin = await make_user(role=UserRole.ADMIN)
        upload = await resource_service.request_upload_url(
            admin, kind="resources", filename="pack.zip", content_type="application/zip", file_size=10
        )
        assert upload["key"].startswith(f"resources/{admin.id}/")

    @pytest.mark.parametrize(
        "kind, filename, size",
        [
            ("resources", "virus.exe", 10),
            ("thumbnails", "cover.pdf", 10),
            ("thumbnails", "cover.png", 2 * 1024 * 1024),
            ("avatars", "me.png", 10),
            ("videos", "clip.mp4", 10),
        ],
    )
    async def test_invalid_requests_should_be_rejected(
        self, resource_service: ResourceService, make_creator, kind, filename, size
    ) -> None:
        creator = await make_creator()
        with pytest.raises(ValidationError):
            await resource_service.request_upload_url(
                creator, kind=kind, filename=filename, content_type="x", file_size=size
            )


class TestCreateResource:
    """Test suite for ResourceService.create_resource()."""

    async def test_create_should_store_pending_resource(
        self, resource_service: ResourceService, make_creator, test_async_db
    ) -> None:
        # Arrange
        creator = await make_creator(name="Maker")

        # Act
        resource = await resource_service.create_resource(creator, **_create_kwargs(creator))

        # Assert
        assert resource["status"] == "pending"
        assert resource["price"] == Decimal("12.50")
        assert resource["tags"] == ["brushes", "watercolor"]
        assert resource["creator_name"] == "Maker"
        assert resource["downloads"] == 0
        events = await analytics_event_crud.get_all(test_async_db)
        assert [e.event_type for e in events] == ["upload_resource"]

    async def test_pending_resource_should_not_count_in_category(
        self, resource_service: ResourceService, make_creator, test_async_db
    ) -> None:
        creator = await make_creator()
        await resource_service.create_resource(creator, **_create_kwargs(creator))
        category = await category_crud.get_by_slug(test_async_db, "graphic-design")
        assert category.count == 0

    async def test_thumbnail_key_should_resolve_to_public_url(
        self, resource_service: ResourceService, make_creator
    ) -> None:
        creator = await make_creator()
        key = f"thumbnails/{creator.id}/abcd1234-cover.png"
        resource = await resource_service.create_resource(
            creator, **_create_kwargs(creator, thumbnail_key=key)
        )
        assert resource["thumbnail"] == f"https://cdn.example.com/{key}"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": "ab"},
            {"description": "too short"},
            {"price": "-1"},
            {"price": "free"},
            {"category": "no-such-category"},
        ],
    )
    async def test_invalid_fields_should_be_rejected(
        self, resource_service: ResourceService, make_creator, overrides
    ) -> None:
        creator = await make_creator()
        with pytest.raises(ValidationError):
            await resource_service.create_resource(creator, **_create_kwargs(creator, **overrides))

    async def test_foreign_file_key_should_be_rejected(
        self, resource_service: ResourceService, make_creator
    ) -> None:
        creator = await make_creator()
        other = await make_creator()
        with pytest.raises(ValidationError, match="not issued"):
            await resource_service.create_resource(
                creator,
                **_create_kwargs(creator, file_key=f"resources/{other.id}/abcd1234-x.zip"),
            )

    async def test_missing_upload_should_be_rejected(
        self, resource_service: ResourceService, make_creator, mock_storage
    ) -> None:
        creator = await make_creator()
        mock_storage.file_exists.return_value = False
        with pytest.raises(ValidationError, match="not been uploaded"):
            await resource_service.create_resource(creator, **_create_kwargs(creator))


class TestBrowseAndDetail:
    """Test suite for browse_resources() and get_resource()."""

    async def test_browse_should_only_list_approved(
        self, resource_service: ResourceService, make_creator, make_resource
    ) -> None:
        # Arrange
        creator = await make_creator(name="Maker")
        await make_resource(creator, title="Live")
        await make_resource(creator, title="Hidden", status=ResourceStatus.PENDING)
        await make_resource(creator, title="Declined", status=ResourceStatus.REJECTED)

        # Act
        page = await resource_service.browse_resources()

        # Assert
        assert page["total"] == 1
        assert page["items"][0]["title"] == "Live"
        assert page["items"][0]["creator_name"] == "Maker"
        assert page["limit"] == 12
        assert page["has_more"] is False

    async def test_browse_should_paginate(
        self, resource_service: ResourceService, make_creator, make_resource
    ) -> None:
        # Arrange
        creator = await make_creator()
        for title in ("Alpha", "Bravo", "Charlie"):
            await make_resource(creator, title=title)

        # Act
        page = await resource_service.browse_resources(sort=ResourceSort.TITLE_ASC, limit=2)

        # Assert
        assert [r["title"] for r in page["items"]] == ["Alpha", "Bravo"]
        assert page["has_more"] is True

    async def test_search_should_be_tracked(
        self, resource_service: ResourceService, make_creator, make_resource, test_async_db
    ) -> None:
        creator = await make_creator()
        await make_resource(creator, title="Retro Fonts")

        page = await resource_service.browse_resources(search="  retro ")

        assert page["total"] == 1
        events = await analytics_event_crud.get_all(test_async_db)
        assert events[0].event_type == "search"
        assert events[0].data == {"term": "retro", "results": 1}

    async def test_uncategorized_resource_should_read_as_other(
        self, resource_service: ResourceService, make_creator, make_resource
    ) -> None:
        creator = await make_creator()
        await make_resource(creator, category=None)
        page = await resource_service.browse_resources()
        assert page["items"][0]["category"] == "other"

    async def test_detail_should_count_view_and_include_rating(
        self, resource_service: ResourceService, make_creator, make_resource, test_async_db
    ) -> None:
        # Arrange
        creator = await make_creator()
        resource = await make_resource(creator)

        # Act
        detail = await resource_service.get_resource(resource.id)
        await test_async_db.refresh(resource)

        # Assert
        assert detail["average_rating"] is None
        assert detail["review_count"] == 0
        assert detail["has_access"] is False
        assert resource.views == 1

    async def test_failed_view_count_should_not_break_the_read(
        self, resource_service: ResourceService, make_creator, make_resource, test_async_db
    ) -> None:
        # Arrange
        resource = await make_resource(await make_creator())

        async def broken_increment(session, id):
            await session.execute(text("UPDATE no_such_table SET views = views + 1"))

        # Act
        with patch.object(resource_crud, "increment_views", broken_increment):
            detail = await resource_service.get_resource(resource.id)
        await test_async_db.commit()

        # Assert
        assert detail["id"] == resource.id
        assert (await resource_crud.get_by_id(test_async_db, resource.id)).views == 0

    @pytest.mark.parametrize("term", ["%", "_", "\\"])
    async def test_search_wildcards_should_match_literally(
        self, resource_service: ResourceService, make_creator, make_resource, term
    ) -> None:
        await make_resource(await make_creator(), title="Plain guide")
        page = await resource_service.browse_resources(search=term)
        assert page["total"] == 0

    async def test_search_should_find_literal_percent(
        self, resource_service: ResourceService, make_creator, make_resource
    ) -> None:
        # Arrange
        creator = await make_creator()
        await make_resource(creator, title="100% vector icons")
        await make_resource(creator, title="1000 vector icons")

        # Act
        page = await resource_service.browse_resources(search="100%")

        # Assert
        assert [r["title"] for r in page["items"]] == ["100% vector icons"]

    async def test_pending_detail_should_be_hidden_from_public(
        self, resource_service: ResourceService, make_user, make_creator, make_resource
    ) -> None:
        creator = await make_creator()
        resource = await make_resource(creator, status=ResourceStatus.PENDING)
        with pytest.raises(NotFoundError):
            await resource_service.get_resource(resource.id, await make_user())

    async def test_pending_detail_should_be_visible_to_owner_and_admin(
        self, resource_service: ResourceService, make_user, make_creator, make_resource
    ) -> None:
        # Arrange
        creator = await make_creator()
        admin = await make_user(role=UserRole.ADMIN)
        resource = await make_resource(creator, status=ResourceStatus.PENDING)

        # Act
        as_owner = await resource_service.get_resource(resource.id, creator)
        as_admin = await resource_service.get_resource(resource.id, admin)

        # Assert
        assert as_owner["has_access"] is True
        assert as_admin["status"] == "pending"


class TestDownload:
    """Test suite for ResourceService.download_resource()."""

    async def test_free_resource_should_download_and_count(
        self, resource_service: ResourceService, make_user, make_creator, make_resource, test_async_db, mock_storage
    ) -> None:
        # Arrange
        resource = await make_resource(await make_creator(), price="0.00")
        user = await make_user()

        # Act
        download = await resource_service.download_resource(resource.id, user)
        await test_async_db.refresh(resource)

        # Assert
        assert download["url"].startswith("https://s3.example.com/download")
        assert download["file_name"] == "file.pdf"
        assert resource.downloads == 1
        mock_storage.generate_presigned_download_url.assert_called_once_with(
            resource.file_key, expires_in=3600, filename="file.pdf"
        )

    async def test_paid_resource_without_purchase_should_be_refused(
        self, resource_service: ResourceService, make_user, make_creator, make_resource
    ) -> None:
        resource = await make_resource(await make_creator(), price="5.00")
        with pytest.raises(PermissionDeniedError):
            await resource_service.download_resource(resource.id, await make_user())

    async def test_creator_should_download_own_resource(
        self, resource_service: ResourceService, make_creator, make_resource
    ) -> None:
        creator = await make_creator()
        resource = await make_resource(creator, price="5.00", status=ResourceStatus.PENDING)
        download = await resource_service.download_resource(resource.id, creator)
        assert download["file_name"] == "file.pdf"


class TestUpdateAndDelete:
    """Test suite for update_resource(), delete_resource() and moderation."""

    async def test_owner_edit_should_send_approved_resource_back_to_review(
        self, resource_service: ResourceService, make_creator, make_resource, test_async_db
    ) -> None:
        # Arrange
        creator = await make_creator()
        resource = await make_resource(creator, category="ebooks")
        await resource_service.categories.refresh_counts("ebooks")

        # Act
        updated = await resource_service.update_resource(
            creator, resource.id, title="Better Title", category="courses"
        )

        # Assert
        assert updated["status"] == "pending"
        assert updated["category"] == "courses"
        ebooks = await category_crud.get_by_slug(test_async_db, "ebooks")
        assert ebooks.count == 0

    async def test_admin_edit_should_keep_status(
        self, resource_service: ResourceService, make_user, make_creator, make_resource
    ) -> None:
        admin = await make_user(role=UserRole.ADMIN)
        resource = await make_resource(await make_creator())
        updated = await resource_service.update_resource(admin, resource.id, price="1.00")
        assert updated["status"] == "approved"
        assert updated["price"] == Decimal("1.00")

    async def test_other_creator_should_not_edit(
        self, resource_service: ResourceService, make_creator, make_resource
    ) -> None:
        resource = await make_resource(await make_creator())
        with pytest.raises(PermissionDeniedError):
            await resource_service.update_resource(await make_creator(), resource.id, title="Mine now")

    async def test_delete_should_remove_objects_even_when_storage_fails(
        self, resource_service: ResourceService, make_creator, make_resource, mock_storage, test_async_db
    ) -> None:
        # Arrange
        creator = await make_creator()
        resource = await make_resource(creator, thumbnail_key=f"thumbnails/{creator.id}/x-cover.png")
        mock_storage.delete_object.side_effect = StorageError("boom")

        # Act
        await resource_service.delete_resource(creator, resource.id)

        # Assert
        assert mock_storage.delete_object.call_count == 2
        assert await resource_crud.get_by_id(test_async_db, resource.id) is None

    async def test_approval_should_update_category_count(
        self, resource_service: ResourceService, make_creator, make_resource, test_async_db
    ) -> None:
        # Arrange
        resource = await make_resource(await make_creator(), category="video", status=ResourceStatus.PENDING)

        # Act
        approved = await resource_service.set_status(resource.id, ResourceStatus.APPROVED)

        # Assert
        assert approved["status"] == "approved"
        video = await category_crud.get_by_slug(test_async_db, "video")
        assert video.count == 1

    async def test_set_featured_unknown_resource_should_raise(
        self, resource_service: ResourceService
    ) -> None:
        import uuid

        with pytest.raises(NotFoundError):
            await resource_service.set_featured(uuid.uuid4(), True)

    async def test_admin_listing_should_filter_by_status(
        self, resource_service: ResourceService, make_creator, make_resource
    ) -> None:
        creator = await make_creator()
        await make_resource(creator, title="Queued", status=ResourceStatus.PENDING)
        await make_resource(creator, title="Live")

        page = await resource_service.admin_list_resources(status=ResourceStatus.PENDING)

        assert [r["title"] for r in page["items"]] == ["Queued"]
