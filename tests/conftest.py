"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, settings, storage mock, user and
resource factories
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from resourcehub.boundary.aws.s3_client import S3StorageClient
from resourcehub.boundary.db.models import (
    CreatorStatus,
    ResourceStatus,
    UserModel,
    UserRole,
    UserStatus,
)
from resourcehub.configs import Settings
from resourcehub.configs.auth import AuthSettings
from resourcehub.configs.marketplace import MarketplaceSettings
from resourcehub.configs.storage import StorageSettings

EXPIRES_AT = datetime(2030, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Default categories are seeded so resources can reference them.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy import event
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from resourcehub.boundary.db.base import Base
    from resourcehub.boundary.db.create_tables import seed_default_categories

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite begins transactions lazily; emit BEGIN ourselves so SAVEPOINT nests
    @event.listens_for(engine.sync_engine, "connect")
    def _autocommit_driver(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _explicit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        await seed_default_categories(session)
        await session.flush()
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def settings() -> Settings:
    """
    Settings for a non-development environment so analytics persist.

    Password hashing uses few iterations to keep tests fast.
    """
    return Settings(
        environment="test",
        auth=AuthSettings(secret_key="test-secret", password_hash_iterations=1000),
        storage=StorageSettings(
            bucket="test-bucket",
            max_resource_size=10 * 1024 * 1024,
            max_image_size=1024 * 1024,
        ),
        marketplace=MarketplaceSettings(page_size=12, max_page_size=100),
    )


@pytest.fixture
def mock_storage() -> MagicMock:
    """
    Create mock S3StorageClient.

    Every key exists; public URLs point at a fake CDN.
    """
    storage = MagicMock(spec=S3StorageClient)
    storage.generate_presigned_upload_url.return_value = (
        "https://s3.example.com/upload?signature=abc",
        EXPIRES_AT,
    )
    storage.generate_presigned_download_url.return_value = (
        "https://s3.example.com/download?signature=abc",
        EXPIRES_AT,
    )
    storage.file_exists.return_value = True
    storage.public_url.side_effect = lambda key: f"https://cdn.example.com/{key}"
    return storage


@pytest.fixture
def make_user(test_async_db):
    """Factory creating users directly through the CRUD layer."""
    from resourcehub.boundary.db.CRUD import user_crud

    async def _make(
        role: UserRole = UserRole.USER,
        name: str = "Test User",
        email: str | None = None,
        creator_status: CreatorStatus | None = None,
        plan: str = "free",
        status: UserStatus = UserStatus.ACTIVE,
    ) -> UserModel:
        return await user_crud.create(
            test_async_db,
            email=email or f"{uuid.uuid4().hex[:10]}@example.com",
            password_hash="pbkdf2_sha256$1$salt$unused",
            name=name,
            role=role,
            status=status,
            creator_status=creator_status,
            plan=plan,
            social={},
            settings={},
        )

    return _make


@pytest.fixture
def make_creator(make_user):
    """Factory for approved creators."""

    async def _make(name: str = "Creator", plan: str = "free", **kwargs) -> UserModel:
        return await make_user(
            role=UserRole.CREATOR,
            name=name,
            creator_status=CreatorStatus.APPROVED,
            plan=plan,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_resource(test_async_db):
    """Factory creating resources directly through the CRUD layer."""
    from resourcehub.boundary.db.CRUD import resource_crud

    async def _make(
        creator: UserModel,
        title: str = "Sample Resource",
        price: str = "9.99",
        category: str | None = "educational",
        status: ResourceStatus = ResourceStatus.APPROVED,
        **fields,
    ):
        values = {
            "description": "A useful sample resource for tests",
            "tags": [],
            "downloads": 0,
            "views": 0,
            "featured": False,
            "file_key": f"resources/{creator.id}/abcd1234-file.pdf",
            "file_name": "file.pdf",
            "file_type": "application/pdf",
            "file_size": 1024,
        }
        values.update(fields)
        return await resource_crud.create(
            test_async_db,
            title=title,
            price=Decimal(price),
            category=category,
            creator_id=creator.id,
            status=status,
            **values,
        )

    return _make
