"""
Fixtures for HTTP endpoint tests.

Services are replaced with AsyncMocks through app.dependency_overrides;
the calling user is a transient UserModel.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from resourcehub.api.deps.dependencies import get_current_user, get_optional_user
from resourcehub.api.main import create_app
from resourcehub.boundary.db.models import CreatorStatus, UserModel, UserRole, UserStatus

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def app():
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


def _user(role: UserRole) -> UserModel:
    return UserModel(
        id=uuid.uuid4(),
        email=f"{role.value}@example.com",
        password_hash="unused",
        name=role.value.capitalize(),
        role=role,
        status=UserStatus.ACTIVE,
        creator_status=CreatorStatus.APPROVED if role == UserRole.CREATOR else None,
        plan="free",
        social={},
        settings={},
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def login_as(app):
    """Authenticate every request as a user with the given role."""

    def _login(role: UserRole = UserRole.USER) -> UserModel:
        user = _user(role)
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_optional_user] = lambda: user
        return user

    return _login


@pytest.fixture
def override(app):
    """Install an AsyncMock in place of a service factory."""

    def _override(factory) -> AsyncMock:
        service = AsyncMock()
        app.dependency_overrides[factory] = lambda: service
        return service

    return _override


@pytest.fixture
def user_payload():
    def _payload(**overrides) -> dict:
        payload = {
            "id": uuid.uuid4(),
            "email": "someone@example.com",
            "name": "Someone",
            "avatar": None,
            "role": "user",
            "status": "active",
            "creator_status": None,
            "plan": "free",
            "bio": None,
            "website": None,
            "social": {},
            "settings": {},
            "created_at": NOW,
            "updated_at": NOW,
            "last_login": None,
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def resource_payload():
    def _payload(**overrides) -> dict:
        payload = {
            "id": uuid.uuid4(),
            "title": "Icon Pack",
            "description": "Two hundred icons",
            "price": Decimal("12.50"),
            "category": "graphic-design",
            "creator_id": uuid.uuid4(),
            "creator_name": "Creator",
            "tags": ["icons"],
            "thumbnail": None,
            "file_name": "icons.zip",
            "file_type": "application/zip",
            "file_size": 2048,
            "status": "approved",
            "downloads": 3,
            "views": 10,
            "featured": False,
            "created_at": NOW,
            "updated_at": NOW,
        }
        payload.update(overrides)
        return payload

    return _payload
