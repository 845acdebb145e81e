import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from resourcehub.api.deps.dependencies import (
    get_analytics_service,
    get_category_service,
    get_creator_service,
    get_purchase_service,
    get_report_service,
    get_resource_service,
    get_user_service,
)
from resourcehub.boundary.db.models import (
    CreatorStatus,
    ReportStatus,
    ResourceStatus,
    UserRole,
    UserStatus,
)
from resourcehub.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from resourcehub.core.listing import CreatorSort
from resourcehub.core.periods import Period

NOW = datetime(2024, 3, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize("role", [UserRole.USER, UserRole.CREATOR])
@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/v1/admin/dashboard"),
        ("get", "/api/v1/admin/users"),
        ("get", "/api/v1/admin/reports"),
        ("delete", f"/api/v1/admin/categories/{uuid.uuid4()}"),
    ],
)
def test_admin_routes_reject_non_admins(client, login_as, override, role, method, path):
    login_as(role)
    for factory in (
        get_analytics_service,
        get_user_service,
        get_report_service,
        get_category_service,
    ):
        override(factory)

    response = client.request(method, path)

    assert response.status_code == 403


def test_dashboard(client, login_as, override):
    login_as(UserRole.ADMIN)
    analytics_service = override(get_analytics_service)
    analytics_service.admin_dashboard.return_value = {
        "total_resources": 10,
        "pending_resources": 2,
        "total_users": 30,
        "total_creators": 4,
        "total_downloads": 120,
        "open_reports": 1,
        "total_revenue": Decimal("250.00"),
        "revenue_last_7_days": [
            {"date": "2024-03-01", "revenue": Decimal("0.00")},
        ],
    }

    response = client.get("/api/v1/admin/dashboard")

    assert response.status_code == 200
    assert response.json()["total_revenue"] == 250.0
    assert response.json()["revenue_last_7_days"][0]["date"] == "2024-03-01"


def test_analytics(client, login_as, override):
    login_as(UserRole.ADMIN)
    analytics_service = override(get_analytics_service)
    analytics_service.admin_analytics.return_value = {
        "period": "day",
        "start": NOW,
        "end": NOW,
        "total_users": 3,
        "new_users": 1,
        "total_resources": 2,
        "new_resources": 0,
        "total_purchases": 5,
        "new_purchases": 1,
        "revenue": Decimal("9.99"),
        "events": [],
    }

    response = client.get("/api/v1/admin/analytics?period=day")

    assert response.status_code == 200
    analytics_service.admin_analytics.assert_awaited_once_with(Period.DAY)


def test_list_users(client, login_as, override, user_payload):
    login_as(UserRole.ADMIN)
    user_service = override(get_user_service)
    user_service.list_users.return_value = {
        "items": [user_payload(role="creator")],
        "total": 1,
        "limit": 12,
        "offset": 0,
        "has_more": False,
    }

    response = client.get("/api/v1/admin/users?role=creator&status=active&search=ann")

    assert response.status_code == 200
    assert response.json()["items"][0]["role"] == "creator"
    user_service.list_users.assert_awaited_once_with(
        role=UserRole.CREATOR, status=UserStatus.ACTIVE, search="ann", limit=None, offset=0
    )


def test_change_role(client, login_as, override, user_payload):
    admin = login_as(UserRole.ADMIN)
    user_service = override(get_user_service)
    target = uuid.uuid4()
    user_service.change_role.return_value = user_payload(id=target, role="admin")

    response = client.put(f"/api/v1/admin/users/{target}/role", json={"role": "admin"})

    assert response.status_code == 200
    user_service.change_role.assert_awaited_once_with(admin, target, UserRole.ADMIN)


def test_change_own_status_rejected(client, login_as, override):
    admin = login_as(UserRole.ADMIN)
    user_service = override(get_user_service)
    user_service.change_status.side_effect = PermissionDeniedError(
        "Admins cannot change their own status"
    )

    response = client.put(f"/api/v1/admin/users/{admin.id}/status", json={"status": "suspended"})

    assert response.status_code == 403


def test_change_status_invalid_value(client, login_as, override):
    login_as(UserRole.ADMIN)
    override(get_user_service)
    response = client.put(f"/api/v1/admin/users/{uuid.uuid4()}/status", json={"status": "banned"})
    assert response.status_code == 422


def test_delete_user(client, login_as, override):
    admin = login_as(UserRole.ADMIN)
    user_service = override(get_user_service)
    target = uuid.uuid4()

    response = client.delete(f"/api/v1/admin/users/{target}")

    assert response.status_code == 204
    user_service.delete_user.assert_awaited_once_with(admin, target)


def test_list_creators(client, login_as, override, user_payload):
    login_as(UserRole.ADMIN)
    creator_service = override(get_creator_service)
    creator_service.list_creators.return_value = {
        "items": [
            {
                **user_payload(role="creator", creator_status="approved"),
                "resource_count": 3,
                "downloads": 12,
                "revenue": Decimal("45.00"),
            }
        ],
        "total": 1,
        "limit": 12,
        "offset": 0,
        "has_more": False,
    }

    response = client.get("/api/v1/admin/creators?status=approved&sort=revenue")

    assert response.status_code == 200
    assert response.json()["items"][0]["revenue"] == 45.0
    kwargs = creator_service.list_creators.await_args.kwargs
    assert kwargs["creator_status"] == CreatorStatus.APPROVED
    assert kwargs["sort"] == CreatorSort.REVENUE


def test_approve_creator(client, login_as, override, user_payload):
    login_as(UserRole.ADMIN)
    creator_service = override(get_creator_service)
    target = uuid.uuid4()
    creator_service.approve.return_value = user_payload(
        id=target, role="creator", creator_status="approved"
    )

    response = client.post(f"/api/v1/admin/creators/{target}/approve")

    assert response.status_code == 200
    assert response.json()["creator_status"] == "approved"


def test_reject_unknown_creator(client, login_as, override):
    login_as(UserRole.ADMIN)
    creator_service = override(get_creator_service)
    target = uuid.uuid4()
    creator_service.reject.side_effect = NotFoundError("user", target)

    response = client.post(f"/api/v1/admin/creators/{target}/reject")

    assert response.status_code == 404


def test_moderate_resource(client, login_as, override, resource_payload):
    login_as(UserRole.ADMIN)
    resource_service = override(get_resource_service)
    resource_id = uuid.uuid4()
    resource_service.set_status.return_value = resource_payload(id=resource_id, status="rejected")

    response = client.post(f"/api/v1/admin/resources/{resource_id}/reject")

    assert response.status_code == 200
    resource_service.set_status.assert_awaited_once_with(resource_id, ResourceStatus.REJECTED)


def test_feature_resource(client, login_as, override, resource_payload):
    login_as(UserRole.ADMIN)
    resource_service = override(get_resource_service)
    resource_id = uuid.uuid4()
    resource_service.set_featured.return_value = resource_payload(id=resource_id, featured=False)

    response = client.post(
        f"/api/v1/admin/resources/{resource_id}/feature", json={"featured": False}
    )

    assert response.status_code == 200
    resource_service.set_featured.assert_awaited_once_with(resource_id, False)


def test_admin_resource_listing(client, login_as, override):
    login_as(UserRole.ADMIN)
    resource_service = override(get_resource_service)
    resource_service.admin_list_resources.return_value = {
        "items": [], "total": 0, "limit": 12, "offset": 0, "has_more": False
    }

    response = client.get("/api/v1/admin/resources?status=pending")

    assert response.status_code == 200
    assert resource_service.admin_list_resources.await_args.kwargs["status"] == ResourceStatus.PENDING


def test_delete_resource_as_admin(client, login_as, override):
    admin = login_as(UserRole.ADMIN)
    resource_service = override(get_resource_service)
    resource_id = uuid.uuid4()

    response = client.delete(f"/api/v1/admin/resources/{resource_id}")

    assert response.status_code == 204
    resource_service.delete_resource.assert_awaited_once_with(admin, resource_id)


def _category(**overrides) -> dict:
    category = {
        "id": uuid.uuid4(),
        "slug": "stock-music",
        "name": "Stock Music",
        "description": "",
        "icon": "music",
        "count": 0,
        "featured": False,
        "created_at": NOW,
        "updated_at": NOW,
    }
    category.update(overrides)
    return category


def test_create_category(client, login_as, override):
    login_as(UserRole.ADMIN)
    category_service = override(get_category_service)
    category_service.create_category.return_value = _category()

    response = client.post("/api/v1/admin/categories", json={"name": "Stock Music", "icon": "music"})

    assert response.status_code == 201
    category_service.create_category.assert_awaited_once_with(
        name="Stock Music", slug=None, description="", icon="music", featured=False
    )


def test_create_duplicate_category(client, login_as, override):
    login_as(UserRole.ADMIN)
    category_service = override(get_category_service)
    category_service.create_category.side_effect = ConflictError("Category 'video' already exists")

    response = client.post("/api/v1/admin/categories", json={"name": "Video"})

    assert response.status_code == 409


def test_update_category(client, login_as, override):
    login_as(UserRole.ADMIN)
    category_service = override(get_category_service)
    category_id = uuid.uuid4()
    category_service.update_category.return_value = _category(id=category_id, slug="music")

    response = client.put(f"/api/v1/admin/categories/{category_id}", json={"slug": "music"})

    assert response.status_code == 200
    category_service.update_category.assert_awaited_once_with(category_id, slug="music")


def test_delete_category(client, login_as, override):
    login_as(UserRole.ADMIN)
    category_service = override(get_category_service)
    category_id = uuid.uuid4()

    response = client.delete(f"/api/v1/admin/categories/{category_id}")

    assert response.status_code == 204
    category_service.delete_category.assert_awaited_once_with(category_id)


def _report(status: str) -> dict:
    return {
        "id": uuid.uuid4(),
        "user_id": uuid.uuid4(),
        "type": "resource",
        "resource_id": uuid.uuid4(),
        "creator_id": None,
        "reason": "Stolen artwork",
        "description": "",
        "status": status,
        "created_at": NOW,
        "updated_at": NOW,
    }


def test_report_queue(client, login_as, override):
    login_as(UserRole.ADMIN)
    report_service = override(get_report_service)
    report_service.list_reports.return_value = {
        "items": [_report("pending")], "total": 1, "limit": 12, "offset": 0, "has_more": False
    }

    response = client.get("/api/v1/admin/reports?status=pending")

    assert response.status_code == 200
    assert report_service.list_reports.await_args.kwargs["status"] == ReportStatus.PENDING


def test_resolve_and_dismiss_report(client, login_as, override):
    login_as(UserRole.ADMIN)
    report_service = override(get_report_service)
    report_service.resolve.return_value = _report("resolved")
    report_service.dismiss.return_value = _report("dismissed")
    report_id = uuid.uuid4()

    resolved = client.post(f"/api/v1/admin/reports/{report_id}/resolve")
    dismissed = client.post(f"/api/v1/admin/reports/{report_id}/dismiss")

    assert resolved.json()["status"] == "resolved"
    assert dismissed.json()["status"] == "dismissed"


def test_refund_purchase(client, login_as, override):
    login_as(UserRole.ADMIN)
    purchase_service = override(get_purchase_service)
    purchase_id = uuid.uuid4()
    purchase_service.refund.return_value = {
        "id": purchase_id,
        "user_id": uuid.uuid4(),
        "resource_id": uuid.uuid4(),
        "resource_title": "Icon Pack",
        "amount": Decimal("12.50"),
        "status": "refunded",
        "payment_method": "card",
        "payment_id": None,
        "created_at": NOW,
        "completed_at": NOW,
        "refunded_at": NOW,
    }

    response = client.post(f"/api/v1/admin/purchases/{purchase_id}/refund")

    assert response.status_code == 200
    assert response.json()["status"] == "refunded"
    purchase_service.refund.assert_awaited_once_with(purchase_id)


def test_refund_not_completed(client, login_as, override):
    login_as(UserRole.ADMIN)
    purchase_service = override(get_purchase_service)
    purchase_service.refund.side_effect = ValidationError("Only completed purchases can be refunded")

    response = client.post(f"/api/v1/admin/purchases/{uuid.uuid4()}/refund")

    assert response.status_code == 400
