"""
ORM to dict mappers.

Services return plain dicts; these helpers apply the read-time defaults
every view relies on (empty names, "other" category, merged settings).

Dependencies: resourcehub.boundary.db.models
System role: Read-model shaping shared by services
"""

import enum
from decimal import Decimal
from typing import Any

from resourcehub.boundary.db.models import (
    AnalyticsEventModel,
    CategoryModel,
    CreatorApplicationModel,
    MessageModel,
    PurchaseModel,
    ReportModel,
    ResourceModel,
    ReviewModel,
    UserModel,
)

DEFAULT_SETTINGS: dict[str, Any] = {
    "emailNotifications": True,
    "marketingEmails": False,
    "resourceUpdates": True,
    "theme": "system",
    "language": "en",
    "profileVisibility": "public",
}

UNCATEGORIZED = "other"
UNKNOWN_CREATOR = "Unknown Creator"
UNKNOWN_USER = "Unknown User"


def enum_value(value: Any) -> Any:
    """Plain value of an enum member, passthrough otherwise."""
    return value.value if isinstance(value, enum.Enum) else value


def money(value: Any) -> Decimal:
    """Coerce a numeric column value to a 2-decimal Decimal."""
    return Decimal(str(value or 0)).quantize(Decimal("0.01"))


def effective_settings(stored: dict | None) -> dict[str, Any]:
    """Stored preferences merged over the defaults."""
    return {**DEFAULT_SETTINGS, **(stored or {})}


def user_to_dict(user: UserModel) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name or "",
        "avatar": user.avatar,
        "role": enum_value(user.role) or "user",
        "status": enum_value(user.status) or "active",
        "creator_status": enum_value(user.creator_status),
        "plan": user.plan or "free",
        "bio": user.bio,
        "website": user.website,
        "social": user.social or {},
        "settings": effective_settings(user.settings),
        "created_at": user.created_at,
        "updated_at": user.updated_at,
        "last_login": user.last_login,
    }


def resource_to_dict(resource: ResourceModel, creator_name: str | None = None) -> dict[str, Any]:
    return {
        "id": resource.id,
        "title": resource.title,
        "description": resource.description or "",
        "price": money(resource.price),
        "category": resource.category or UNCATEGORIZED,
        "creator_id": resource.creator_id,
        "creator_name": creator_name or UNKNOWN_CREATOR,
        "tags": list(resource.tags or []),
        "thumbnail": resource.thumbnail,
        "file_name": resource.file_name,
        "file_type": resource.file_type,
        "file_size": resource.file_size,
        "status": enum_value(resource.status),
        "downloads": resource.downloads or 0,
        "views": resource.views or 0,
        "featured": bool(resource.featured),
        "created_at": resource.created_at,
        "updated_at": resource.updated_at,
    }


def category_to_dict(category: CategoryModel) -> dict[str, Any]:
    return {
        "id": category.id,
        "slug": category.slug,
        "name": category.name,
        "description": category.description or "",
        "icon": category.icon or "folder",
        "count": category.count or 0,
        "featured": bool(category.featured),
        "created_at": category.created_at,
        "updated_at": category.updated_at,
    }


def purchase_to_dict(purchase: PurchaseModel) -> dict[str, Any]:
    return {
        "id": purchase.id,
        "user_id": purchase.user_id,
        "resource_id": purchase.resource_id,
        "resource_title": purchase.resource_title or "",
        "amount": money(purchase.amount),
        "status": enum_value(purchase.status),
        "payment_method": purchase.payment_method,
        "payment_id": purchase.payment_id,
        "created_at": purchase.created_at,
        "completed_at": purchase.completed_at,
        "refunded_at": purchase.refunded_at,
    }


def review_to_dict(review: ReviewModel, user_name: str | None = None) -> dict[str, Any]:
    return {
        "id": review.id,
        "resource_id": review.resource_id,
        "user_id": review.user_id,
        "user_name": user_name or UNKNOWN_USER,
        "rating": review.rating,
        "comment": review.comment or "",
        "created_at": review.created_at,
    }


def report_to_dict(report: ReportModel) -> dict[str, Any]:
    return {
        "id": report.id,
        "user_id": report.user_id,
        "type": enum_value(report.type),
        "resource_id": report.resource_id,
        "creator_id": report.creator_id,
        "reason": report.reason,
        "description": report.description or "",
        "status": enum_value(report.status),
        "created_at": report.created_at,
        "updated_at": report.updated_at,
    }


def message_to_dict(
    message: MessageModel,
    sender_name: str | None = None,
    recipient_name: str | None = None,
) -> dict[str, Any]:
    return {
        "id": message.id,
        "sender_id": message.sender_id,
        "sender_name": sender_name or UNKNOWN_USER,
        "recipient_id": message.recipient_id,
        "recipient_name": recipient_name or UNKNOWN_USER,
        "content": message.content,
        "read": bool(message.read),
        "created_at": message.created_at,
    }


def application_to_dict(application: CreatorApplicationModel) -> dict[str, Any]:
    return {
        "id": application.id,
        "user_id": application.user_id,
        "portfolio_url": application.portfolio_url,
        "experience": application.experience,
        "application_text": application.application_text,
        "plan": application.plan,
        "status": enum_value(application.status),
        "created_at": application.created_at,
    }


def event_to_dict(event: AnalyticsEventModel) -> dict[str, Any]:
    return {
        "id": event.id,
        "event_type": event.event_type,
        "user_id": event.user_id,
        "resource_id": event.resource_id,
        "data": event.data or {},
        "created_at": event.created_at,
    }
