"""
Database models package.

Exports:
  - UserModel, UserRole, UserStatus, CreatorStatus
  - CreatorApplicationModel, ApplicationStatus
  - CategoryModel
  - ResourceModel, ResourceStatus
  - PurchaseModel, PurchaseStatus
  - ReviewModel
  - ReportModel, ReportType, ReportStatus
  - MessageModel
  - AnalyticsEventModel, AnalyticsEventType

Dependencies: sqlalchemy, resourcehub.boundary.db.base
System role: Database model definitions for domain entities
"""

from resourcehub.boundary.db.models.user_model import (
    CreatorStatus,
    UserModel,
    UserRole,
    UserStatus,
)
from resourcehub.boundary.db.models.creator_application_model import (
    ApplicationStatus,
    CreatorApplicationModel,
)
from resourcehub.boundary.db.models.category_model import CategoryModel
from resourcehub.boundary.db.models.resource_model import ResourceModel, ResourceStatus
from resourcehub.boundary.db.models.purchase_model import PurchaseModel, PurchaseStatus
from resourcehub.boundary.db.models.review_model import ReviewModel
from resourcehub.boundary.db.models.report_model import ReportModel, ReportStatus, ReportType
from resourcehub.boundary.db.models.message_model import MessageModel
from resourcehub.boundary.db.models.analytics_event_model import (
    AnalyticsEventModel,
    AnalyticsEventType,
)

__all__ = [
    "UserModel",
    "UserRole",
    "UserStatus",
    "CreatorStatus",
    "CreatorApplicationModel",
    "ApplicationStatus",
    "CategoryModel",
    "ResourceModel",
    "ResourceStatus",
    "PurchaseModel",
    "PurchaseStatus",
    "ReviewModel",
    "ReportModel",
    "ReportStatus",
    "ReportType",
    "MessageModel",
    "AnalyticsEventModel",
    "AnalyticsEventType",
]
