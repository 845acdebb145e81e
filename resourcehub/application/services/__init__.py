"""Service orchestrators."""

from .analytics_service import AnalyticsService
from .auth_service import AuthService
from .category_service import CategoryService
from .creator_service import CreatorService
from .message_service import MessageService
from .purchase_service import PurchaseService
from .report_service import ReportService
from .resource_service import ResourceService
from .review_service import ReviewService
from .user_service import UserService

__all__ = [
    "AnalyticsService",
    "AuthService",
    "CategoryService",
    "CreatorService",
    "MessageService",
    "PurchaseService",
    "ReportService",
    "ResourceService",
    "ReviewService",
    "UserService",
]
