"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from resourcehub.boundary.db.CRUD import resource_crud, user_crud

    # Use singleton instances
    resource = await resource_crud.get_by_id(db, resource_id)

    # Or instantiate classes directly for custom behavior
    from resourcehub.boundary.db.CRUD import ResourceCRUD
    custom_crud = ResourceCRUD()
"""

from resourcehub.boundary.db.CRUD.base_crud import BaseCRUD
from resourcehub.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from resourcehub.boundary.db.CRUD.creator_application_crud import (
    CreatorApplicationCRUD,
    creator_application_crud,
)
from resourcehub.boundary.db.CRUD.category_crud import CategoryCRUD, category_crud
from resourcehub.boundary.db.CRUD.resource_crud import ResourceCRUD, resource_crud
from resourcehub.boundary.db.CRUD.purchase_crud import PurchaseCRUD, purchase_crud
from resourcehub.boundary.db.CRUD.review_crud import ReviewCRUD, review_crud
from resourcehub.boundary.db.CRUD.report_crud import ReportCRUD, report_crud
from resourcehub.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from resourcehub.boundary.db.CRUD.analytics_event_crud import (
    AnalyticsEventCRUD,
    analytics_event_crud,
)

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "CreatorApplicationCRUD",
    "creator_application_crud",
    "CategoryCRUD",
    "category_crud",
    "ResourceCRUD",
    "resource_crud",
    "PurchaseCRUD",
    "purchase_crud",
    "ReviewCRUD",
    "review_crud",
    "ReportCRUD",
    "report_crud",
    "MessageCRUD",
    "message_crud",
    "AnalyticsEventCRUD",
    "analytics_event_crud",
]
