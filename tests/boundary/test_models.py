"""
Test suite for ORM mapper configuration.

System role: Verification of model relationships
"""

from sqlalchemy import inspect
from sqlalchemy.orm import configure_mappers

from resourcehub.boundary.db.models import PurchaseModel, UserModel


class TestRelationships:
    """Test suite for relationships between users and purchases."""

    def test_mappers_should_configure(self) -> None:
        configure_mappers()

    def test_user_purchases_should_join_on_buyer_column(self) -> None:
        # Act
        configure_mappers()
        relationship = inspect(UserModel).relationships["purchases"]

        # Assert
        assert [c.name for c in relationship.remote_side] == ["user_id"]
        assert relationship.back_populates == "user"

    def test_purchase_user_should_point_back_to_buyer(self) -> None:
        configure_mappers()
        relationship = inspect(PurchaseModel).relationships["user"]
        assert [c.name for c in relationship.local_columns] == ["user_id"]
