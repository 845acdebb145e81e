"""
Test suite for UserCRUD against an in-memory database.

System role: Verification of user directory and creator aggregates
"""

from decimal import Decimal

from resourcehub.boundary.db.CRUD import purchase_crud, user_crud
from resourcehub.boundary.db.models import CreatorStatus, PurchaseStatus, UserRole
from resourcehub.core.listing import CreatorSort


async def _sell(db, buyer, resource, status=PurchaseStatus.COMPLETED):
    return await purchase_crud.create(
        db,
        user_id=buyer.id,
        resource_id=resource.id,
        creator_id=resource.creator_id,
        resource_title=resource.title,
        amount=resource.price,
        status=status,
    )


class TestUserLookup:
    """Test suite for get_by_email() and search()."""

    async def test_get_by_email_should_ignore_case(self, test_async_db, make_user) -> None:
        # Arrange
        user = await make_user(email="jane@example.com")

        # Act
        found = await user_crud.get_by_email(test_async_db, "  JANE@Example.com ")

        # Assert
        assert found is not None
        assert found.id == user.id

    async def test_search_should_filter_role_and_match_name(self, test_async_db, make_user) -> None:
        # Arrange
        await make_user(name="Jane Doe")
        await make_user(name="Jane Admin", role=UserRole.ADMIN)
        await make_user(name="John Roe")

        # Act
        users, total = await user_crud.search(test_async_db, role=UserRole.USER, search="jane")

        # Assert
        assert total == 1
        assert users[0].name == "Jane Doe"

    async def test_search_should_treat_underscore_literally(self, test_async_db, make_user) -> None:
        # Arrange
        await make_user(name="Jane Doe", email="jane.doe@example.com")
        await make_user(name="Ops Bot", email="ops_bot@example.com")

        # Act
        users, total = await user_crud.search(test_async_db, search="_")

        # Assert
        assert total == 1
        assert users[0].name == "Ops Bot"

    async def test_get_names_should_map_ids(self, test_async_db, make_user) -> None:
        user = await make_user(name="Named")
        assert await user_crud.get_names(test_async_db, {user.id}) == {user.id: "Named"}
        assert await user_crud.get_names(test_async_db, set()) == {}


class TestListCreators:
    """Test suite for UserCRUD.list_creators()."""

    async def test_should_aggregate_resources_downloads_and_completed_revenue(
        self, test_async_db, make_user, make_creator, make_resource
    ) -> None:
        # Arrange
        creator = await make_creator(name="Seller")
        buyer = await make_user()
        first = await make_resource(creator, price="10.00", downloads=4)
        second = await make_resource(creator, price="5.50", downloads=1)
        await _sell(test_async_db, buyer, first)
        await _sell(test_async_db, buyer, second)
        await _sell(test_async_db, buyer, first, status=PurchaseStatus.REFUNDED)

        # Act
        rows, total = await user_crud.list_creators(test_async_db)

        # Assert
        assert total == 1
        row = rows[0]
        assert row["user"].id == creator.id
        assert row["resource_count"] == 2
        assert row["downloads"] == 5
        assert row["revenue"] == Decimal("15.50")

    async def test_creator_without_sales_should_have_zero_stats(
        self, test_async_db, make_creator
    ) -> None:
        await make_creator()
        rows, _ = await user_crud.list_creators(test_async_db)
        assert rows[0]["resource_count"] == 0
        assert rows[0]["revenue"] == Decimal("0")

    async def test_should_filter_by_creator_status(self, test_async_db, make_user, make_creator) -> None:
        # Arrange
        await make_creator(name="Approved")
        await make_user(role=UserRole.CREATOR, name="Waiting", creator_status=CreatorStatus.PENDING)
        await make_user(name="Customer")

        # Act
        rows, total = await user_crud.list_creators(
            test_async_db, creator_status=CreatorStatus.PENDING
        )

        # Assert
        assert total == 1
        assert rows[0]["user"].name == "Waiting"

    async def test_should_sort_by_resource_count(
        self, test_async_db, make_creator, make_resource
    ) -> None:
        # Arrange
        few = await make_creator(name="Few")
        many = await make_creator(name="Many")
        await make_resource(few)
        await make_resource(many)
        await make_resource(many)

        # Act
        rows, _ = await user_crud.list_creators(test_async_db, sort=CreatorSort.RESOURCES)

        # Assert
        assert [r["user"].name for r in rows] == ["Many", "Few"]
