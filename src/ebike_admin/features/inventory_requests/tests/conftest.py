import pytest_asyncio

from ebike_admin.features.auth.models import User
from ebike_admin.features.catalog.models import Bike
from ebike_admin.features.inventory_requests.models import InventoryRequest, RequestPriority
from ebike_admin.features.inventory_requests.service import create_request


@pytest_asyncio.fixture
async def request_factory(seller_user: User, bike_factory):
    """A factory to create pending inventory requests."""

    async def _factory(
        quantity: int = 10,
        seller: User = seller_user,
        bike: Bike = None,
        priority: RequestPriority = RequestPriority.MEDIUM,
    ) -> InventoryRequest:
        bike = bike or await bike_factory()
        return await create_request(
            seller_id=seller.public_id,
            seller_name=seller.display_name,
            shop_name=seller.shop_name,
            bike_id=bike.public_id,
            bike_name=bike.name,
            requested_quantity=quantity,
            priority=priority,
        )

    return _factory
