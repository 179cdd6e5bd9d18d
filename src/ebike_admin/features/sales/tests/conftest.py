import pytest_asyncio

from ebike_admin.features.auth.models import User
from ebike_admin.features.sales.models import PaymentMethod, Sale
from ebike_admin.features.sales.schemas import SaleCreate
from ebike_admin.features.sales.service import record_sale
from ebike_admin.features.shop_inventory.models import ShopInventoryItem


@pytest_asyncio.fixture
async def sale_factory(seller_user: User):
    """A factory that records sales through the service."""

    async def _factory(
        item: ShopInventoryItem,
        quantity: int = 1,
        unit_price: float = 500.0,
        seller: User = seller_user,
        payment_method: PaymentMethod = PaymentMethod.CARD,
    ) -> Sale:
        sale_in = SaleCreate(
            bike_id=item.public_id,
            customer_name="Casey Customer",
            customer_phone="555-0142",
            quantity=quantity,
            unit_price=unit_price,
            payment_method=payment_method,
        )
        return await record_sale(sale_in, seller)

    return _factory
