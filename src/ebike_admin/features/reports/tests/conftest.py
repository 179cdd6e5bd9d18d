import datetime

import pytest

from ebike_admin.features.sales.models import PaymentMethod, Sale, SaleStatus


@pytest.fixture
def make_sale():
    """Builds unsaved Sale records for the pure aggregation helpers."""

    def _make(
        seller_name: str = "Sam Seller",
        bike_name: str = "Urban Glide",
        quantity: int = 1,
        unit_price: float = 100.0,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        status: SaleStatus = SaleStatus.COMPLETED,
        created_at: datetime.datetime = None,
    ) -> Sale:
        return Sale(
            bike_id="seller_bike",
            bike_name=bike_name,
            seller_id="seller",
            seller_name=seller_name,
            shop_name="Shop",
            customer_name="Casey",
            customer_phone="555",
            quantity=quantity,
            unit_price=unit_price,
            total_price=unit_price * quantity,
            payment_method=payment_method,
            status=status,
            created_at=created_at or datetime.datetime.now(datetime.timezone.utc),
        )

    return _make
