import pytest
from fastapi import HTTPException, status
from httpx import AsyncClient

from ebike_admin.features.auth.models import User
from ebike_admin.features.catalog.models import Bike, BikeStatus
from ebike_admin.features.shop_inventory import service
from ebike_admin.features.shop_inventory.models import ShopInventoryItem, shop_inventory_key


def test_inventory_key_is_deterministic():
    assert shop_inventory_key("seller1", "bike9") == "seller1_bike9"


@pytest.mark.asyncio
@pytest.mark.parametrize("quantities", [[5, 3], [1], [2, 2, 2, 2], [10, 1, 7]])
async def test_merges_add_up(quantities, seller_user: User, bike_factory):
    bike = await bike_factory()
    for q in quantities:
        key = await service.merge_inventory(seller_user.public_id, bike.public_id, bike, q)

    assert key == shop_inventory_key(seller_user.public_id, bike.public_id)
    items = await ShopInventoryItem.filter(seller_id=seller_user.public_id)
    assert len(items) == 1
    assert items[0].shop_stock == sum(quantities)
    assert items[0].total_sold == 0


@pytest.mark.asyncio
async def test_merge_keeps_first_snapshot(seller_user: User, bike_factory):
    bike = await bike_factory(name="Original Name", price=400.0)
    await service.merge_inventory(seller_user.public_id, bike.public_id, bike, 2)

    await Bike.filter(id=bike.id).update(name="Renamed", price=999.0)
    renamed = await Bike.get(id=bike.id)
    await service.merge_inventory(seller_user.public_id, bike.public_id, renamed, 1)

    item = await ShopInventoryItem.get(public_id=shop_inventory_key(seller_user.public_id, bike.public_id))
    assert item.name == "Original Name"
    assert item.price == 400.0
    assert item.shop_stock == 3


@pytest.mark.asyncio
async def test_same_bike_different_sellers_are_separate(
    seller_user: User, other_seller_user: User, bike_factory
):
    bike = await bike_factory()
    await service.merge_inventory(seller_user.public_id, bike.public_id, bike, 2)
    await service.merge_inventory(other_seller_user.public_id, bike.public_id, bike, 7)
    assert await ShopInventoryItem.filter(bike_id=bike.public_id).count() == 2


@pytest.mark.asyncio
async def test_decrement_on_sale_moves_units_to_sold(seller_user: User, shop_item_factory):
    item = await shop_item_factory(seller_user, quantity=10)
    assert await service.decrement_on_sale(item.public_id, 3) == 1

    item = await ShopInventoryItem.get(id=item.id)
    assert item.shop_stock == 7
    assert item.total_sold == 3


@pytest.mark.asyncio
async def test_decrement_on_sale_has_no_floor(seller_user: User, shop_item_factory):
    item = await shop_item_factory(seller_user, quantity=1)
    await service.decrement_on_sale(item.public_id, 2)
    assert (await ShopInventoryItem.get(id=item.id)).shop_stock == -1


@pytest.mark.asyncio
async def test_decrement_on_sale_unknown_item():
    assert await service.decrement_on_sale("nobody_nothing", 1) == 0


@pytest.mark.asyncio
async def test_decrement_if_available_respects_stock(seller_user: User, shop_item_factory):
    item = await shop_item_factory(seller_user, quantity=2)
    assert await service.decrement_if_available(item.public_id, 3) == 0
    assert await service.decrement_if_available(item.public_id, 2) == 1
    assert (await ShopInventoryItem.get(id=item.id)).shop_stock == 0


@pytest.mark.asyncio
async def test_low_stock_items(seller_user: User, bike_factory, shop_item_factory):
    low = await shop_item_factory(seller_user, quantity=5, bike=await bike_factory(name="Low"))
    await shop_item_factory(seller_user, quantity=6, bike=await bike_factory(name="Fine"))

    items = await service.get_low_stock_items(seller_user.public_id)
    assert [i.public_id for i in items] == [low.public_id]

    items = await service.get_low_stock_items(seller_user.public_id, threshold=6)
    assert len(items) == 2


@pytest.mark.asyncio
async def test_inactive_items_are_hidden(seller_user: User, bike_factory, shop_item_factory):
    bike = await bike_factory(status=BikeStatus.INACTIVE)
    await shop_item_factory(seller_user, quantity=1, bike=bike)
    assert await service.get_seller_inventory(seller_user.public_id) == []
    assert await service.get_low_stock_items(seller_user.public_id) == []


@pytest.mark.asyncio
async def test_inventory_stats(seller_user: User, bike_factory, shop_item_factory):
    await shop_item_factory(seller_user, quantity=20, bike=await bike_factory(name="Big"))
    small = await shop_item_factory(seller_user, quantity=4, bike=await bike_factory(name="Small"))
    empty = await shop_item_factory(seller_user, quantity=2, bike=await bike_factory(name="Empty"))
    await service.decrement_on_sale(small.public_id, 1)
    await service.decrement_on_sale(empty.public_id, 2)

    stats = await service.get_inventory_stats(seller_user.public_id)
    assert stats.total_items == 3
    assert stats.total_stock == 23
    assert stats.total_sold == 3
    assert stats.low_stock_count == 2
    assert stats.out_of_stock_count == 1


@pytest.mark.asyncio
async def test_get_inventory_item_not_found():
    with pytest.raises(HTTPException) as exc_info:
        await service.get_inventory_item("nobody_nothing")
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_my_inventory_endpoints(seller_client: AsyncClient, seller_user: User, shop_item_factory):
    item = await shop_item_factory(seller_user, quantity=3)

    response = await seller_client.get("/api/v1/shop-inventory/mine")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [i["id"] for i in data] == [item.public_id]
    assert data[0]["shop_stock"] == 3
    assert data[0]["specifications"]["motor_power"] == "350W"

    response = await seller_client.get("/api/v1/shop-inventory/mine/low-stock", params={"threshold": 2})
    assert response.json() == []

    response = await seller_client.get("/api/v1/shop-inventory/mine/stats")
    assert response.json()["total_stock"] == 3


@pytest.mark.asyncio
async def test_inventory_item_access(
    seller_client: AsyncClient,
    other_seller_client: AsyncClient,
    admin_client: AsyncClient,
    seller_user: User,
    shop_item_factory,
):
    item = await shop_item_factory(seller_user, quantity=3)
    url = f"/api/v1/shop-inventory/{item.public_id}"

    assert (await seller_client.get(url)).status_code == status.HTTP_200_OK
    assert (await admin_client.get(url)).status_code == status.HTTP_200_OK
    assert (await other_seller_client.get(url)).status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_admin_lists_seller_inventory(admin_client: AsyncClient, seller_user: User, shop_item_factory):
    await shop_item_factory(seller_user, quantity=3)
    response = await admin_client.get(f"/api/v1/shop-inventory/sellers/{seller_user.public_id}")
    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()) == 1
