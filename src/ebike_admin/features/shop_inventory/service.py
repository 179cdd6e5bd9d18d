"""
Shop Inventory Service

Per-seller stock ledger. Records are created on the first fulfillment of a
(seller, bike) pair and then only move through two counter updates:
restocking on fulfillment and decrementing on sale. Both counter updates are
single UPDATE statements with database-side arithmetic, so concurrent
increments on the same record never lose each other. Nothing here spans more
than one record.
"""

import logging
from typing import List, Optional

from fastapi import HTTPException, status
from tortoise.backends.base.client import BaseDBAsyncClient
from tortoise.expressions import F

from ...common.models import utcnow
from ...core import config
from ..catalog.models import Bike, BikeStatus
from ..catalog.schemas import BikeSpecifications
from .models import ShopInventoryItem, shop_inventory_key
from .schemas import InventoryStatsResponse, ShopInventoryItemResponse

logger = logging.getLogger(__name__)


def _scoped(queryset, conn: Optional[BaseDBAsyncClient]):
    return queryset.using_db(conn) if conn is not None else queryset


def to_inventory_response(item: ShopInventoryItem) -> ShopInventoryItemResponse:
    return ShopInventoryItemResponse(
        id=item.public_id,
        seller_id=item.seller_id,
        bike_id=item.bike_id,
        vehicle_category=item.vehicle_category,
        name=item.name,
        brand=item.brand,
        model=item.model,
        category=item.category,
        price=item.price,
        stock=item.stock,
        description=item.description or "",
        specifications=BikeSpecifications(**(item.specifications or {})),
        images=item.images or [],
        status=item.status,
        shop_stock=item.shop_stock,
        total_sold=item.total_sold,
        last_restocked=item.last_restocked,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


async def merge_inventory(
    seller_id: str,
    bike_id: str,
    bike: Bike,
    quantity: int,
    using_db: Optional[BaseDBAsyncClient] = None,
) -> str:
    """
    Credits ``quantity`` units of a bike to a seller's shop.

    If the (seller, bike) record exists its shop stock is incremented in place;
    otherwise a new record is created from a snapshot of ``bike``. The
    operation is not idempotent: two calls credit twice, so callers must make
    sure a fulfillment is merged at most once.

    Args:
        seller_id: Public id of the receiving seller.
        bike_id: Public id of the catalog bike.
        bike: The catalog record to snapshot when the record is new.
        quantity: Units to add.
        using_db: Optional transaction connection.

    Returns:
        The composite id of the shop inventory record.
    """
    key = shop_inventory_key(seller_id, bike_id)
    now = utcnow()

    exists = await _scoped(ShopInventoryItem.filter(public_id=key), using_db).exists()
    if exists:
        await _scoped(ShopInventoryItem.filter(public_id=key), using_db).update(
            shop_stock=F("shop_stock") + quantity,
            last_restocked=now,
            updated_at=now,
        )
        logger.debug(f"Restocked {key} with {quantity} unit(s)")
        return key

    await ShopInventoryItem.create(
        public_id=key,
        seller_id=seller_id,
        bike_id=bike_id,
        vehicle_category=bike.vehicle_category,
        name=bike.name,
        brand=bike.brand,
        model=bike.model,
        category=bike.category,
        price=bike.price,
        stock=bike.stock,
        description=bike.description or "",
        specifications=dict(bike.specifications or {}),
        images=list(bike.images or []),
        status=bike.status,
        shop_stock=quantity,
        total_sold=0,
        last_restocked=now,
        using_db=using_db,
    )
    logger.debug(f"Created shop inventory {key} with {quantity} unit(s)")
    return key


async def decrement_on_sale(
    inventory_item_id: str,
    quantity: int,
    using_db: Optional[BaseDBAsyncClient] = None,
) -> int:
    """
    Moves ``quantity`` units from shop stock to the sold counter.

    There is no floor at zero; the caller compares against the stock it read
    beforehand.

    Returns:
        The number of records updated (0 if the id is unknown).
    """
    updated = await _scoped(ShopInventoryItem.filter(public_id=inventory_item_id), using_db).update(
        shop_stock=F("shop_stock") - quantity,
        total_sold=F("total_sold") + quantity,
        updated_at=utcnow(),
    )
    if not updated:
        logger.warning(f"Sale decrement hit no shop inventory record for {inventory_item_id}")
    return updated


async def decrement_if_available(
    inventory_item_id: str,
    quantity: int,
    using_db: Optional[BaseDBAsyncClient] = None,
) -> int:
    """Like :func:`decrement_on_sale`, but only applies while shop stock covers ``quantity``."""
    return await _scoped(
        ShopInventoryItem.filter(public_id=inventory_item_id, shop_stock__gte=quantity), using_db
    ).update(
        shop_stock=F("shop_stock") - quantity,
        total_sold=F("total_sold") + quantity,
        updated_at=utcnow(),
    )


async def get_inventory_item_or_none(inventory_item_id: str) -> Optional[ShopInventoryItem]:
    return await ShopInventoryItem.get_or_none(public_id=inventory_item_id)


async def get_inventory_item(inventory_item_id: str) -> ShopInventoryItem:
    item = await get_inventory_item_or_none(inventory_item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found"
        )
    return item


async def get_seller_inventory(seller_id: str) -> List[ShopInventoryItem]:
    """Active shop inventory of a seller, newest first."""
    return await ShopInventoryItem.filter(
        seller_id=seller_id, status=BikeStatus.ACTIVE
    ).order_by("-created_at", "-id")


async def get_low_stock_items(
    seller_id: str, threshold: Optional[int] = None
) -> List[ShopInventoryItem]:
    """Active items of a seller with shop stock at or below ``threshold``."""
    if threshold is None:
        threshold = config.LOW_STOCK_THRESHOLD
    return await ShopInventoryItem.filter(
        seller_id=seller_id, status=BikeStatus.ACTIVE, shop_stock__lte=threshold
    ).order_by("shop_stock", "name")


async def get_inventory_stats(seller_id: str) -> InventoryStatsResponse:
    inventory = await get_seller_inventory(seller_id)
    threshold = config.LOW_STOCK_THRESHOLD
    return InventoryStatsResponse(
        total_items=len(inventory),
        total_stock=sum(item.shop_stock for item in inventory),
        total_sold=sum(item.total_sold for item in inventory),
        low_stock_count=sum(1 for item in inventory if item.shop_stock <= threshold),
        out_of_stock_count=sum(1 for item in inventory if item.shop_stock == 0),
    )
