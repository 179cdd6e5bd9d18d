"""
Sales Service

Recording a sale touches two records: the sale itself and the seller's shop
inventory. The stock check runs against the inventory as read at the start
of the call; the sale insert and the stock decrement are then issued as two
separate writes. A concurrent sale of the same item can pass the same check,
and a failed decrement leaves a recorded sale without the matching stock
movement. ``STRICT_CONSISTENCY`` replaces both writes with one transaction
around a conditional decrement.
"""

import datetime
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from tortoise.transactions import in_transaction

from ...core import config
from ..auth.models import User as AuthUser
from ..shop_inventory.service import (
    decrement_if_available,
    decrement_on_sale,
    get_inventory_item_or_none,
)
from .models import Sale, SaleStatus
from .schemas import SaleCreate, SaleResponse

logger = logging.getLogger(__name__)


def to_sale_response(sale: Sale) -> SaleResponse:
    return SaleResponse(
        id=sale.public_id,
        bike_id=sale.bike_id,
        bike_name=sale.bike_name,
        seller_id=sale.seller_id,
        seller_name=sale.seller_name,
        shop_name=sale.shop_name,
        customer_name=sale.customer_name,
        customer_phone=sale.customer_phone,
        customer_email=sale.customer_email,
        quantity=sale.quantity,
        unit_price=sale.unit_price,
        total_price=sale.total_price,
        payment_method=sale.payment_method,
        status=sale.status,
        notes=sale.notes,
        created_at=sale.created_at,
        updated_at=sale.updated_at,
    )


async def record_sale(sale_in: SaleCreate, seller: AuthUser) -> Sale:
    """
    Records a completed sale from a seller's shop and takes the units out of
    shop stock.

    Args:
        sale_in: Sale details; ``bike_id`` is the shop inventory id.
        seller: The selling user.

    Returns:
        The created sale.

    Raises:
        HTTPException: 404 if the inventory item does not exist, 403 if it
            belongs to another seller, 400 if the quantity exceeds the shop
            stock (nothing is written), 409 in strict mode if the stock was
            taken by a concurrent sale.
    """
    item = await get_inventory_item_or_none(sale_in.bike_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found"
        )
    if item.seller_id != seller.public_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inventory item belongs to another shop.",
        )
    if sale_in.quantity > item.shop_stock:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Not enough stock for {item.name}: {item.shop_stock} available.",
        )

    sale_data = dict(
        bike_id=item.public_id,
        bike_name=item.name,
        seller_id=seller.public_id,
        seller_name=seller.display_name,
        shop_name=seller.shop_name or "",
        customer_name=sale_in.customer_name,
        customer_phone=sale_in.customer_phone,
        customer_email=sale_in.customer_email,
        quantity=sale_in.quantity,
        unit_price=sale_in.unit_price,
        total_price=sale_in.unit_price * sale_in.quantity,
        payment_method=sale_in.payment_method,
        status=SaleStatus.COMPLETED,
        notes=sale_in.notes,
    )

    if config.STRICT_CONSISTENCY:
        async with in_transaction() as conn:
            if not await decrement_if_available(item.public_id, sale_in.quantity, using_db=conn):
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Stock for {item.name} changed, please retry.",
                )
            sale = await Sale.create(**sale_data, using_db=conn)
    else:
        sale = await Sale.create(**sale_data)
        try:
            await decrement_on_sale(item.public_id, sale_in.quantity)
        except Exception as e:
            logger.error(
                f"Sale {sale.public_id} recorded but stock decrement for {item.public_id} failed: {e}",
                exc_info=True,
            )
            raise

    logger.info(
        f"Sale {sale.public_id}: {sale.quantity} x {item.public_id} by seller {seller.public_id}"
    )
    return sale


def _day_start(day: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time.min, tzinfo=datetime.timezone.utc)


async def list_sales(
    seller_id: Optional[str] = None,
    start_date: Optional[datetime.date] = None,
    end_date: Optional[datetime.date] = None,
) -> List[Sale]:
    """
    Lists sales newest first. Date bounds are UTC calendar days.

    Args:
        seller_id: Optional seller to restrict to.
        start_date: Optional first day to include.
        end_date: Optional last day to include.
    """
    query = Sale.all()
    if seller_id:
        query = query.filter(seller_id=seller_id)
    if start_date:
        query = query.filter(created_at__gte=_day_start(start_date))
    if end_date:
        # Add 1 day to end_date to make it inclusive
        query = query.filter(created_at__lt=_day_start(end_date + datetime.timedelta(days=1)))
    return await query.order_by("-created_at", "-id")


async def get_sale(sale_public_id: str) -> Sale:
    sale = await Sale.get_or_none(public_id=sale_public_id)
    if not sale:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Sale not found"
        )
    return sale


async def update_sale_status(sale_public_id: str, new_status: SaleStatus) -> Sale:
    """Changes the status of a sale. Shop stock is not adjusted."""
    sale = await get_sale(sale_public_id)
    sale.status = new_status
    await sale.save(update_fields=["status", "updated_at"])
    logger.info(f"Sale {sale.public_id} status set to {new_status.value}")
    return sale


async def delete_sale(sale_public_id: str):
    sale = await get_sale(sale_public_id)
    await sale.delete()
    return None
