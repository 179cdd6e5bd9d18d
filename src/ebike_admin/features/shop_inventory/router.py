"""API routes for per-seller shop inventory."""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Annotated, List, Optional

from ..auth.models import User as AuthUser, UserRole
from ..auth.security import (
    get_current_active_user,
    get_current_active_admin_user,
    get_current_active_seller_user,
)
from .schemas import InventoryStatsResponse, ShopInventoryItemResponse
from . import service

router = APIRouter(
    prefix="/shop-inventory",
    tags=["Shop Inventory"],
    responses={404: {"description": "Not found"}},
)


@router.get("/mine", response_model=List[ShopInventoryItemResponse])
async def list_my_inventory(
    current_seller: Annotated[AuthUser, Depends(get_current_active_seller_user)],
):
    items = await service.get_seller_inventory(current_seller.public_id)
    return [service.to_inventory_response(item) for item in items]


@router.get("/mine/low-stock", response_model=List[ShopInventoryItemResponse])
async def list_my_low_stock(
    current_seller: Annotated[AuthUser, Depends(get_current_active_seller_user)],
    threshold: Optional[int] = Query(None, ge=0, description="Alert when shop stock is at or below this"),
):
    items = await service.get_low_stock_items(current_seller.public_id, threshold)
    return [service.to_inventory_response(item) for item in items]


@router.get("/mine/stats", response_model=InventoryStatsResponse)
async def my_inventory_stats(
    current_seller: Annotated[AuthUser, Depends(get_current_active_seller_user)],
):
    return await service.get_inventory_stats(current_seller.public_id)


@router.get("/sellers/{seller_id}", response_model=List[ShopInventoryItemResponse])
async def list_seller_inventory(
    seller_id: str,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    items = await service.get_seller_inventory(seller_id)
    return [service.to_inventory_response(item) for item in items]


@router.get("/{item_id}", response_model=ShopInventoryItemResponse)
async def get_inventory_item(
    item_id: str,
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
):
    item = await service.get_inventory_item(item_id)
    if current_user.role != UserRole.ADMIN and item.seller_id != current_user.public_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to access this inventory item.")
    return service.to_inventory_response(item)
