from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional

from ..auth.models import UserStatus
from ..auth.schemas import SellerProfile
from ..auth.security import get_current_active_admin_user
from ..auth.service import to_profile
from .schemas import SellerStatusUpdate
from . import service

router = APIRouter(
    prefix="/sellers",
    tags=["Sellers"],
    dependencies=[Depends(get_current_active_admin_user)],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[SellerProfile])
async def list_sellers(
    seller_status: Optional[UserStatus] = Query(None, alias="status"),
):
    sellers = await service.list_sellers(seller_status=seller_status)
    return [to_profile(s) for s in sellers]


@router.get("/pending", response_model=List[SellerProfile])
async def list_pending_sellers():
    sellers = await service.list_pending_sellers()
    return [to_profile(s) for s in sellers]


@router.get("/{seller_id}", response_model=SellerProfile)
async def get_seller(seller_id: str):
    return to_profile(await service.get_seller(seller_id))


@router.patch("/{seller_id}/approve", response_model=SellerProfile)
async def approve_seller(seller_id: str):
    return to_profile(await service.approve_seller(seller_id))


@router.patch("/{seller_id}/reject", response_model=SellerProfile)
async def reject_seller(seller_id: str):
    return to_profile(await service.reject_seller(seller_id))


@router.patch("/{seller_id}/suspend", response_model=SellerProfile)
async def suspend_seller(seller_id: str):
    return to_profile(await service.suspend_seller(seller_id))


@router.patch("/{seller_id}/reactivate", response_model=SellerProfile)
async def reactivate_seller(seller_id: str):
    return to_profile(await service.reactivate_seller(seller_id))


@router.patch("/{seller_id}/status", response_model=SellerProfile)
async def set_seller_status(
    seller_id: str,
    status_in: SellerStatusUpdate,
):
    return to_profile(await service.set_seller_status(seller_id, status_in.status))


@router.delete("/{seller_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_seller(seller_id: str):
    await service.delete_seller(seller_id)
    return None
