import datetime
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Annotated, List, Optional

from ..auth.models import User as AuthUser, UserRole
from ..auth.security import (
    get_current_active_user,
    get_current_active_admin_user,
    get_current_active_seller_user,
)
from .schemas import SaleCreate, SaleResponse, SaleStatusUpdate
from . import service

router = APIRouter(
    prefix="/sales",
    tags=["Sales"],
    responses={404: {"description": "Not found"}},
)


@router.post("/", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
async def record_sale(
    sale_in: SaleCreate,
    current_seller: Annotated[AuthUser, Depends(get_current_active_seller_user)],
):
    sale = await service.record_sale(sale_in, current_seller)
    return service.to_sale_response(sale)


@router.get("/", response_model=List[SaleResponse])
async def list_sales(
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
    seller_id: Optional[str] = Query(None),
    start_date: Optional[datetime.date] = Query(None, description="First day to include (YYYY-MM-DD)"),
    end_date: Optional[datetime.date] = Query(None, description="Last day to include (YYYY-MM-DD)"),
):
    sales = await service.list_sales(seller_id=seller_id, start_date=start_date, end_date=end_date)
    return [service.to_sale_response(s) for s in sales]


@router.get("/mine", response_model=List[SaleResponse])
async def list_my_sales(
    current_seller: Annotated[AuthUser, Depends(get_current_active_seller_user)],
    start_date: Optional[datetime.date] = Query(None),
    end_date: Optional[datetime.date] = Query(None),
):
    sales = await service.list_sales(
        seller_id=current_seller.public_id, start_date=start_date, end_date=end_date
    )
    return [service.to_sale_response(s) for s in sales]


@router.get("/{sale_id}", response_model=SaleResponse)
async def get_sale(
    sale_id: str,
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
):
    sale = await service.get_sale(sale_id)
    if current_user.role != UserRole.ADMIN and sale.seller_id != current_user.public_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to access this sale.")
    return service.to_sale_response(sale)


@router.patch("/{sale_id}/status", response_model=SaleResponse)
async def update_sale_status(
    sale_id: str,
    status_in: SaleStatusUpdate,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    sale = await service.update_sale_status(sale_id, status_in.status)
    return service.to_sale_response(sale)


@router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sale(
    sale_id: str,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    await service.delete_sale(sale_id)
    return None
