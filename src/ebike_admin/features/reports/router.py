from fastapi import APIRouter, Depends, Query
from typing import Annotated

from ..auth.models import User as AuthUser
from ..auth.security import (
    get_current_active_user,
    get_current_active_admin_user,
    get_current_active_seller_user,
)
from .schemas import (
    AdminDashboardResponse,
    ReportPeriod,
    SalesSummaryResponse,
    SellerDashboardResponse,
    TopListsResponse,
)
from . import service as report_service

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    dependencies=[Depends(get_current_active_user)],
    responses={404: {"description": "Not found"}},
)


@router.get("/sales/summary", response_model=SalesSummaryResponse)
async def get_sales_summary(
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
    period: ReportPeriod = Query(ReportPeriod.ALL, description="Time window of the report"),
):
    # Admins see every shop, sellers only their own sales
    return await report_service.generate_sales_summary(current_user, period)


@router.get("/sales/top", response_model=TopListsResponse)
async def get_top_lists(
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
    period: ReportPeriod = Query(ReportPeriod.ALL),
    limit: int = Query(5, ge=1, le=100, description="Number of entries per list"),
):
    return await report_service.generate_top_lists(current_user, period, limit)


@router.get("/dashboard/admin", response_model=AdminDashboardResponse)
async def get_admin_dashboard(
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    return await report_service.generate_admin_dashboard()


@router.get("/dashboard/seller", response_model=SellerDashboardResponse)
async def get_seller_dashboard(
    current_seller: Annotated[AuthUser, Depends(get_current_active_seller_user)],
):
    return await report_service.generate_seller_dashboard(current_seller)
