"""API routes for the bike catalog."""
from fastapi import APIRouter, status, Query, Depends
from typing import Optional, List, Annotated

from .models import BikeCategory, BikeStatus
from .schemas import BikeCreate, BikeUpdate, BikeStockUpdate, BikeResponse
from . import service

from ..auth.models import User as AuthUser
from ..auth.security import get_current_active_user, get_current_active_admin_user

router = APIRouter(
    prefix="/bikes",
    tags=["Catalog"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "/",
    response_model=BikeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a bike to the catalog",
)
async def create_bike(
    bike_in: BikeCreate,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    return await service.create_bike(bike_in)


@router.get("/", response_model=List[BikeResponse], summary="List catalog bikes")
async def list_bikes(
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
    bike_status: Optional[BikeStatus] = Query(None, alias="status", description="Filter by status"),
    category: Optional[BikeCategory] = Query(None, description="Filter by category"),
):
    return await service.list_bikes(bike_status, category)


@router.get("/{bike_id}", response_model=BikeResponse, summary="Get a catalog bike")
async def get_bike(
    bike_id: str,
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
):
    return await service.get_bike(bike_id)


@router.put("/{bike_id}", response_model=BikeResponse, summary="Update a catalog bike")
async def update_bike(
    bike_id: str,
    bike_in: BikeUpdate,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    return await service.update_bike(bike_id, bike_in)


@router.patch("/{bike_id}/stock", response_model=BikeResponse, summary="Set master stock")
async def update_bike_stock(
    bike_id: str,
    stock_in: BikeStockUpdate,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    return await service.update_bike_stock(bike_id, stock_in.stock)


@router.delete(
    "/{bike_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a catalog bike",
)
async def delete_bike(
    bike_id: str,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    await service.delete_bike(bike_id)
    return None
