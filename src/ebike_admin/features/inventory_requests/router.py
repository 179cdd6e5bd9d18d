from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Annotated, List, Optional

from ..auth.models import User as AuthUser, UserRole
from ..auth.security import (
    get_current_active_user,
    get_current_active_admin_user,
    get_current_active_seller_user,
)
from ..catalog.service import get_bike
from .models import InventoryRequest, RequestStatus
from .schemas import (
    InventoryRequestCreate,
    InventoryRequestResponse,
    RequestApproveSchema,
    RequestRejectSchema,
)
from . import service

router = APIRouter(
    prefix="/inventory-requests",
    tags=["Inventory Requests"],
    responses={404: {"description": "Not found"}},
)


def _ensure_can_access(request: InventoryRequest, current_user: AuthUser) -> None:
    # Admin can see any request, sellers only their own
    if current_user.role != UserRole.ADMIN and request.seller_id != current_user.public_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to access this request.")


@router.post("/", response_model=InventoryRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_request(
    request_in: InventoryRequestCreate,
    current_seller: Annotated[AuthUser, Depends(get_current_active_seller_user)],
):
    bike = await get_bike(request_in.bike_id)
    request = await service.create_request(
        seller_id=current_seller.public_id,
        seller_name=current_seller.display_name,
        shop_name=current_seller.shop_name or "",
        bike_id=bike.id,
        bike_name=bike.name,
        requested_quantity=request_in.requested_quantity,
        priority=request_in.priority,
        notes=request_in.notes,
    )
    return service.to_request_response(request)


@router.get("/", response_model=List[InventoryRequestResponse])
async def list_requests(
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
    request_status: Optional[RequestStatus] = Query(None, alias="status"),
):
    requests = await service.list_requests(request_status=request_status)
    return [service.to_request_response(r) for r in requests]


@router.get("/mine", response_model=List[InventoryRequestResponse])
async def list_my_requests(
    current_seller: Annotated[AuthUser, Depends(get_current_active_seller_user)],
):
    requests = await service.list_requests_by_seller(current_seller.public_id)
    return [service.to_request_response(r) for r in requests]


@router.get("/{request_id}", response_model=InventoryRequestResponse)
async def get_request(
    request_id: str,
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
):
    request = await service.get_request(request_id)
    _ensure_can_access(request, current_user)
    return service.to_request_response(request)


@router.patch("/{request_id}/approve", response_model=InventoryRequestResponse)
async def approve_request(
    request_id: str,
    approval: RequestApproveSchema,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    request = await service.approve_request(
        request_id, approval.approved_quantity, approval.admin_notes, current_admin.display_name
    )
    return service.to_request_response(request)


@router.patch("/{request_id}/mark-approved", response_model=InventoryRequestResponse)
async def mark_request_approved(
    request_id: str,
    approval: RequestApproveSchema,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    request = await service.mark_request_approved(
        request_id, approval.approved_quantity, approval.admin_notes, current_admin.display_name
    )
    return service.to_request_response(request)


@router.patch("/{request_id}/reject", response_model=InventoryRequestResponse)
async def reject_request(
    request_id: str,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
    rejection: Optional[RequestRejectSchema] = None,
):
    admin_notes = rejection.admin_notes if rejection else None
    request = await service.reject_request(request_id, admin_notes, current_admin.display_name)
    return service.to_request_response(request)


@router.patch("/{request_id}/fulfill", response_model=InventoryRequestResponse)
async def fulfill_request(
    request_id: str,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    request = await service.fulfill_request(request_id)
    return service.to_request_response(request)


@router.post("/{request_id}/claim", response_model=InventoryRequestResponse)
async def claim_request(
    request_id: str,
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
):
    request = await service.get_request(request_id)
    _ensure_can_access(request, current_user)
    request = await service.process_approved_request(request_id)
    return service.to_request_response(request)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(
    request_id: str,
    current_admin: Annotated[AuthUser, Depends(get_current_active_admin_user)],
):
    await service.delete_request(request_id)
    return None
