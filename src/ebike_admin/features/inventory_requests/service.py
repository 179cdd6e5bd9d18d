"""
Inventory Request Service

Lifecycle of a seller's request for catalog bikes:

    pending -> approved -> fulfilled
    pending -> fulfilled        (approve: credits the shop immediately)
    pending -> rejected

``approve_request`` performs fulfillment inline, so ``approved`` only shows
up on requests written by the older two-step flow (``mark_request_approved``).
Those are reconciled by ``process_approved_request``, which a seller can
trigger from their side as a "claim".

Approval and inventory crediting are separate writes unless
``STRICT_CONSISTENCY`` is enabled. In the default mode a failure between the
two leaves the request in its previous status with the shop already
credited, and nothing guards against two processes fulfilling the same
request concurrently.
"""

import logging
from typing import List, Optional

from fastapi import HTTPException, status
from tortoise.transactions import in_transaction

from ...common.models import utcnow
from ...core import config
from ..catalog.models import Bike
from ..catalog.service import get_bike_or_none
from ..shop_inventory.service import merge_inventory
from .models import InventoryRequest, RequestPriority, RequestStatus
from .schemas import InventoryRequestResponse

logger = logging.getLogger(__name__)


def to_request_response(request: InventoryRequest) -> InventoryRequestResponse:
    return InventoryRequestResponse(
        id=request.public_id,
        seller_id=request.seller_id,
        seller_name=request.seller_name,
        shop_name=request.shop_name,
        bike_id=request.bike_id,
        bike_name=request.bike_name,
        requested_quantity=request.requested_quantity,
        approved_quantity=request.approved_quantity,
        status=request.status,
        priority=request.priority,
        notes=request.notes,
        admin_notes=request.admin_notes,
        processed_at=request.processed_at,
        processed_by=request.processed_by,
        created_at=request.created_at,
        updated_at=request.updated_at,
    )


async def get_request(request_public_id: str) -> InventoryRequest:
    request = await InventoryRequest.get_or_none(public_id=request_public_id)
    if not request:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Request not found"
        )
    return request


async def _get_bike_for_request(request: InventoryRequest) -> Bike:
    bike = await get_bike_or_none(request.bike_id)
    if not bike:
        logger.warning(f"Request {request.public_id} references missing bike {request.bike_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Bike not found"
        )
    return bike


async def create_request(
    seller_id: str,
    seller_name: str,
    shop_name: str,
    bike_id: str,
    bike_name: str,
    requested_quantity: int,
    priority: RequestPriority = RequestPriority.MEDIUM,
    notes: Optional[str] = None,
) -> InventoryRequest:
    """
    Records a seller's request for bikes in ``pending`` status.

    The quantity is validated by the API schema, not here.
    """
    request = await InventoryRequest.create(
        seller_id=seller_id,
        seller_name=seller_name,
        shop_name=shop_name or "",
        bike_id=bike_id,
        bike_name=bike_name,
        requested_quantity=requested_quantity,
        priority=priority or RequestPriority.MEDIUM,
        notes=notes,
        status=RequestStatus.PENDING,
    )
    logger.info(
        f"Request {request.public_id} created: {requested_quantity} x {bike_id} for seller {seller_id}"
    )
    return request


async def list_requests(
    request_status: Optional[RequestStatus] = None,
    seller_id: Optional[str] = None,
) -> List[InventoryRequest]:
    """Lists requests newest first, optionally narrowed by status and/or seller."""
    query = InventoryRequest.all()
    if request_status:
        query = query.filter(status=request_status)
    if seller_id:
        query = query.filter(seller_id=seller_id)
    return await query.order_by("-created_at", "-id")


async def list_pending_requests() -> List[InventoryRequest]:
    return await list_requests(request_status=RequestStatus.PENDING)


async def list_requests_by_seller(seller_id: str) -> List[InventoryRequest]:
    return await list_requests(seller_id=seller_id)


async def approve_request(
    request_public_id: str,
    approved_quantity: int,
    admin_notes: Optional[str] = None,
    processed_by: Optional[str] = None,
) -> InventoryRequest:
    """
    Approves a request and credits the seller's shop in one step.

    The request and its bike are both looked up before anything is written,
    so a missing bike aborts with no inventory change. On success the
    request ends up ``fulfilled`` with the approval details recorded.

    Args:
        request_public_id: The request to approve.
        approved_quantity: Units credited to the shop; may differ from the
            requested quantity.
        admin_notes: Optional note from the admin.
        processed_by: Display name of the approving admin.

    Raises:
        HTTPException: 404 if the request or bike is missing; 409 in strict
            mode if the request is no longer pending or approved.
    """
    request = await get_request(request_public_id)
    bike = await _get_bike_for_request(request)
    now = utcnow()
    approval = dict(
        status=RequestStatus.FULFILLED,
        approved_quantity=approved_quantity,
        admin_notes=admin_notes,
        processed_by=processed_by,
        processed_at=now,
        updated_at=now,
    )

    if config.STRICT_CONSISTENCY:
        async with in_transaction() as conn:
            claimed = await InventoryRequest.filter(
                id=request.id,
                status__in=[RequestStatus.PENDING, RequestStatus.APPROVED],
            ).using_db(conn).update(**approval)
            if not claimed:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Request has already been processed",
                )
            await merge_inventory(request.seller_id, request.bike_id, bike, approved_quantity, using_db=conn)
    else:
        await merge_inventory(request.seller_id, request.bike_id, bike, approved_quantity)
        await InventoryRequest.filter(id=request.id).update(**approval)

    logger.info(
        f"Request {request.public_id} approved by {processed_by}: "
        f"{approved_quantity} x {request.bike_id} credited to seller {request.seller_id}"
    )
    return await InventoryRequest.get(id=request.id)


async def mark_request_approved(
    request_public_id: str,
    approved_quantity: int,
    admin_notes: Optional[str] = None,
    processed_by: Optional[str] = None,
) -> InventoryRequest:
    """
    Two-step approval: records the approval without crediting inventory.

    The request stays ``approved`` until ``process_approved_request`` merges
    the approved quantity into the seller's shop.
    """
    request = await get_request(request_public_id)
    if request.status != RequestStatus.PENDING:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Request is already {request.status.value}",
        )
    request.status = RequestStatus.APPROVED
    request.approved_quantity = approved_quantity
    request.admin_notes = admin_notes
    request.processed_by = processed_by
    request.processed_at = utcnow()
    await request.save()
    logger.info(f"Request {request.public_id} approved for {approved_quantity} unit(s), awaiting fulfillment")
    return request


async def reject_request(
    request_public_id: str,
    admin_notes: Optional[str] = None,
    processed_by: Optional[str] = None,
) -> InventoryRequest:
    """Rejects a request. Never touches shop inventory or the catalog."""
    request = await get_request(request_public_id)
    now = utcnow()
    rejection = dict(
        status=RequestStatus.REJECTED,
        admin_notes=admin_notes,
        processed_by=processed_by,
        processed_at=now,
        updated_at=now,
    )
    query = InventoryRequest.filter(id=request.id)
    if config.STRICT_CONSISTENCY:
        query = query.filter(status__in=[RequestStatus.PENDING, RequestStatus.APPROVED])
    if not await query.update(**rejection):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Request has already been processed",
        )
    logger.info(f"Request {request.public_id} rejected by {processed_by}")
    return await InventoryRequest.get(id=request.id)


async def fulfill_request(request_public_id: str) -> InventoryRequest:
    """Marks a request fulfilled without any inventory side effect."""
    request = await get_request(request_public_id)
    request.status = RequestStatus.FULFILLED
    await request.save(update_fields=["status", "updated_at"])
    logger.info(f"Request {request.public_id} marked fulfilled")
    return request


async def process_approved_request(request_public_id: str) -> InventoryRequest:
    """
    Claims a request left in ``approved`` status: credits the approved
    quantity to the seller's shop and marks the request fulfilled.

    Raises:
        HTTPException: 404 if the request or bike is missing; 400 if the
            request is not ``approved`` or has no approved quantity; 409 in
            strict mode if another process fulfilled it first.
    """
    request = await get_request(request_public_id)
    if request.status != RequestStatus.APPROVED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request is not in approved status",
        )
    if not request.approved_quantity:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No approved quantity found",
        )
    bike = await _get_bike_for_request(request)
    now = utcnow()

    if config.STRICT_CONSISTENCY:
        async with in_transaction() as conn:
            claimed = await InventoryRequest.filter(
                id=request.id, status=RequestStatus.APPROVED
            ).using_db(conn).update(status=RequestStatus.FULFILLED, updated_at=now)
            if not claimed:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Request has already been processed",
                )
            await merge_inventory(
                request.seller_id, request.bike_id, bike, request.approved_quantity, using_db=conn
            )
    else:
        await merge_inventory(request.seller_id, request.bike_id, bike, request.approved_quantity)
        await InventoryRequest.filter(id=request.id).update(status=RequestStatus.FULFILLED, updated_at=now)

    logger.info(
        f"Approved request {request.public_id} claimed: "
        f"{request.approved_quantity} x {request.bike_id} credited to seller {request.seller_id}"
    )
    return await InventoryRequest.get(id=request.id)


async def delete_request(request_public_id: str):
    """Hard delete, whatever the status. Inventory already credited stays."""
    request = await get_request(request_public_id)
    await request.delete()
    logger.info(f"Request {request_public_id} deleted")
    return None
