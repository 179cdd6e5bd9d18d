"""Admin-side management of seller accounts."""
import logging
from typing import List, Optional

from fastapi import HTTPException, status

from ...common.models import utcnow
from ..auth.models import User, UserRole, UserStatus

logger = logging.getLogger(__name__)


async def list_sellers(seller_status: Optional[UserStatus] = None) -> List[User]:
    query = User.filter(role=UserRole.SELLER)
    if seller_status:
        query = query.filter(status=seller_status)
    return await query.order_by("-created_at", "-id")


async def list_pending_sellers() -> List[User]:
    return await list_sellers(seller_status=UserStatus.PENDING)


async def get_seller(seller_public_id: str) -> User:
    seller = await User.get_or_none(public_id=seller_public_id, role=UserRole.SELLER)
    if not seller:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Seller not found"
        )
    return seller


async def set_seller_status(seller_public_id: str, new_status: UserStatus) -> User:
    """
    Moves a seller account to ``new_status`` and stamps ``status_changed_at``.

    Any transition is allowed; the named helpers below only exist to give
    the common ones a name.
    """
    seller = await get_seller(seller_public_id)
    previous = seller.status
    seller.status = new_status
    seller.status_changed_at = utcnow()
    await seller.save(update_fields=["status", "status_changed_at", "updated_at"])
    logger.info(
        f"Seller {seller.public_id} status changed: {previous.value} -> {new_status.value}"
    )
    return seller


async def approve_seller(seller_public_id: str) -> User:
    return await set_seller_status(seller_public_id, UserStatus.ACTIVE)


async def reject_seller(seller_public_id: str) -> User:
    return await set_seller_status(seller_public_id, UserStatus.REJECTED)


async def suspend_seller(seller_public_id: str) -> User:
    return await set_seller_status(seller_public_id, UserStatus.SUSPENDED)


async def reactivate_seller(seller_public_id: str) -> User:
    return await set_seller_status(seller_public_id, UserStatus.ACTIVE)


async def delete_seller(seller_public_id: str):
    """Removes the account only. Requests, inventory and sales keep their copies."""
    seller = await get_seller(seller_public_id)
    await seller.delete()
    logger.info(f"Seller {seller_public_id} deleted")
    return None
