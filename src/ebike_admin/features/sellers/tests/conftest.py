import pytest_asyncio

from ebike_admin.features.auth.models import User, UserRole, UserStatus
from ebike_admin.features.auth.security import get_password_hash


@pytest_asyncio.fixture
async def pending_seller() -> User:
    """A freshly signed-up seller waiting for approval."""
    return await User.create(
        email="pending.seller@example.com",
        display_name="Pat Pending",
        hashed_password=get_password_hash("pendingpass123"),
        role=UserRole.SELLER,
        status=UserStatus.PENDING,
        shop_name="Sunrise Scooters",
    )
