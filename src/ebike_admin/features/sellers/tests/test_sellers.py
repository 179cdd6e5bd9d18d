import pytest
from fastapi import HTTPException, status
from httpx import AsyncClient

from ebike_admin.features.auth.models import User, UserStatus
from ebike_admin.features.sellers import service as seller_service


@pytest.mark.asyncio
async def test_list_sellers_excludes_admin(admin_client: AsyncClient, admin_user: User):
    response = await admin_client.get("/api/v1/sellers/")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert len(data) == 2
    assert all(s["role"] == "seller" for s in data)
    assert admin_user.public_id not in [s["uid"] for s in data]


@pytest.mark.asyncio
async def test_list_sellers_by_status(admin_client: AsyncClient, pending_seller: User):
    response = await admin_client.get("/api/v1/sellers/", params={"status": "pending"})
    assert response.status_code == status.HTTP_200_OK
    assert [s["uid"] for s in response.json()] == [pending_seller.public_id]

    response = await admin_client.get("/api/v1/sellers/pending")
    assert [s["uid"] for s in response.json()] == [pending_seller.public_id]


@pytest.mark.asyncio
async def test_get_seller_not_found(admin_client: AsyncClient, admin_user: User):
    # The admin is not a seller
    response = await admin_client.get(f"/api/v1/sellers/{admin_user.public_id}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_approve_pending_seller_allows_login(
    admin_client: AsyncClient, client: AsyncClient, pending_seller: User
):
    response = await admin_client.patch(f"/api/v1/sellers/{pending_seller.public_id}/approve")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "active"
    assert data["status_changed_at"] is not None

    login = await client.post(
        "/api/v1/auth/token", data={"username": pending_seller.email, "password": "pendingpass123"}
    )
    assert login.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_suspend_and_reactivate(admin_client: AsyncClient, seller_user: User):
    response = await admin_client.patch(f"/api/v1/sellers/{seller_user.public_id}/suspend")
    assert response.json()["status"] == "suspended"

    response = await admin_client.patch(f"/api/v1/sellers/{seller_user.public_id}/reactivate")
    assert response.json()["status"] == "active"


@pytest.mark.asyncio
async def test_reject_seller(admin_client: AsyncClient, pending_seller: User):
    response = await admin_client.patch(f"/api/v1/sellers/{pending_seller.public_id}/reject")
    assert response.status_code == status.HTTP_200_OK
    user = await User.get(id=pending_seller.id)
    assert user.status == UserStatus.REJECTED


@pytest.mark.asyncio
async def test_set_arbitrary_status(admin_client: AsyncClient, seller_user: User):
    response = await admin_client.patch(
        f"/api/v1/sellers/{seller_user.public_id}/status", json={"status": "pending"}
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "pending"


@pytest.mark.asyncio
async def test_suspended_seller_loses_access(
    admin_client: AsyncClient, seller_client: AsyncClient, seller_user: User
):
    assert (await seller_client.get("/api/v1/auth/me")).status_code == status.HTTP_200_OK

    await admin_client.patch(f"/api/v1/sellers/{seller_user.public_id}/suspend")

    response = await seller_client.get("/api/v1/auth/me")
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_delete_seller(admin_client: AsyncClient, pending_seller: User):
    response = await admin_client.delete(f"/api/v1/sellers/{pending_seller.public_id}")
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert not await User.filter(id=pending_seller.id).exists()


@pytest.mark.asyncio
async def test_status_change_stamps_timestamp(pending_seller: User):
    assert pending_seller.status_changed_at is None
    seller = await seller_service.approve_seller(pending_seller.public_id)
    assert seller.status == UserStatus.ACTIVE
    assert seller.status_changed_at is not None


@pytest.mark.asyncio
async def test_set_status_unknown_seller():
    with pytest.raises(HTTPException) as exc_info:
        await seller_service.suspend_seller("no-such-seller")
    assert exc_info.value.status_code == 404
