"""
Root conftest for the pytest test suite.

Each test runs against a fresh in-memory SQLite database seeded with one
admin and two active sellers. HTTP tests talk to the ASGI app directly
through ``httpx.AsyncClient`` so requests share the test's event loop and
database connection; the application lifespan is never started.

Key Fixtures:
- `initialize_test_db`: (autouse) Creates a fresh DB schema and seed users for each test.
- `admin_user`, `seller_user`, `other_seller_user`: The seeded accounts.
- `client`: A non-authenticated AsyncClient.
- `admin_client`, `seller_client`, `other_seller_client`: AsyncClients carrying a bearer token.
- `strict_consistency`: Turns on STRICT_CONSISTENCY for the duration of a test.
- `bike_factory`: Creates catalog bikes.
- `shop_item_factory`: Credits a bike to a seller's shop and returns the inventory record.
"""

from typing import Any, AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from ebike_admin.core import config
from ebike_admin.features.auth.models import User, UserRole, UserStatus
from ebike_admin.features.auth.security import get_password_hash
from ebike_admin.features.catalog.models import Bike, BikeCategory, BikeStatus, VehicleCategory
from ebike_admin.features.shop_inventory.models import ShopInventoryItem
from ebike_admin.features.shop_inventory.service import merge_inventory
from ebike_admin.main import app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpassword123"
SELLER_EMAIL = "seller@example.com"
SELLER_PASSWORD = "sellerpassword123"
OTHER_SELLER_EMAIL = "other.seller@example.com"
OTHER_SELLER_PASSWORD = "otherpassword123"


async def add_admin_user() -> User:
    return await User.create(
        email=ADMIN_EMAIL,
        display_name="Fixture Admin",
        hashed_password=get_password_hash(ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        status=UserStatus.ACTIVE,
    )


async def add_seller_user(email: str, password: str, display_name: str, shop_name: str) -> User:
    return await User.create(
        email=email,
        display_name=display_name,
        hashed_password=get_password_hash(password),
        role=UserRole.SELLER,
        status=UserStatus.ACTIVE,
        shop_name=shop_name,
        phone="555-0100",
    )


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db() -> AsyncGenerator[None, None]:
    """
    Initializes the database for each test function.

    Creates a fresh in-memory database and schema, seeds the fixture users,
    and closes the connections afterwards.
    """
    test_db_config = {
        "connections": {"default": "sqlite://:memory:"},
        "apps": {
            "models": {
                "models": config.MODEL_MODULES,
                "default_connection": "default",
            }
        },
    }
    await Tortoise.init(config=test_db_config)
    await Tortoise.generate_schemas()
    await add_admin_user()
    await add_seller_user(SELLER_EMAIL, SELLER_PASSWORD, "Sam Seller", "Downtown E-Bikes")
    await add_seller_user(OTHER_SELLER_EMAIL, OTHER_SELLER_PASSWORD, "Olga Other", "Harbor Bikes")

    yield

    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def admin_user() -> User:
    return await User.get(email=ADMIN_EMAIL)


@pytest_asyncio.fixture
async def seller_user() -> User:
    return await User.get(email=SELLER_EMAIL)


@pytest_asyncio.fixture
async def other_seller_user() -> User:
    return await User.get(email=OTHER_SELLER_EMAIL)


@pytest.fixture
def strict_consistency(monkeypatch):
    monkeypatch.setattr(config, "STRICT_CONSISTENCY", True)


async def _login(client: AsyncClient, email: str, password: str) -> str:
    response = await client.post(
        "/api/v1/auth/token", data={"username": email, "password": password}
    )
    if response.status_code != 200:
        raise Exception(f"Authentication failed for {email}: {response.text}")
    return response.json()["access_token"]


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, Any]:
    """Provides a non-authenticated AsyncClient bound to the app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def _authenticated_client(email: str, password: str) -> AsyncGenerator[AsyncClient, Any]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        token = await _login(ac, email, password)
        ac.headers["Authorization"] = f"Bearer {token}"
        yield ac


@pytest_asyncio.fixture
async def admin_client() -> AsyncGenerator[AsyncClient, Any]:
    async for ac in _authenticated_client(ADMIN_EMAIL, ADMIN_PASSWORD):
        yield ac


@pytest_asyncio.fixture
async def seller_client() -> AsyncGenerator[AsyncClient, Any]:
    async for ac in _authenticated_client(SELLER_EMAIL, SELLER_PASSWORD):
        yield ac


@pytest_asyncio.fixture
async def other_seller_client() -> AsyncGenerator[AsyncClient, Any]:
    async for ac in _authenticated_client(OTHER_SELLER_EMAIL, OTHER_SELLER_PASSWORD):
        yield ac


@pytest_asyncio.fixture
async def bike_factory():
    """A factory to create catalog bikes."""

    async def _factory(
        name: str = "Urban Glide",
        price: float = 500.0,
        stock: int = 20,
        **overrides,
    ) -> Bike:
        data = dict(
            vehicle_category=VehicleCategory.ELECTRIC_BICYCLE,
            name=name,
            brand="Voltra",
            model=f"{name} S1",
            category=BikeCategory.CITY,
            price=price,
            stock=stock,
            description=f"{name} test bike",
            specifications={
                "motor_power": "350W",
                "battery_capacity": "48V 12Ah",
                "range": "60km",
                "max_speed": "25km/h",
                "weight": "24kg",
            },
            images=[f"https://img.example.com/{name.lower().replace(' ', '-')}.jpg"],
            status=BikeStatus.ACTIVE,
        )
        data.update(overrides)
        return await Bike.create(**data)

    return _factory


@pytest_asyncio.fixture
async def shop_item_factory(bike_factory):
    """A factory that credits units of a bike to a seller's shop."""

    async def _factory(
        seller: User, quantity: int = 10, bike: Optional[Bike] = None
    ) -> ShopInventoryItem:
        bike = bike or await bike_factory()
        key = await merge_inventory(seller.public_id, bike.public_id, bike, quantity)
        return await ShopInventoryItem.get(public_id=key)

    return _factory
