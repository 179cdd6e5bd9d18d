import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from tortoise import Tortoise
from tortoise.contrib.fastapi import tortoise_exception_handlers

from .core import logging_config  # noqa: F401  (installs the console handler)
from .core.config import TORTOISE_ORM_CONFIG
from .features.auth.router import router as auth_router
from .features.sellers.router import router as sellers_router
from .features.catalog.router import router as catalog_router
from .features.inventory_requests.router import router as inventory_requests_router
from .features.shop_inventory.router import router as shop_inventory_router
from .features.sales.router import router as sales_router
from .features.reports.router import router as reports_router

logger = logging.getLogger("ebike_admin.main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Connects Tortoise ORM on startup and closes its connections on shutdown.
    """
    logger.info("Starting application...")
    await Tortoise.init(config=TORTOISE_ORM_CONFIG)
    logger.info("Tortoise-ORM has been initialized.")

    yield

    await Tortoise.close_connections()
    logger.info("Tortoise-ORM connections have been closed.")


app = FastAPI(
    title="E-Bike Admin API",
    description="Catalog, shop inventory, inventory requests and sales for e-bike retail shops.",
    version="0.1.0",
    exception_handlers=tortoise_exception_handlers(),
    lifespan=lifespan,
)


@app.get("/")
async def read_root(request: Request):
    client_host = request.client.host if request.client else "unknown client"
    logger.info(f"Root endpoint '/' accessed by {client_host}")
    return {"message": "Welcome to the E-Bike Admin API!"}


app.include_router(auth_router, prefix="/api/v1")
app.include_router(sellers_router, prefix="/api/v1")
app.include_router(catalog_router, prefix="/api/v1")
app.include_router(inventory_requests_router, prefix="/api/v1")
app.include_router(shop_inventory_router, prefix="/api/v1")
app.include_router(sales_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
