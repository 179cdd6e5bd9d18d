import logging
from typing import List, Optional
from fastapi import HTTPException, status
from .models import Bike, BikeCategory, BikeStatus
from .schemas import BikeCreate, BikeUpdate, BikeResponse, BikeSpecifications

logger = logging.getLogger(__name__)


def to_bike_response(bike: Bike) -> BikeResponse:
    """Converts a Bike model instance to a BikeResponse schema."""
    return BikeResponse(
        id=bike.public_id,
        vehicle_category=bike.vehicle_category,
        name=bike.name,
        brand=bike.brand,
        model=bike.model,
        category=bike.category,
        price=bike.price,
        stock=bike.stock,
        description=bike.description or "",
        specifications=BikeSpecifications(**(bike.specifications or {})),
        images=bike.images or [],
        status=bike.status,
        created_at=bike.created_at,
        updated_at=bike.updated_at,
    )


async def get_bike_or_none(bike_public_id: str) -> Optional[Bike]:
    return await Bike.get_or_none(public_id=bike_public_id)


async def _get_bike_or_404(bike_public_id: str) -> Bike:
    bike = await get_bike_or_none(bike_public_id)
    if not bike:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Bike not found"
        )
    return bike


async def create_bike(bike_in: BikeCreate) -> BikeResponse:
    """
    Adds a bike to the catalog.

    Args:
        bike_in: The data for the new bike.

    Returns:
        The created bike.
    """
    bike = await Bike.create(**bike_in.model_dump())
    logger.info(f"Catalog bike {bike.public_id} '{bike.name}' created")
    return to_bike_response(bike)


async def list_bikes(
    bike_status: Optional[BikeStatus] = None,
    category: Optional[BikeCategory] = None,
) -> List[BikeResponse]:
    """
    Lists catalog bikes, newest first.

    Args:
        bike_status: Optional status to filter by.
        category: Optional bike category to filter by.
    """
    query = Bike.all()
    if bike_status:
        query = query.filter(status=bike_status)
    if category:
        query = query.filter(category=category)
    bikes = await query.order_by("-created_at", "-id")
    return [to_bike_response(bike) for bike in bikes]


async def get_bike(bike_public_id: str) -> BikeResponse:
    return to_bike_response(await _get_bike_or_404(bike_public_id))


async def update_bike(bike_public_id: str, bike_in: BikeUpdate) -> BikeResponse:
    """
    Updates a catalog bike.

    Shop inventory records copied from this bike are not touched; they keep
    the values captured when the bike was first fulfilled to the shop.

    Args:
        bike_public_id: The public ID of the bike to update.
        bike_in: The fields to change.
    """
    bike = await _get_bike_or_404(bike_public_id)
    update_data = bike_in.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No fields for update"
        )
    if update_data.get("specifications") is not None:
        update_data["specifications"] = {**(bike.specifications or {}), **update_data["specifications"]}
    for key, value in update_data.items():
        setattr(bike, key, value)
    await bike.save()
    return to_bike_response(bike)


async def update_bike_stock(bike_public_id: str, stock: int) -> BikeResponse:
    """Sets the master stock; zero marks the bike out of stock, anything else active."""
    bike = await _get_bike_or_404(bike_public_id)
    bike.stock = stock
    bike.status = BikeStatus.OUT_OF_STOCK if stock == 0 else BikeStatus.ACTIVE
    await bike.save(update_fields=["stock", "status", "updated_at"])
    return to_bike_response(bike)


async def delete_bike(bike_public_id: str):
    bike = await _get_bike_or_404(bike_public_id)
    await bike.delete()
    logger.info(f"Catalog bike {bike_public_id} deleted")
    return None


async def count_low_stock_bikes(threshold: int) -> int:
    """Active bikes whose master stock is at or below the threshold."""
    return await Bike.filter(status=BikeStatus.ACTIVE, stock__lte=threshold).count()
