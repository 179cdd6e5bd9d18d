from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
import datetime

from ..catalog.models import BikeCategory, BikeStatus, VehicleCategory
from ..catalog.schemas import BikeSpecifications


class ShopInventoryItemResponse(BaseModel):
    id: str = Field(..., description="Composite id <seller_id>_<bike_id>")
    seller_id: str
    bike_id: str = Field(..., description="Public id of the catalog bike")
    vehicle_category: VehicleCategory
    name: str
    brand: str
    model: str
    category: BikeCategory
    price: float
    stock: int = Field(..., description="Catalog master stock when the snapshot was taken")
    description: str
    specifications: BikeSpecifications
    images: List[str]
    status: BikeStatus
    shop_stock: int = Field(..., description="Units available in this shop")
    total_sold: int = Field(..., description="Units sold from this shop")
    last_restocked: Optional[datetime.datetime] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())


class InventoryStatsResponse(BaseModel):
    total_items: int
    total_stock: int
    total_sold: int
    low_stock_count: int
    out_of_stock_count: int
