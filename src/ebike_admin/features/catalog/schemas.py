from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
import datetime

from .models import BikeCategory, BikeStatus, VehicleCategory


class BikeSpecifications(BaseModel):
    motor_power: str = Field(default="", description="e.g. 500W")
    battery_capacity: str = Field(default="", description="e.g. 48V 20Ah")
    range: str = Field(default="", description="e.g. 80km")
    max_speed: str = Field(default="", description="e.g. 45km/h")
    weight: str = Field(default="", description="e.g. 28kg")


class BikeBase(BaseModel):
    vehicle_category: VehicleCategory = Field(default=VehicleCategory.LUXURY_VEHICLE)
    name: str = Field(..., min_length=1, max_length=255, description="Display name of the bike")
    brand: str = Field(..., min_length=1, max_length=255)
    model: str = Field(..., min_length=1, max_length=255)
    category: BikeCategory = Field(default=BikeCategory.ELECTRIC)
    price: float = Field(default=0.0, ge=0, description="Retail price")
    stock: int = Field(default=0, ge=0, description="Master stock count")
    description: str = Field(default="")
    specifications: BikeSpecifications = Field(default_factory=BikeSpecifications)
    images: List[str] = Field(default_factory=list, description="Image URLs returned by blob storage")


class BikeCreate(BikeBase):
    status: BikeStatus = Field(default=BikeStatus.ACTIVE)


class BikeUpdate(BaseModel):
    vehicle_category: Optional[VehicleCategory] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    brand: Optional[str] = Field(None, min_length=1, max_length=255)
    model: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[BikeCategory] = None
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    specifications: Optional[BikeSpecifications] = None
    images: Optional[List[str]] = None
    status: Optional[BikeStatus] = None


class BikeStockUpdate(BaseModel):
    stock: int = Field(..., ge=0, description="New master stock count")


class BikeResponse(BikeBase):
    id: str = Field(..., description="Public unique identifier for the bike (KSUID)")
    status: BikeStatus
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())
