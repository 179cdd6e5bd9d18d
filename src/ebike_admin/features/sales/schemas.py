from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
import datetime

from .models import PaymentMethod, SaleStatus


class SaleCreate(BaseModel):
    bike_id: str = Field(..., description="Shop inventory id of the bike being sold")
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_phone: str = Field(..., min_length=1, max_length=50)
    customer_email: Optional[EmailStr] = None
    quantity: int = Field(..., ge=1, description="Units sold")
    unit_price: float = Field(..., ge=0, description="Price per unit")
    payment_method: PaymentMethod
    notes: Optional[str] = Field(None, max_length=2000)


class SaleStatusUpdate(BaseModel):
    status: SaleStatus


class SaleResponse(BaseModel):
    id: str = Field(..., description="Public unique identifier for the sale (KSUID)")
    bike_id: str
    bike_name: str
    seller_id: str
    seller_name: str
    shop_name: str
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    quantity: int
    unit_price: float
    total_price: float
    payment_method: PaymentMethod
    status: SaleStatus
    notes: Optional[str] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())
