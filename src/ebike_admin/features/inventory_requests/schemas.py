from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
import datetime

from .models import RequestPriority, RequestStatus


class InventoryRequestCreate(BaseModel):
    bike_id: str = Field(..., description="Public id of the catalog bike")
    requested_quantity: int = Field(..., ge=1, description="Units requested")
    priority: RequestPriority = Field(default=RequestPriority.MEDIUM)
    notes: Optional[str] = Field(None, max_length=2000, description="Note from the seller")


class RequestApproveSchema(BaseModel):
    # Not checked against the requested quantity
    approved_quantity: int = Field(..., ge=1, description="Units to credit to the seller's shop")
    admin_notes: Optional[str] = Field(None, max_length=2000)


class RequestRejectSchema(BaseModel):
    admin_notes: Optional[str] = Field(None, max_length=2000, description="Reason for rejecting")


class InventoryRequestResponse(BaseModel):
    id: str = Field(..., description="Public unique identifier for the request (KSUID)")
    seller_id: str
    seller_name: str
    shop_name: str
    bike_id: str
    bike_name: str
    requested_quantity: int
    approved_quantity: Optional[int] = None
    status: RequestStatus
    priority: RequestPriority
    notes: Optional[str] = None
    admin_notes: Optional[str] = None
    processed_at: Optional[datetime.datetime] = None
    processed_by: Optional[str] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())
