"""Sales Reports and Dashboard Schemas

Response models for the reporting endpoints:

1. Sales summary (aggregate over a period)
2. Top sellers and top bikes
3. Admin dashboard
4. Seller dashboard
"""
from enum import Enum
from pydantic import BaseModel, Field
from typing import Dict, List

from ..shop_inventory.schemas import InventoryStatsResponse


class ReportPeriod(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class GroupTotal(BaseModel):
    count: int = 0
    revenue: float = 0.0


# 1. Sales summary
class SalesAggregate(BaseModel):
    total_revenue: float = 0.0
    total_sales: int = 0
    completed_sales: int = 0
    average_order_value: float = 0.0
    by_payment_method: Dict[str, float] = Field(default_factory=dict, description="Revenue per payment method")
    by_seller: Dict[str, GroupTotal] = Field(default_factory=dict, description="Sale count and revenue per seller name")
    by_bike: Dict[str, GroupTotal] = Field(default_factory=dict, description="Units sold and revenue per bike name")


class SalesSummaryResponse(SalesAggregate):
    period: ReportPeriod


# 2. Top lists
class TopSeller(BaseModel):
    seller_name: str
    sales_count: int
    revenue: float


class TopBike(BaseModel):
    bike_name: str
    units_sold: int
    revenue: float


class TopListsResponse(BaseModel):
    period: ReportPeriod
    top_sellers: List[TopSeller]
    top_bikes: List[TopBike]


# 3. Admin dashboard
class AdminDashboardResponse(BaseModel):
    total_bikes: int
    total_sellers: int
    total_sales: int
    total_revenue: float
    pending_requests: int
    low_stock_bikes: int


# 4. Seller dashboard
class SellerDashboardResponse(BaseModel):
    inventory: InventoryStatsResponse
    sales: SalesAggregate
    pending_requests: int
