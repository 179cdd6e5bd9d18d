"""
Reports Service Module

Sales analytics and dashboards. Aggregation itself is a pure function over a
list of sales so it can be applied to any slice of the ledger: a period, one
seller, or the whole history. Revenue figures include every sale status.
"""

import datetime
import logging
from typing import Dict, Iterable, List, Optional

from dateutil.relativedelta import relativedelta

from ...common.models import as_utc, utcnow
from ...core import config
from ..auth.models import User as AuthUser, UserRole, UserStatus
from ..catalog.models import Bike
from ..catalog.service import count_low_stock_bikes
from ..inventory_requests.models import InventoryRequest, RequestStatus
from ..sales.models import PaymentMethod, Sale, SaleStatus
from ..shop_inventory.service import get_inventory_stats
from .schemas import (
    AdminDashboardResponse,
    GroupTotal,
    ReportPeriod,
    SalesAggregate,
    SalesSummaryResponse,
    SellerDashboardResponse,
    TopBike,
    TopListsResponse,
    TopSeller,
)

logger = logging.getLogger(__name__)

_PERIOD_MONTHS = {
    ReportPeriod.MONTH: 1,
    ReportPeriod.QUARTER: 3,
    ReportPeriod.YEAR: 12,
}


def period_cutoff(
    period: ReportPeriod, now: Optional[datetime.datetime] = None
) -> Optional[datetime.datetime]:
    """
    Returns the earliest creation time included in ``period``.

    ``today`` starts at midnight of the current (UTC) day, ``week`` is the
    last seven days, ``month``/``quarter``/``year`` go back one, three and
    twelve calendar months. ``all`` has no cutoff and returns None.
    """
    now = as_utc(now or utcnow())
    if period == ReportPeriod.ALL:
        return None
    if period == ReportPeriod.TODAY:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == ReportPeriod.WEEK:
        return now - datetime.timedelta(days=7)
    # relativedelta clamps the day, so March 31 minus one month is Feb 28/29
    return now - relativedelta(months=_PERIOD_MONTHS[period])


def filter_sales_since(
    sales: Iterable[Sale], cutoff: Optional[datetime.datetime]
) -> List[Sale]:
    if cutoff is None:
        return list(sales)
    cutoff = as_utc(cutoff)
    return [sale for sale in sales if as_utc(sale.created_at) >= cutoff]


def aggregate_sales(sales: Iterable[Sale]) -> SalesAggregate:
    """
    Summarizes a list of sales.

    Args:
        sales: Any sequence of Sale records, in any status.

    Returns:
        SalesAggregate with:
            - total_revenue: sum of total_price over all sales
            - total_sales / completed_sales: record counts
            - average_order_value: total_revenue / total_sales, 0 when empty
            - by_payment_method: revenue per payment method
            - by_seller: sale count and revenue per seller name
            - by_bike: units sold and revenue per bike name
    """
    total_revenue = 0.0
    total_sales = 0
    completed_sales = 0
    by_payment_method: Dict[str, float] = {}
    by_seller: Dict[str, GroupTotal] = {}
    by_bike: Dict[str, GroupTotal] = {}

    for sale in sales:
        total_sales += 1
        total_revenue += sale.total_price
        if sale.status == SaleStatus.COMPLETED:
            completed_sales += 1

        method = PaymentMethod(sale.payment_method).value
        by_payment_method[method] = by_payment_method.get(method, 0.0) + sale.total_price

        seller = by_seller.setdefault(sale.seller_name, GroupTotal())
        seller.count += 1
        seller.revenue += sale.total_price

        bike = by_bike.setdefault(sale.bike_name, GroupTotal())
        bike.count += sale.quantity
        bike.revenue += sale.total_price

    return SalesAggregate(
        total_revenue=total_revenue,
        total_sales=total_sales,
        completed_sales=completed_sales,
        average_order_value=total_revenue / total_sales if total_sales else 0.0,
        by_payment_method=by_payment_method,
        by_seller=by_seller,
        by_bike=by_bike,
    )


def top_sellers(aggregate: SalesAggregate, limit: Optional[int] = None) -> List[TopSeller]:
    """Sellers ranked by revenue, highest first."""
    limit = limit or config.TOP_LIST_LIMIT
    ranked = sorted(aggregate.by_seller.items(), key=lambda kv: kv[1].revenue, reverse=True)
    return [
        TopSeller(seller_name=name, sales_count=total.count, revenue=total.revenue)
        for name, total in ranked[:limit]
    ]


def top_bikes(aggregate: SalesAggregate, limit: Optional[int] = None) -> List[TopBike]:
    """Bikes ranked by units sold, highest first."""
    limit = limit or config.TOP_LIST_LIMIT
    ranked = sorted(aggregate.by_bike.items(), key=lambda kv: kv[1].count, reverse=True)
    return [
        TopBike(bike_name=name, units_sold=total.count, revenue=total.revenue)
        for name, total in ranked[:limit]
    ]


async def _sales_for(current_user: AuthUser, period: ReportPeriod) -> List[Sale]:
    query = Sale.all()
    if current_user.role != UserRole.ADMIN:
        query = query.filter(seller_id=current_user.public_id)
    sales = await query.order_by("-created_at", "-id")
    return filter_sales_since(sales, period_cutoff(period))


async def generate_sales_summary(
    current_user: AuthUser, period: ReportPeriod = ReportPeriod.ALL
) -> SalesSummaryResponse:
    """Aggregate of all sales for an admin, or of the seller's own sales."""
    sales = await _sales_for(current_user, period)
    aggregate = aggregate_sales(sales)
    logger.debug(
        f"Sales summary for {current_user.public_id} ({period.value}): {aggregate.total_sales} sale(s)"
    )
    return SalesSummaryResponse(period=period, **aggregate.model_dump())


async def generate_top_lists(
    current_user: AuthUser,
    period: ReportPeriod = ReportPeriod.ALL,
    limit: Optional[int] = None,
) -> TopListsResponse:
    aggregate = aggregate_sales(await _sales_for(current_user, period))
    return TopListsResponse(
        period=period,
        top_sellers=top_sellers(aggregate, limit),
        top_bikes=top_bikes(aggregate, limit),
    )


async def generate_admin_dashboard() -> AdminDashboardResponse:
    """Store-wide tiles. Revenue counts completed sales only, sellers only active accounts."""
    sales = await Sale.all()
    return AdminDashboardResponse(
        total_bikes=await Bike.all().count(),
        total_sellers=await AuthUser.filter(role=UserRole.SELLER, status=UserStatus.ACTIVE).count(),
        total_sales=len(sales),
        total_revenue=sum(sale.total_price for sale in sales if sale.status == SaleStatus.COMPLETED),
        pending_requests=await InventoryRequest.filter(status=RequestStatus.PENDING).count(),
        low_stock_bikes=await count_low_stock_bikes(config.LOW_STOCK_THRESHOLD),
    )


async def generate_seller_dashboard(seller: AuthUser) -> SellerDashboardResponse:
    sales = await Sale.filter(seller_id=seller.public_id)
    return SellerDashboardResponse(
        inventory=await get_inventory_stats(seller.public_id),
        sales=aggregate_sales(sales),
        pending_requests=await InventoryRequest.filter(
            seller_id=seller.public_id, status=RequestStatus.PENDING
        ).count(),
    )
