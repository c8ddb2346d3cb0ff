"""
Sales analytics over a trailing time window.

Steps, all single-pass over the windowed sales:
1. Window: keep sales at most N days old (future-dated sales are kept)
2. Totals: revenue, transaction count, average sale (0 when empty)
3. Daily series: revenue / quantity / count per calendar day, ascending
4. Top sellers: summed quantity per medicine name, top 10
5. Inventory vs revenue: current stock of medicines with revenue, top 15
"""
import logging
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Sequence, Union

from medstock.exceptions import SnapshotValidationError
from medstock.schemas.sales import (
    DailySalesPoint, InventoryRevenuePoint, SalesAnalytics, TimeRange, TopSeller
)
from medstock.utils.dates import align_to, coerce_datetime

logger = logging.getLogger(__name__)

TOP_SELLERS_LIMIT = 10
INVENTORY_REVENUE_LIMIT = 15
SECONDS_PER_DAY = 24 * 60 * 60
CENT = Decimal("0.01")

def as_decimal(value: Any, field: str = "amount") -> Decimal:
    """Money values arrive as Decimal (ORM), float or str (JSON)."""
    if isinstance(value, bool) or value is None:
        raise SnapshotValidationError(f"expected a money amount, got {value!r}", field)
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise SnapshotValidationError(f"invalid money amount {value!r}", field)
    # NaN and Infinity parse but cannot be summed into a total
    if not result.is_finite():
        raise SnapshotValidationError(f"invalid money amount {value!r}", field)
    return result

def parse_time_range(time_range: Union[TimeRange, str]) -> TimeRange:
    if isinstance(time_range, TimeRange):
        return time_range
    try:
        return TimeRange(time_range)
    except ValueError:
        allowed = ", ".join(t.value for t in TimeRange)
        raise SnapshotValidationError(f"unknown time range {time_range!r} (expected one of: {allowed})", "timeRange")

def window_sales(sales: Iterable[Any], time_range: Union[TimeRange, str], now: datetime) -> List[Any]:
    """Sales whose age in days is <= the window length."""
    days = parse_time_range(time_range).days
    windowed = []
    for sale in sales:
        sale_date = align_to(coerce_datetime(sale.sale_date, "sale_date"), now)
        age_days = (now - sale_date).total_seconds() / SECONDS_PER_DAY
        if age_days <= days:
            windowed.append(sale)
    return windowed

def daily_series(sales: Iterable[Any], now: datetime) -> List[DailySalesPoint]:
    """Per-calendar-day totals sorted ascending by date."""
    days: Dict[date, dict] = {}
    for sale in sales:
        day = align_to(coerce_datetime(sale.sale_date, "sale_date"), now).date()
        bucket = days.setdefault(day, {"revenue": Decimal("0"), "quantity": 0, "count": 0})
        bucket["revenue"] += as_decimal(sale.total_amount, "total_amount")
        bucket["quantity"] += sale.quantity_sold
        bucket["count"] += 1
    
    return [
        DailySalesPoint(
            day=day,
            total_revenue=bucket["revenue"],
            total_quantity_sold=bucket["quantity"],
            transaction_count=bucket["count"],
        )
        for day, bucket in sorted(days.items())
    ]

def _totals_by_medicine(sales: Iterable[Any]) -> Dict[str, dict]:
    # dict keeps first-seen order, which the stable sort below relies on
    totals: Dict[str, dict] = {}
    for sale in sales:
        item = totals.setdefault(sale.medicine_name, {"quantity": 0, "revenue": Decimal("0")})
        item["quantity"] += sale.quantity_sold
        item["revenue"] += as_decimal(sale.total_amount, "total_amount")
    return totals

def top_sellers(totals: Dict[str, dict], limit: int = TOP_SELLERS_LIMIT) -> List[TopSeller]:
    ranked = sorted(totals.items(), key=lambda kv: kv[1]["quantity"], reverse=True)
    return [
        TopSeller(medicine_name=name, quantity_sold=item["quantity"], revenue=item["revenue"])
        for name, item in ranked[:limit]
    ]

def inventory_vs_revenue(
    totals: Dict[str, dict],
    medicines: Iterable[Any],
    limit: int = INVENTORY_REVENUE_LIMIT,
) -> List[InventoryRevenuePoint]:
    """Current stock of each medicine next to its windowed revenue (revenue > 0 only)."""
    points = []
    for medicine in medicines:
        item = totals.get(medicine.name)
        if not item or item["revenue"] <= 0:
            continue
        points.append(InventoryRevenuePoint(
            medicine_name=medicine.name,
            stock_quantity=medicine.quantity,
            revenue=item["revenue"],
        ))
    points.sort(key=lambda p: p.revenue, reverse=True)
    return points[:limit]

def aggregate_sales(
    sales: Sequence[Any],
    time_range: Union[TimeRange, str],
    now: datetime,
    medicines: Sequence[Any] = (),
) -> SalesAnalytics:
    """
    Aggregate sales for the analytics view.

    Args:
        sales: sale snapshot (records or ORM rows)
        time_range: "7days", "30days" or "90days"
        now: reference instant
        medicines: current medicine snapshot, used only for the
            inventory-vs-revenue series

    Returns:
        SalesAnalytics; inputs are not modified
    """
    time_range = parse_time_range(time_range)
    windowed = window_sales(sales, time_range, now)
    logger.debug(f"{len(windowed)} of {len(sales)} sales inside {time_range.value} window")
    
    total_revenue = sum((as_decimal(s.total_amount, "total_amount") for s in windowed), Decimal("0"))
    transaction_count = len(windowed)
    if transaction_count:
        average_sale = (total_revenue / transaction_count).quantize(CENT, rounding=ROUND_HALF_UP)
    else:
        average_sale = Decimal("0")
    
    series = daily_series(windowed, now)
    totals = _totals_by_medicine(windowed)
    
    return SalesAnalytics(
        time_range=time_range,
        total_revenue=total_revenue,
        transaction_count=transaction_count,
        average_sale=average_sale,
        daily_series=series,
        top_sellers=top_sellers(totals),
        inventory_vs_revenue=inventory_vs_revenue(totals, medicines),
        # chart scaling: floor of 1 keeps bar heights finite on empty data
        max_daily_revenue=max([p.total_revenue for p in series] + [Decimal("1")]),
        max_daily_transactions=max([p.transaction_count for p in series] + [1]),
    )
