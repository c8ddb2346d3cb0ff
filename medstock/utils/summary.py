"""
Dashboard overview counters.
Each counter is an independent cross-section: a medicine can count toward
several of them at once.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Sequence

from medstock.schemas.dashboard import DashboardSummary
from medstock.schemas.inventory import MedicineRecord
from medstock.utils.analytics import as_decimal
from medstock.utils.dates import same_calendar_day
from medstock.utils.status import is_expiring_soon, is_low_stock

QUICK_LIST_LIMIT = 5

def summarize_dashboard(
    medicines: Sequence[Any],
    sales: Sequence[Any],
    now: datetime,
) -> DashboardSummary:
    """Overview cards plus the low-stock / expiring quick lists (first 5 each)."""
    low_stock = [m for m in medicines if is_low_stock(m.quantity)]
    expiring = [m for m in medicines if is_expiring_soon(m.expiry_date, now)]
    out_of_stock_count = sum(1 for m in medicines if m.quantity == 0)
    
    today_sales = [s for s in sales if same_calendar_day(s.sale_date, now)]
    today_revenue = sum((as_decimal(s.total_amount, "total_amount") for s in today_sales), Decimal("0"))
    
    inventory_value = sum(
        (m.quantity * as_decimal(m.price, "price") for m in medicines), Decimal("0")
    )
    
    return DashboardSummary(
        total_medicines=len(medicines),
        low_stock_count=len(low_stock),
        expiring_soon_count=len(expiring),
        out_of_stock_count=out_of_stock_count,
        today_revenue=today_revenue,
        today_transaction_count=len(today_sales),
        inventory_value=inventory_value,
        low_stock_items=[MedicineRecord.model_validate(m) for m in low_stock[:QUICK_LIST_LIMIT]],
        expiring_soon_items=[MedicineRecord.model_validate(m) for m in expiring[:QUICK_LIST_LIMIT]],
    )
