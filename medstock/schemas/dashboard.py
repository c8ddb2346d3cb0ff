"""
Dashboard and notification schemas.
"""
from typing import List
from datetime import datetime
from decimal import Decimal
from enum import Enum

from medstock.schemas.common import CamelModel
from medstock.schemas.inventory import MedicineRecord, StatusTier

class NotificationLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"

# Notification Schemas
class Notification(CamelModel):
    id: str
    severity: NotificationLevel
    tier: StatusTier
    title: str
    message: str
    medicine_id: str
    medicine_name: str
    created_at: datetime

# Overview counters
class DashboardSummary(CamelModel):
    total_medicines: int
    low_stock_count: int
    expiring_soon_count: int
    out_of_stock_count: int
    today_revenue: Decimal
    today_transaction_count: int
    inventory_value: Decimal
    low_stock_items: List[MedicineRecord]
    expiring_soon_items: List[MedicineRecord]
