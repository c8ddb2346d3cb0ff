"""
Sales schemas: sale snapshot record and analytics results.
"""
from pydantic import AliasChoices, Field, field_validator
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from medstock.schemas.common import CamelModel
from medstock.utils.dates import coerce_datetime

class TimeRange(str, Enum):
    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"
    LAST_90_DAYS = "90days"
    
    @property
    def days(self) -> int:
        return int(self.value[:-len("days")])

class SaleRecord(CamelModel):
    id: str = Field(..., validation_alias=AliasChoices("_id", "id"))
    medicine_id: str
    medicine_name: str
    quantity_sold: int = Field(..., gt=0)
    sale_price: Decimal = Field(..., ge=0)
    total_amount: Decimal = Field(..., ge=0)
    sale_date: datetime
    remaining_quantity: int = Field(0, ge=0)
    customer_name: Optional[str] = None
    
    @field_validator("sale_date", mode="before")
    @classmethod
    def parse_sale_date(cls, v):
        return coerce_datetime(v, "sale_date")

# Analytics results
class DailySalesPoint(CamelModel):
    day: date = Field(..., alias="date")
    total_revenue: Decimal
    total_quantity_sold: int
    transaction_count: int

class TopSeller(CamelModel):
    medicine_name: str
    quantity_sold: int
    revenue: Decimal

class InventoryRevenuePoint(CamelModel):
    medicine_name: str
    stock_quantity: int
    revenue: Decimal

class SalesAnalytics(CamelModel):
    time_range: TimeRange
    total_revenue: Decimal
    transaction_count: int
    average_sale: Decimal
    daily_series: List[DailySalesPoint]
    top_sellers: List[TopSeller]
    inventory_vs_revenue: List[InventoryRevenuePoint]
    max_daily_revenue: Decimal
    max_daily_transactions: int
