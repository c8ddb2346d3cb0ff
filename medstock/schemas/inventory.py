"""
Inventory schemas:
- Medicine snapshot record
- Status tiers with fixed color/label
"""
from pydantic import AliasChoices, ConfigDict, Field, field_validator
from datetime import date
from decimal import Decimal
from enum import Enum

from medstock.schemas.common import CamelModel
from medstock.utils.dates import coerce_date

class StatusTier(str, Enum):
    EXPIRED = "expired"
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK_AND_EXPIRING = "low_stock_and_expiring"
    LOW_STOCK = "low_stock"
    EXPIRING_SOON = "expiring_soon"
    HEALTHY = "healthy"

class StockStatus(CamelModel):
    model_config = ConfigDict(frozen=True)
    
    tier: StatusTier
    color: str
    label: str

# Medicine Schemas
class MedicineRecord(CamelModel):
    id: str = Field(..., validation_alias=AliasChoices("_id", "id"))
    name: str = Field(..., min_length=1, max_length=200)
    quantity: int = Field(..., ge=0)
    manufacturing_date: date
    expiry_date: date
    date_of_entry: date
    price: Decimal = Field(..., ge=0)
    
    @field_validator("manufacturing_date", "expiry_date", "date_of_entry", mode="before")
    @classmethod
    def parse_iso_date(cls, v, info):
        """Accept date, datetime or ISO 8601 strings (backend may send full timestamps)"""
        return coerce_date(v, info.field_name)

class MedicineStatusResponse(CamelModel):
    medicine: MedicineRecord
    status: StockStatus
    stock_value: Decimal
    months_until_expiry: int
