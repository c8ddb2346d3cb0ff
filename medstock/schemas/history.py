"""
Activity history schemas (append-only audit entries written by the backend).
"""
from pydantic import AliasChoices, Field, field_validator
from typing import List, Optional
from datetime import date, datetime
from enum import Enum

from medstock.schemas.common import CamelModel
from medstock.utils.dates import coerce_datetime

class HistoryAction(str, Enum):
    CREATED = "created"
    SOLD = "sold"
    UPDATED = "updated"
    DELETED = "deleted"

class HistoryEntryRecord(CamelModel):
    id: str = Field(..., validation_alias=AliasChoices("_id", "id"))
    medicine_id: Optional[str] = None
    medicine_name: str
    # Kept as plain text: older backends wrote other tags (e.g. "sale")
    action: str
    details: str = ""
    timestamp: datetime
    
    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, v):
        return coerce_datetime(v, "timestamp")

class ActionStyle(CamelModel):
    color: str
    label: str

class HistoryDayGroup(CamelModel):
    day: date = Field(..., alias="date")
    entries: List[HistoryEntryRecord]
