"""
SQLAlchemy 2.x read models of the pharmacy store.
The store is owned by the external backend; these tables are only read to
build snapshots for the analytics engine.
"""
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, Text
from sqlalchemy.sql import func
from decimal import Decimal
import uuid

from medstock.database import Base

def _new_id() -> str:
    return uuid.uuid4().hex

class Medicine(Base):
    __tablename__ = "medicines"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    manufacturing_date = Column(Date, nullable=False)
    expiry_date = Column(Date, nullable=False)
    date_of_entry = Column(Date, nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class Sale(Base):
    __tablename__ = "sales"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    # Reference only: no FK cascade, sales outlive deleted medicines
    medicine_id = Column(String(36), nullable=False, index=True)
    medicine_name = Column(String(200), nullable=False)
    quantity_sold = Column(Integer, nullable=False)
    sale_price = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    sale_date = Column(DateTime, nullable=False, index=True)
    remaining_quantity = Column(Integer, nullable=False, default=0)
    customer_name = Column(String(100))

class HistoryEntry(Base):
    __tablename__ = "history_entries"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    medicine_id = Column(String(36), index=True)
    medicine_name = Column(String(200), nullable=False)
    action = Column(String(20), nullable=False)
    details = Column(Text, nullable=False, default="")
    timestamp = Column(DateTime, nullable=False, index=True)
