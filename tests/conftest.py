"""
Shared fixtures: a fixed clock, record factories and an in-memory API client.
"""
from datetime import date, datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from medstock import models
from medstock.database import Base, get_db
from medstock.dependencies import get_now
from medstock.main import app
from medstock.schemas.history import HistoryEntryRecord
from medstock.schemas.inventory import MedicineRecord
from medstock.schemas.sales import SaleRecord

NOW = datetime(2025, 6, 15, 12, 0, 0)

def add_months(day: date, months: int) -> date:
    month_index = day.year * 12 + (day.month - 1) + months
    return date(month_index // 12, month_index % 12 + 1, min(day.day, 28))

def make_medicine(name="Paracetamol", quantity=50, expiry_months=12, price="10.00", id=None, expiry_date=None):
    return MedicineRecord(
        id=id or name.lower().replace(" ", "-"),
        name=name,
        quantity=quantity,
        manufacturing_date=add_months(NOW.date(), -12),
        expiry_date=expiry_date or add_months(NOW.date(), expiry_months),
        date_of_entry=NOW.date(),
        price=Decimal(price),
    )

def make_sale(name="Paracetamol", quantity=1, price="10.00", when=NOW, id=None, medicine_id=None):
    price = Decimal(price)
    return SaleRecord(
        id=id or f"{name}-{when.isoformat()}-{quantity}",
        medicine_id=medicine_id or name.lower(),
        medicine_name=name,
        quantity_sold=quantity,
        sale_price=price,
        total_amount=price * quantity,
        sale_date=when,
        remaining_quantity=0,
    )

def make_history(name="Paracetamol", action="created", details="", when=NOW, id=None):
    return HistoryEntryRecord(
        id=id or f"{name}-{action}-{when.isoformat()}",
        medicine_id=name.lower(),
        medicine_name=name,
        action=action,
        details=details,
        timestamp=when,
    )

@pytest.fixture
def now():
    return NOW

@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session
    
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

@pytest.fixture
def seeded(db_session):
    """Store with one medicine per interesting tier, a few sales and history."""
    rows = [
        models.Medicine(id="m-healthy", name="Amoxicillin", quantity=100,
                        manufacturing_date=date(2024, 1, 1), expiry_date=date(2027, 1, 1),
                        date_of_entry=date(2025, 1, 1), price=Decimal("20.00")),
        models.Medicine(id="m-expired", name="Cough Syrup", quantity=0,
                        manufacturing_date=date(2023, 1, 1), expiry_date=date(2025, 5, 1),
                        date_of_entry=date(2025, 1, 2), price=Decimal("5.00")),
        models.Medicine(id="m-low-exp", name="Ibuprofen", quantity=5,
                        manufacturing_date=date(2024, 6, 1), expiry_date=date(2025, 8, 20),
                        date_of_entry=date(2025, 1, 3), price=Decimal("8.50")),
        models.Sale(id="s-today", medicine_id="m-healthy", medicine_name="Amoxicillin",
                    quantity_sold=2, sale_price=Decimal("20.00"), total_amount=Decimal("40.00"),
                    sale_date=datetime(2025, 6, 15, 9, 30), remaining_quantity=100),
        models.Sale(id="s-old", medicine_id="m-low-exp", medicine_name="Ibuprofen",
                    quantity_sold=3, sale_price=Decimal("8.50"), total_amount=Decimal("25.50"),
                    sale_date=datetime(2025, 4, 1, 10, 0), remaining_quantity=5),
        models.HistoryEntry(id="h1", medicine_id="m-healthy", medicine_name="Amoxicillin",
                            action="created", details="Added 102 units",
                            timestamp=datetime(2025, 6, 14, 8, 0)),
        models.HistoryEntry(id="h2", medicine_id="m-healthy", medicine_name="Amoxicillin",
                            action="sold", details="Sold 2 units to walk-in customer",
                            timestamp=datetime(2025, 6, 15, 9, 30)),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return db_session
