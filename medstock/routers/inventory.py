"""
Inventory router: medicine table, per-medicine status and alerts.
Read-only; mutations belong to the store's own backend.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional

from medstock.database import get_db
from medstock.dependencies import get_now, load_snapshot
from medstock.crud.inventory import crud_medicine
from medstock.schemas.dashboard import Notification
from medstock.schemas.inventory import MedicineRecord, MedicineStatusResponse
from medstock.utils.alerts import count_by_severity, generate_notifications
from medstock.utils.dates import months_until
from medstock.utils.filters import filter_medicines
from medstock.utils.status import classify_status

router = APIRouter(tags=["inventory"])

def _status_response(medicine, now: datetime) -> MedicineStatusResponse:
    record = MedicineRecord.model_validate(medicine)
    return MedicineStatusResponse(
        medicine=record,
        status=classify_status(record.expiry_date, record.quantity, now),
        stock_value=record.quantity * record.price,
        months_until_expiry=months_until(record.expiry_date, now),
    )

@router.get("/medicines", response_model=List[MedicineRecord])
async def list_medicines(
    search: Optional[str] = Query(None, description="Case-insensitive name substring"),
    status_filter: Optional[str] = Query("all", alias="status", description="Status tier or 'all'"),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db)
):
    """
    Medicine table with search and status filters.
    Both filters are ANDed; input order is preserved.
    """
    medicines = load_snapshot(crud_medicine.get_snapshot, db, "medicines")
    filtered = filter_medicines(medicines, now, search=search, tier=status_filter)
    return [MedicineRecord.model_validate(m) for m in filtered]

@router.get("/medicines/stock-status", response_model=List[MedicineStatusResponse])
async def get_all_stock_status(
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db)
):
    """Status tier, color and stock value for every medicine"""
    medicines = load_snapshot(crud_medicine.get_snapshot, db, "medicines")
    return [_status_response(m, now) for m in medicines]

@router.get("/medicines/{medicine_id}", response_model=MedicineStatusResponse)
async def get_medicine(
    medicine_id: str,
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db)
):
    medicine = crud_medicine.get(db, id=medicine_id)
    if not medicine:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Medicine not found"
        )
    return _status_response(medicine, now)

@router.get("/notifications", response_model=List[Notification])
async def list_notifications(
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db)
):
    """
    Alerts for medicines needing attention, in inventory order.
    Dismissal is client-side state.
    """
    medicines = load_snapshot(crud_medicine.get_snapshot, db, "medicines")
    return generate_notifications(medicines, now)

@router.get("/notifications/counts")
async def notification_counts(
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db)
):
    """Badge counters per severity"""
    medicines = load_snapshot(crud_medicine.get_snapshot, db, "medicines")
    notifications = generate_notifications(medicines, now)
    return {
        "total": len(notifications),
        "bySeverity": count_by_severity(notifications)
    }
