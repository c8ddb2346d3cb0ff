"""
Dashboard router: overview counters, sales ledger, analytics and PDF export.
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session
from datetime import datetime
from enum import Enum
from typing import List, Optional
import logging

from medstock.config import settings
from medstock.database import get_db
from medstock.dependencies import get_now, load_snapshot
from medstock.crud.inventory import crud_medicine, crud_sale
from medstock.schemas.dashboard import DashboardSummary
from medstock.schemas.sales import SaleRecord, SalesAnalytics, TimeRange
from medstock.utils.analytics import aggregate_sales
from medstock.utils.pdf_reports import pdf_generator
from medstock.utils.summary import summarize_dashboard

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])

class ReportKind(str, Enum):
    INVENTORY = "inventory"
    SALES = "sales"

@router.get("/dashboard/summary", response_model=DashboardSummary)
async def dashboard_summary(
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db)
):
    """Overview cards: stock counters, today's sales, inventory value"""
    medicines = load_snapshot(crud_medicine.get_snapshot, db, "medicines")
    sales = load_snapshot(crud_sale.get_snapshot, db, "sales")
    return summarize_dashboard(medicines, sales, now)

@router.get("/sales", response_model=List[SaleRecord])
async def sales_ledger(db: Session = Depends(get_db)):
    """Sales ledger, newest first"""
    sales = load_snapshot(crud_sale.get_snapshot, db, "sales")
    return [SaleRecord.model_validate(s) for s in sales]

@router.get("/analytics/sales", response_model=SalesAnalytics)
async def sales_analytics(
    time_range: Optional[TimeRange] = Query(None, alias="timeRange"),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db)
):
    """
    Revenue totals, daily series, top sellers and inventory-vs-revenue
    for the trailing 7/30/90 day window.
    """
    medicines = load_snapshot(crud_medicine.get_snapshot, db, "medicines")
    sales = load_snapshot(crud_sale.get_snapshot, db, "sales")
    return aggregate_sales(sales, time_range or settings.DEFAULT_TIME_RANGE, now, medicines=medicines)

@router.get("/analytics/report.pdf")
async def analytics_report(
    kind: ReportKind = ReportKind.INVENTORY,
    time_range: Optional[TimeRange] = Query(None, alias="timeRange"),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db)
):
    """Download the inventory status or sales analytics report as PDF"""
    medicines = load_snapshot(crud_medicine.get_snapshot, db, "medicines")
    sales = load_snapshot(crud_sale.get_snapshot, db, "sales")
    
    if kind == ReportKind.INVENTORY:
        summary = summarize_dashboard(medicines, sales, now)
        content = pdf_generator.generate_inventory_report(medicines, summary, now)
    else:
        analytics = aggregate_sales(sales, time_range or settings.DEFAULT_TIME_RANGE, now, medicines=medicines)
        content = pdf_generator.generate_sales_report(analytics, now)
    
    filename = f"{kind.value}-report-{now:%Y%m%d}.pdf"
    logger.info(f"Generated {kind.value} report ({len(content)} bytes)")
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
