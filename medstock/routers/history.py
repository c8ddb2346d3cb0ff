"""
Activity history router: append-only log written by the store backend.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Dict, List, Optional

from medstock.database import get_db
from medstock.dependencies import load_snapshot
from medstock.crud.inventory import crud_history
from medstock.schemas.history import ActionStyle, HistoryDayGroup, HistoryEntryRecord
from medstock.utils.filters import ACTION_STYLES, filter_history, group_history_by_date

router = APIRouter(prefix="/history", tags=["history"])

@router.get("", response_model=List[HistoryEntryRecord])
async def list_history(
    action: Optional[str] = Query("all", description="created | sold | updated | deleted | all"),
    search: Optional[str] = Query(None, description="Matches medicine name or details"),
    db: Session = Depends(get_db)
):
    entries = load_snapshot(crud_history.get_snapshot, db, "history")
    return [HistoryEntryRecord.model_validate(e) for e in filter_history(entries, action=action, search=search)]

@router.get("/grouped", response_model=List[HistoryDayGroup])
async def grouped_history(
    action: Optional[str] = Query("all"),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Filtered history grouped by calendar day.
    Groups keep first-seen order, so days come out newest first because
    crud_history.get_snapshot loads the log ordered by timestamp descending.
    """
    entries = load_snapshot(crud_history.get_snapshot, db, "history")
    return group_history_by_date(filter_history(entries, action=action, search=search))

@router.get("/actions", response_model=Dict[str, ActionStyle])
async def history_actions():
    """Color and label for each known action"""
    return ACTION_STYLES
