"""
Table filtering for the inventory and activity-history views.
Filters never reorder: output keeps the input's relative order.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

from medstock.exceptions import SnapshotValidationError
from medstock.schemas.history import ActionStyle, HistoryAction, HistoryDayGroup, HistoryEntryRecord
from medstock.schemas.inventory import StatusTier
from medstock.utils.dates import DateLike, coerce_datetime
from medstock.utils.status import classify_tier

ALL = "all"

def parse_tier_filter(tier: Union[StatusTier, str, None]) -> Optional[StatusTier]:
    """None / "" / "all" mean no constraint; anything else must name a tier."""
    if tier is None or isinstance(tier, StatusTier):
        return tier
    value = tier.strip().lower()
    if value in ("", ALL):
        return None
    try:
        return StatusTier(value)
    except ValueError:
        allowed = ", ".join([ALL] + [t.value for t in StatusTier])
        raise SnapshotValidationError(f"unknown status {tier!r} (expected one of: {allowed})", "status")

def filter_medicines(
    medicines: Sequence[Any],
    now: DateLike,
    search: Optional[str] = None,
    tier: Union[StatusTier, str, None] = None,
) -> List[Any]:
    """
    Filter medicines by case-insensitive name substring AND status tier.

    Args:
        medicines: snapshot list
        now: reference instant for status classification
        search: name substring; empty/None matches everything
        tier: StatusTier, its value, "all" or None

    Returns:
        New list with the same elements in the same relative order
    """
    wanted_tier = parse_tier_filter(tier)
    needle = (search or "").strip().lower()
    
    result = []
    for medicine in medicines:
        if needle and needle not in medicine.name.lower():
            continue
        if wanted_tier is not None and classify_tier(medicine.expiry_date, medicine.quantity, now) != wanted_tier:
            continue
        result.append(medicine)
    return result

# ====================
# ACTIVITY HISTORY
# ====================

ACTION_STYLES: Dict[str, ActionStyle] = {
    HistoryAction.CREATED.value: ActionStyle(color="#28a745", label="Medicine Added"),
    HistoryAction.SOLD.value: ActionStyle(color="#007BFF", label="Sale Recorded"),
    HistoryAction.UPDATED.value: ActionStyle(color="#ffc107", label="Medicine Updated"),
    HistoryAction.DELETED.value: ActionStyle(color="#dc3545", label="Medicine Deleted"),
}
UNKNOWN_ACTION_COLOR = "#6c757d"

def history_action_style(action: str) -> ActionStyle:
    style = ACTION_STYLES.get(action)
    if style is None:
        return ActionStyle(color=UNKNOWN_ACTION_COLOR, label=action)
    return style

def parse_action_filter(action: Optional[str]) -> Optional[str]:
    if action is None:
        return None
    value = action.strip().lower()
    if value in ("", ALL):
        return None
    if value not in ACTION_STYLES:
        allowed = ", ".join([ALL] + list(ACTION_STYLES))
        raise SnapshotValidationError(f"unknown action {action!r} (expected one of: {allowed})", "action")
    return value

def filter_history(
    entries: Sequence[Any],
    action: Optional[str] = ALL,
    search: Optional[str] = None,
) -> List[Any]:
    """Keep entries matching the action AND whose medicine name or details contain search."""
    wanted_action = parse_action_filter(action)
    needle = (search or "").strip().lower()
    
    result = []
    for entry in entries:
        if wanted_action is not None and entry.action != wanted_action:
            continue
        if needle and needle not in entry.medicine_name.lower() and needle not in (entry.details or "").lower():
            continue
        result.append(entry)
    return result

def group_history_by_date(entries: Sequence[Any]) -> List[HistoryDayGroup]:
    """Group entries by calendar day of their timestamp, in first-seen order."""
    groups: Dict[date, List[HistoryEntryRecord]] = {}
    for entry in entries:
        day = coerce_datetime(entry.timestamp, "timestamp").date()
        groups.setdefault(day, []).append(HistoryEntryRecord.model_validate(entry))
    return [HistoryDayGroup(day=day, entries=items) for day, items in groups.items()]
