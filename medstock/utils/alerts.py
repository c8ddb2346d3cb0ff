"""
Alert generation for medicines that need attention.
One notification per non-healthy medicine, in input order; callers that
want priority ordering sort downstream.
"""
import logging
from datetime import datetime
from typing import Any, Iterable, List

from medstock.schemas.dashboard import Notification, NotificationLevel
from medstock.schemas.inventory import StatusTier
from medstock.utils.dates import coerce_date
from medstock.utils.status import classify_status

logger = logging.getLogger(__name__)

SEVERITY = {
    StatusTier.EXPIRED: NotificationLevel.DANGER,
    StatusTier.OUT_OF_STOCK: NotificationLevel.DANGER,
    StatusTier.LOW_STOCK_AND_EXPIRING: NotificationLevel.WARNING,
    StatusTier.LOW_STOCK: NotificationLevel.INFO,
    StatusTier.EXPIRING_SOON: NotificationLevel.INFO,
}

def _describe(tier: StatusTier, medicine: Any) -> tuple[str, str]:
    """Title and message for a tier; message always carries the numeric fact."""
    name = medicine.name
    expiry = f"{coerce_date(medicine.expiry_date, 'expiry_date'):%Y-%m-%d}"
    quantity = medicine.quantity
    
    if tier == StatusTier.EXPIRED:
        return "Medicine Expired", f"{name} expired on {expiry} ({quantity} units still in stock)"
    if tier == StatusTier.OUT_OF_STOCK:
        return "Out of Stock", f"{name} is out of stock (0 units left)"
    if tier == StatusTier.LOW_STOCK_AND_EXPIRING:
        return (
            "Low Stock & Expiring Soon",
            f"{name} has only {quantity} units left and expires on {expiry}",
        )
    if tier == StatusTier.LOW_STOCK:
        return "Low Stock", f"{name} is running low: {quantity} units left"
    return "Expiring Soon", f"{name} expires on {expiry}"

def build_notification(medicine: Any, tier: StatusTier, now: datetime) -> Notification:
    title, message = _describe(tier, medicine)
    return Notification(
        id=f"{medicine.id}-{tier.value}",
        severity=SEVERITY[tier],
        tier=tier,
        title=title,
        message=message,
        medicine_id=str(medicine.id),
        medicine_name=medicine.name,
        created_at=now,
    )

def generate_notifications(medicines: Iterable[Any], now: datetime) -> List[Notification]:
    """
    Generate alerts for every medicine whose status is not Healthy.

    Args:
        medicines: snapshot of medicines (records or ORM rows)
        now: reference instant, also used as the generation timestamp

    Returns:
        Notifications in the same order as the input medicines
    """
    notifications = []
    
    for medicine in medicines:
        status = classify_status(medicine.expiry_date, medicine.quantity, now)
        if status.tier == StatusTier.HEALTHY:
            continue
        notifications.append(build_notification(medicine, status.tier, now))
    
    logger.debug(f"Generated {len(notifications)} notifications")
    return notifications

def count_by_severity(notifications: Iterable[Notification]) -> dict:
    """Badge counters for the alert panel."""
    counts = {level.value: 0 for level in NotificationLevel}
    for notification in notifications:
        counts[notification.severity.value] += 1
    return counts
