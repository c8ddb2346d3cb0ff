"""
Medicine status classification.

A medicine's status is derived from its expiry date and current quantity,
relative to an explicit "now". Tiers are checked strictly in this order:

1. Expired                  - expiry month already passed
2. Out of Stock             - quantity == 0
3. Low Stock & Expiring     - quantity < 15 and expiring within 6 months
4. Low Stock                - quantity < 15
5. Expiring Soon            - expiring within 6 months
6. Healthy                  - none of the above
"""
from typing import Any

from medstock.exceptions import SnapshotValidationError
from medstock.schemas.inventory import StatusTier, StockStatus
from medstock.utils.dates import DateLike, months_until

LOW_STOCK_THRESHOLD = 15
EXPIRING_WINDOW_MONTHS = 6

RED = "#dc3545"
YELLOW = "#ffc107"
ORANGE = "#fd7e14"
GREEN = "#28a745"

STATUSES = {
    StatusTier.EXPIRED: StockStatus(tier=StatusTier.EXPIRED, color=RED, label="Expired"),
    StatusTier.OUT_OF_STOCK: StockStatus(tier=StatusTier.OUT_OF_STOCK, color=RED, label="Out of Stock"),
    StatusTier.LOW_STOCK_AND_EXPIRING: StockStatus(
        tier=StatusTier.LOW_STOCK_AND_EXPIRING, color=YELLOW, label="Low Stock & Expiring Soon"
    ),
    StatusTier.LOW_STOCK: StockStatus(tier=StatusTier.LOW_STOCK, color=ORANGE, label="Low Stock"),
    StatusTier.EXPIRING_SOON: StockStatus(tier=StatusTier.EXPIRING_SOON, color=ORANGE, label="Expiring Soon"),
    StatusTier.HEALTHY: StockStatus(tier=StatusTier.HEALTHY, color=GREEN, label="Healthy Stock"),
}

def _check_quantity(quantity: Any) -> int:
    # bool is an int subclass but never a stock count
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise SnapshotValidationError(f"expected an integer, got {quantity!r}", "quantity")
    if quantity < 0:
        raise SnapshotValidationError(f"must be >= 0, got {quantity}", "quantity")
    return quantity

def is_low_stock(quantity: int) -> bool:
    return quantity < LOW_STOCK_THRESHOLD

def is_expiring_soon(expiry_date: DateLike, now: DateLike) -> bool:
    """Expiring within the window and not yet expired (bounded [0, 6] months)."""
    return 0 <= months_until(expiry_date, now) <= EXPIRING_WINDOW_MONTHS

def classify_tier(expiry_date: DateLike, quantity: int, now: DateLike) -> StatusTier:
    quantity = _check_quantity(quantity)
    months = months_until(expiry_date, now)
    
    if months < 0:
        return StatusTier.EXPIRED
    if quantity == 0:
        return StatusTier.OUT_OF_STOCK
    
    expiring = months <= EXPIRING_WINDOW_MONTHS
    if is_low_stock(quantity) and expiring:
        return StatusTier.LOW_STOCK_AND_EXPIRING
    if is_low_stock(quantity):
        return StatusTier.LOW_STOCK
    if expiring:
        return StatusTier.EXPIRING_SOON
    return StatusTier.HEALTHY

def classify_status(expiry_date: DateLike, quantity: int, now: DateLike) -> StockStatus:
    """
    Classify one medicine into exactly one status tier.

    Args:
        expiry_date: date, datetime or ISO 8601 string
        quantity: current stock count (int >= 0)
        now: reference instant

    Returns:
        StockStatus with the tier's fixed color and label

    Raises:
        SnapshotValidationError: malformed date or quantity
    """
    return STATUSES[classify_tier(expiry_date, quantity, now)]

def classify_medicine(medicine: Any, now: DateLike) -> StockStatus:
    """Classify any object exposing expiry_date and quantity (ORM row or record)."""
    return classify_status(medicine.expiry_date, medicine.quantity, now)
