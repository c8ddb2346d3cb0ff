"""
Request-scoped dependencies: reference clock and snapshot loading.
"""
from datetime import datetime
from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

def get_now() -> datetime:
    """
    Reference instant for every time-relative computation in a request.
    Local wall-clock time; tests override this dependency.
    """
    return datetime.now()

def load_snapshot(loader: Callable[..., List], db: Session, label: str) -> List:
    """Run a crud snapshot loader, mapping storage failures to 503."""
    try:
        return loader(db)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load {label} snapshot: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Unable to load {label} from the store"
        )
