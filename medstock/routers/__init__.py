"""
Routers for the MedStock API
"""

from .inventory import router as inventory_router
from .dashboard import router as dashboard_router
from .history import router as history_router

__all__ = ["inventory_router", "dashboard_router", "history_router"]
