"""
Snapshot loaders for medicines, sales and history.
Each call returns a fresh list the engine can work on; rows are never modified.
Snapshots always hold the whole collection: counters and totals are computed over every row.
"""
from sqlalchemy.orm import Session
from typing import List

from medstock.models import Medicine, Sale, HistoryEntry
from medstock.crud.base import CRUDBase

class CRUDMedicine(CRUDBase[Medicine]):
    def __init__(self):
        super().__init__(Medicine)
    
    def get_snapshot(self, db: Session) -> List[Medicine]:
        """All medicines in entry order (the order the inventory table shows them)"""
        return self.get_multi(
            db,
            limit=None,
            order_by=(Medicine.date_of_entry.asc(), Medicine.created_at.asc(), Medicine.id.asc()),
        )

class CRUDSale(CRUDBase[Sale]):
    def __init__(self):
        super().__init__(Sale)
    
    def get_snapshot(self, db: Session) -> List[Sale]:
        """All sales newest first, as the ledger lists them"""
        return self.get_multi(db, limit=None, order_by=(Sale.sale_date.desc(),))

class CRUDHistory(CRUDBase[HistoryEntry]):
    def __init__(self):
        super().__init__(HistoryEntry)
    
    def get_snapshot(self, db: Session) -> List[HistoryEntry]:
        """Whole activity log newest first"""
        return self.get_multi(db, limit=None, order_by=(HistoryEntry.timestamp.desc(),))

# Create instances
crud_medicine = CRUDMedicine()
crud_sale = CRUDSale()
crud_history = CRUDHistory()
