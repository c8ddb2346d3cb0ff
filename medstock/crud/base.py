"""
Base read operations with SQLAlchemy 2.x patterns.
The store is written by the external backend; this layer only selects.
"""
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging
from typing import TypeVar, Generic, Type, Optional, List
from medstock.database import Base

logger = logging.getLogger(__name__)
ModelType = TypeVar("ModelType", bound=Base)

class CRUDBase(Generic[ModelType]):
    def __init__(self, model: Type[ModelType]):
        self.model = model
    
    def get(self, db: Session, id: str) -> Optional[ModelType]:
        """Get record by ID using SQLAlchemy 2.x select()"""
        try:
            stmt = select(self.model).where(self.model.id == id)
            result = db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error getting {self.model.__name__} {id}: {e}")
            raise
    
    def get_multi(self, db: Session, *, skip: int = 0, limit: Optional[int] = 100, order_by=()) -> List[ModelType]:
        """Get multiple records using SQLAlchemy 2.x select(); limit=None loads every row"""
        try:
            stmt = select(self.model).order_by(*order_by).offset(skip).limit(limit)
            result = db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error getting multiple {self.model.__name__}: {e}")
            raise
