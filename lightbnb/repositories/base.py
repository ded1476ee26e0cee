"""
Base repository class with common operations using async SQLAlchemy.
Database errors are rolled back, logged and re-raised as QueryFailedError.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func
from lightbnb.database import Base
from lightbnb.utils.exceptions import QueryFailedError
from typing import TypeVar, Generic, Optional, Dict, Any, Type, NoReturn
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common operations.
    Uses async SQLAlchemy for all database operations.
    """
    
    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.
        
        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db
    
    async def _fail(self, operation: str, error: SQLAlchemyError) -> NoReturn:
        """Roll back, log and raise a failed-query error chained to the original."""
        await self.db.rollback()
        logger.error(f"Failed to {operation}: {error}")
        raise QueryFailedError(operation, error) from error
    
    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record in the database.
        
        Args:
            obj_in: Dictionary of field values for the new record
            
        Returns:
            Created model instance
            
        Raises:
            QueryFailedError: If database operation fails
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except SQLAlchemyError as e:
            await self._fail(f"create {self.model.__name__}", e)
    
    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        Get a record by its ID.
        
        Args:
            id: Primary key of the record to retrieve
            
        Returns:
            Model instance if found, None otherwise
        """
        try:
            result = await self.db.execute(select(self.model).where(self.model.id == id))
            obj = result.scalar_one_or_none()
            
            if obj:
                logger.debug(f"Retrieved {self.model.__name__} with id: {id}")
            else:
                logger.debug(f"{self.model.__name__} with id {id} not found")
            
            return obj
        except SQLAlchemyError as e:
            await self._fail(f"get {self.model.__name__} by id {id}", e)
    
    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """
        Count records with optional equality filters.
        
        Args:
            filters: Dictionary of field filters
            
        Returns:
            Number of matching records
        """
        try:
            query = select(func.count(self.model.id))
            
            if filters:
                for field, value in filters.items():
                    if hasattr(self.model, field):
                        query = query.where(getattr(self.model, field) == value)
            
            result = await self.db.execute(query)
            return result.scalar()
        except SQLAlchemyError as e:
            await self._fail(f"count {self.model.__name__} records", e)
    
    async def exists(self, id: int) -> bool:
        """Check if a record exists by its ID."""
        return await self.count({"id": id}) > 0
