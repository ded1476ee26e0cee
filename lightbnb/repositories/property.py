"""
Property repository for listing search, creation and reviews.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from lightbnb.queries.property_search import PropertySearchQuery
from lightbnb.schemas.property import PropertySearchFilters
from typing import Optional, List, Dict, Any, Tuple
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Search results carry the average review rating of each property.
    """
    
    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)
    
    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Create a new property with validation.
        
        Args:
            property_data: Dictionary containing property information
            
        Returns:
            Created property instance
            
        Raises:
            ValidationError: If validation fails
            QueryFailedError: If database operation fails
        """
        Property(**property_data).validate_all()
        
        created_property = await self.create(property_data)
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property
    
    async def search_properties(
        self,
        filters: Optional[PropertySearchFilters] = None,
        limit: int = 10
    ) -> List[Tuple[Property, Optional[float]]]:
        """
        Search properties, cheapest first.
        
        Args:
            filters: Optional search filters; absent fields place no constraint
            limit: Maximum number of properties to return
            
        Returns:
            List of (property, average_rating) tuples. The rating is None
            for properties without reviews.
        """
        query = PropertySearchQuery.from_filters(filters, limit=limit)
        
        if logger.isEnabledFor(logging.DEBUG):
            sql, params = query.render(self.db.bind.dialect if self.db.bind is not None else None)
            logger.debug(f"Property search SQL: {sql} params: {params}")
        
        try:
            result = await self.db.execute(query.statement())
            rows = result.all()
        except SQLAlchemyError as e:
            await self._fail("search properties", e)
        
        logger.debug(f"Property search returned {len(rows)} results")
        return [
            (property_obj, float(rating) if rating is not None else None)
            for property_obj, rating in rows
        ]
    
    async def add_review(self, review_data: Dict[str, Any]) -> PropertyReview:
        """
        Record a review for a property.
        
        Raises:
            ValidationError: If the rating is out of range
            QueryFailedError: If database operation fails
        """
        PropertyReview(**review_data).validate_rating()
        
        try:
            review = PropertyReview(**review_data)
            self.db.add(review)
            await self.db.commit()
            await self.db.refresh(review)
        except SQLAlchemyError as e:
            await self._fail(f"add review for property {review_data.get('property_id')}", e)
        
        logger.info(f"Added review {review.id} to property {review.property_id} (rating {review.rating})")
        return review
