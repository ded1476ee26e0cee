"""
Reservation repository for guests' booking history.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.reservation import Reservation
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from lightbnb.queries.property_search import average_rating
from typing import Optional, List, Dict, Any, Tuple
import logging

logger = logging.getLogger(__name__)


class ReservationRepository(BaseRepository[Reservation]):
    """Repository for reservations and their properties."""
    
    def __init__(self, db: AsyncSession):
        super().__init__(Reservation, db)
    
    async def create_reservation(self, reservation_data: Dict[str, Any]) -> Reservation:
        """
        Create a reservation after validating its date range.
        
        Raises:
            ValidationError: If the end date is not after the start date
            QueryFailedError: If database operation fails
        """
        Reservation(**reservation_data).validate_dates()
        
        reservation = await self.create(reservation_data)
        logger.info(
            f"Created reservation {reservation.id} for guest {reservation.guest_id} "
            f"at property {reservation.property_id}"
        )
        return reservation
    
    async def get_past_reservations(
        self,
        guest_id: int,
        limit: int = 10
    ) -> List[Tuple[Reservation, Property, Optional[float]]]:
        """
        Get a guest's completed reservations with their properties.
        
        Only reservations that ended before today and have at least one
        review are returned, each with the reviewed property's average
        rating. Results are ordered by start date.
        
        Args:
            guest_id: ID of the guest
            limit: Maximum number of reservations to return
            
        Returns:
            List of (reservation, property, average_rating) tuples
        """
        query = (
            select(Reservation, Property, average_rating().label("average_rating"))
            .join(Property, Reservation.property_id == Property.id)
            .join(PropertyReview, PropertyReview.reservation_id == Reservation.id)
            .where(
                Reservation.guest_id == guest_id,
                Reservation.end_date < func.current_date()
            )
            .group_by(Property.id, Reservation.id)
            .order_by(Reservation.start_date)
            .limit(limit)
        )
        
        try:
            result = await self.db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            await self._fail(f"get reservations for guest {guest_id}", e)
        
        logger.debug(f"Retrieved {len(rows)} past reservations for guest {guest_id}")
        return [
            (reservation, property_obj, float(rating) if rating is not None else None)
            for reservation, property_obj, rating in rows
        ]
