"""
Booking service: the operations the web layer calls.
Wraps the repositories and returns pydantic models instead of ORM rows.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.config import Settings, get_settings
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository
from lightbnb.schemas.user import UserCreate, UserResponse, UserRecord
from lightbnb.schemas.property import (
    PropertyCreate,
    PropertyResponse,
    PropertySearchFilters,
    PropertyWithRating
)
from lightbnb.schemas.reservation import (
    ReservationCreate,
    ReservationResponse,
    ReservationWithProperty,
    PropertyReviewCreate,
    PropertyReviewResponse
)
import logging

logger = logging.getLogger(__name__)


class BookingService:
    """
    Data-access operations for users, reservations and properties.

    Every method issues its queries on the session given at construction.
    Failures surface as ``LightBnBError`` subclasses; nothing is swallowed.
    """

    def __init__(self, db_session: AsyncSession, settings: Optional[Settings] = None):
        self.db = db_session
        self.settings = settings or get_settings()
        self.user_repo = UserRepository(db_session)
        self.reservation_repo = ReservationRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    def _clamp_limit(self, limit: Optional[int]) -> int:
        """Keep list limits within 0..max_result_limit."""
        if limit is None:
            return self.settings.default_result_limit
        return max(0, min(int(limit), self.settings.max_result_limit))

    # Users

    async def get_user_with_email(self, email: str) -> Optional[UserRecord]:
        """
        Get a single user given their email.

        Args:
            email: The email of the user

        Returns:
            The full user record (including password hash) or None
        """
        user = await self.user_repo.get_by_email(email)
        return UserRecord.model_validate(user) if user else None

    async def get_user_with_id(self, user_id: int) -> Optional[UserResponse]:
        """
        Get a single user given their id.

        Returns:
            The user's id, name and email, or None
        """
        user = await self.user_repo.get_by_id(user_id)
        return UserResponse.model_validate(user) if user else None

    async def add_user(self, user: UserCreate) -> UserRecord:
        """
        Add a new user to the database.

        Args:
            user: Name, email and password hash

        Returns:
            The created user record
        """
        created = await self.user_repo.create_user(user.model_dump())
        return UserRecord.model_validate(created)

    async def login(self, email: str, password: str) -> Optional[UserResponse]:
        """Check credentials, returning the user on success."""
        user = await self.user_repo.authenticate_user(email, password)
        return UserResponse.model_validate(user) if user else None

    # Reservations

    async def get_all_reservations(self, guest_id: int, limit: Optional[int] = None) -> List[ReservationWithProperty]:
        """
        Get a guest's past reservations.

        Args:
            guest_id: The id of the guest
            limit: Maximum number of reservations (default from settings)

        Returns:
            Reservations ordered by start date, each with its property and
            the property's average rating
        """
        rows = await self.reservation_repo.get_past_reservations(guest_id, self._clamp_limit(limit))
        return [
            ReservationWithProperty(
                **ReservationResponse.model_validate(reservation).model_dump(),
                property=PropertyResponse.model_validate(property_obj),
                average_rating=rating
            )
            for reservation, property_obj, rating in rows
        ]

    async def add_reservation(self, reservation: ReservationCreate) -> ReservationResponse:
        """Book a stay."""
        created = await self.reservation_repo.create_reservation(reservation.model_dump())
        return ReservationResponse.model_validate(created)

    # Properties

    async def get_all_properties(
        self,
        filters: Optional[PropertySearchFilters] = None,
        limit: Optional[int] = None
    ) -> List[PropertyWithRating]:
        """
        Search properties.

        Args:
            filters: Optional city, owner, price range and rating filters
            limit: Maximum number of results (default from settings)

        Returns:
            Matching properties, cheapest first, with average ratings
        """
        rows = await self.property_repo.search_properties(filters, self._clamp_limit(limit))
        return [
            PropertyWithRating(
                **PropertyResponse.model_validate(property_obj).model_dump(),
                average_rating=rating
            )
            for property_obj, rating in rows
        ]

    async def add_property(self, property_data: PropertyCreate) -> PropertyResponse:
        """
        Add a property to the database.

        Returns:
            The created property
        """
        created = await self.property_repo.create_property(property_data.model_dump())
        return PropertyResponse.model_validate(created)

    async def add_review(self, review: PropertyReviewCreate) -> PropertyReviewResponse:
        """Record a review for a completed stay."""
        created = await self.property_repo.add_review(review.model_dump())
        return PropertyReviewResponse.model_validate(created)
