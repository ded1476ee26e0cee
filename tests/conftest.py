"""
Test configuration and fixtures for the LightBnB data-access layer.
Each test gets a fresh in-memory SQLite database with all tables created.
"""

import pytest
import uuid
from datetime import date, timedelta
from typing import AsyncGenerator, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from lightbnb.config import Settings
from lightbnb.database import Database
from lightbnb.models.user import User
from lightbnb.models.property import Property
from lightbnb.models.reservation import Reservation
from lightbnb.models.review import PropertyReview
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.services.booking import BookingService


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Users are stored with whatever password hash the caller supplies
HASHED_PASSWORD = User.hash_password("password123")


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at an in-memory database."""
    return Settings(database_url=TEST_DATABASE_URL, environment="testing")


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Create a database with the schema in place."""
    db = Database(TEST_DATABASE_URL, poolclass=StaticPool)
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
async def empty_database() -> AsyncGenerator[Database, None]:
    """Create a database without any tables, so every query fails."""
    db = Database(TEST_DATABASE_URL, poolclass=StaticPool)
    yield db
    await db.close()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with database.session() as session:
        yield session


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def reservation_repository(db_session: AsyncSession) -> ReservationRepository:
    return ReservationRepository(db_session)


# Service fixtures
@pytest.fixture
def booking_service(db_session: AsyncSession, test_settings: Settings) -> BookingService:
    return BookingService(db_session, test_settings)


# Test data factories
class UserFactory:
    """Factory for creating test users."""
    
    @staticmethod
    def create_user_data(
        name: str = "Test User",
        email: Optional[str] = None,
        password: str = HASHED_PASSWORD
    ) -> dict:
        """Create user data dictionary."""
        return {
            "name": name,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password
        }
    
    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(UserFactory.create_user_data(**kwargs))


class PropertyFactory:
    """Factory for creating test properties."""
    
    @staticmethod
    def create_property_data(
        owner_id: int,
        title: str = "Test Property",
        cost_per_night: int = 10000,
        city: str = "Vancouver",
        **overrides
    ) -> dict:
        """Create property data dictionary."""
        data = {
            "owner_id": owner_id,
            "title": title,
            "description": "description",
            "thumbnail_photo_url": "https://images.example.com/thumb.jpg",
            "cover_photo_url": "https://images.example.com/cover.jpg",
            "cost_per_night": cost_per_night,
            "parking_spaces": 1,
            "number_of_bathrooms": 1,
            "number_of_bedrooms": 2,
            "country": "Canada",
            "street": "123 Main Street",
            "city": city,
            "province": "British Columbia",
            "post_code": "V5K 0A1",
        }
        data.update(overrides)
        return data
    
    @staticmethod
    async def create_property(property_repo: PropertyRepository, owner_id: int, **kwargs) -> Property:
        """Create a test property in the database."""
        return await property_repo.create_property(
            PropertyFactory.create_property_data(owner_id, **kwargs)
        )


class ReservationFactory:
    """Factory for creating test reservations."""
    
    @staticmethod
    async def create_reservation(
        reservation_repo: ReservationRepository,
        property_id: int,
        guest_id: int,
        days_ago: int = 30,
        nights: int = 3
    ) -> Reservation:
        """Create a reservation starting ``days_ago`` days before today."""
        start = date.today() - timedelta(days=days_ago)
        return await reservation_repo.create_reservation({
            "start_date": start,
            "end_date": start + timedelta(days=nights),
            "property_id": property_id,
            "guest_id": guest_id
        })


class ReviewFactory:
    """Factory for creating reviews, booking the stay they belong to."""
    
    @staticmethod
    async def create_review(
        property_repo: PropertyRepository,
        reservation_repo: ReservationRepository,
        property_id: int,
        guest_id: int,
        rating: int,
        days_ago: int = 30
    ) -> PropertyReview:
        """Create a past reservation and a review for it."""
        reservation = await ReservationFactory.create_reservation(
            reservation_repo, property_id, guest_id, days_ago=days_ago
        )
        return await property_repo.add_review({
            "guest_id": guest_id,
            "property_id": property_id,
            "reservation_id": reservation.id,
            "rating": rating,
            "message": "messages"
        })


# Common test fixtures
@pytest.fixture
async def test_owner(user_repository: UserRepository) -> User:
    """Create a test property owner."""
    return await UserFactory.create_user(
        user_repository,
        name="Eva Stanley",
        email="sebastianguerra@ymail.com"
    )


@pytest.fixture
async def test_guest(user_repository: UserRepository) -> User:
    """Create a test guest."""
    return await UserFactory.create_user(
        user_repository,
        name="Louisa Meyer",
        email="jacksonrose@hotmail.com"
    )
