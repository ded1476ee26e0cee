"""
Pydantic schemas for request/response validation.
"""

# User schemas
from .user import (
    UserBase,
    UserCreate,
    UserResponse,
    UserRecord
)

# Property schemas
from .property import (
    PropertyBase,
    PropertyCreate,
    PropertyResponse,
    PropertyWithRating,
    PropertySearchFilters
)

# Reservation schemas
from .reservation import (
    ReservationCreate,
    ReservationResponse,
    ReservationWithProperty,
    PropertyReviewCreate,
    PropertyReviewResponse
)

__all__ = [
    "UserBase",
    "UserCreate",
    "UserResponse",
    "UserRecord",
    "PropertyBase",
    "PropertyCreate",
    "PropertyResponse",
    "PropertyWithRating",
    "PropertySearchFilters",
    "ReservationCreate",
    "ReservationResponse",
    "ReservationWithProperty",
    "PropertyReviewCreate",
    "PropertyReviewResponse",
]
