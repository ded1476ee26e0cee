"""
Service layer exposing the data-access operations.
"""

from lightbnb.services.booking import BookingService

__all__ = [
    "BookingService"
]
