"""
Pydantic schemas for reservations and reviews.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date
from lightbnb.schemas.property import PropertyResponse


class ReservationCreate(BaseModel):
    """Schema for booking a stay."""
    
    start_date: date
    end_date: date
    property_id: int
    guest_id: int
    
    @model_validator(mode='after')
    def validate_date_range(self):
        """Ensure the stay covers at least one night."""
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class ReservationResponse(BaseModel):
    """Schema for a stored reservation."""
    
    id: int
    start_date: date
    end_date: date
    property_id: int
    guest_id: int
    
    model_config = {"from_attributes": True}


class ReservationWithProperty(ReservationResponse):
    """A past reservation joined with its property and the property's rating."""
    
    property: PropertyResponse
    average_rating: Optional[float] = None


class PropertyReviewCreate(BaseModel):
    """Schema for reviewing a completed stay."""
    
    guest_id: int
    property_id: int
    reservation_id: int
    rating: int = Field(..., ge=0, le=5)
    message: Optional[str] = Field(None, max_length=5000)


class PropertyReviewResponse(PropertyReviewCreate):
    """Schema for a stored review."""
    
    id: int
    
    model_config = {"from_attributes": True}
