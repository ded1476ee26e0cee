"""
Pydantic schemas for property requests, search filters and responses.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal


class PropertyBase(BaseModel):
    """Base property schema with common fields."""
    
    owner_id: int = Field(..., description="ID of the owning user")
    
    title: str = Field(..., min_length=1, max_length=255, examples=["Speed lamp"])
    description: str = Field("", max_length=5000)
    thumbnail_photo_url: str = Field(..., max_length=255)
    cover_photo_url: str = Field(..., max_length=255)
    
    cost_per_night: int = Field(
        ...,
        ge=0,
        description="Nightly price in cents",
        examples=[93061]
    )
    
    parking_spaces: int = Field(0, ge=0)
    number_of_bathrooms: int = Field(0, ge=0)
    number_of_bedrooms: int = Field(0, ge=0)
    
    country: str = Field(..., max_length=255, examples=["Canada"])
    street: str = Field(..., max_length=255, examples=["536 Namsub Highway"])
    city: str = Field(..., max_length=255, examples=["Sotboske"])
    province: str = Field(..., max_length=255, examples=["Quebec"])
    post_code: str = Field(..., max_length=255, examples=["28142"])
    
    @field_validator('title', 'city')
    @classmethod
    def validate_required_text(cls, v):
        """Reject whitespace-only values."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class PropertyCreate(PropertyBase):
    """Schema for creating a new property listing."""
    
    active: bool = True


class PropertyResponse(PropertyBase):
    """Schema for a stored property."""
    
    id: int
    active: bool = True
    
    model_config = {"from_attributes": True}


class PropertyWithRating(PropertyResponse):
    """A property together with the mean of its review ratings."""
    
    average_rating: Optional[float] = Field(
        None,
        description="Average review rating, None when the property has no reviews"
    )


class PropertySearchFilters(BaseModel):
    """
    Optional search filters for property listings.
    
    Absent fields (None) place no constraint. Prices are given in whole
    currency units and compared against ``cost_per_night`` in cents.
    A value of 0 is a real constraint, not an absent one.
    """
    
    city: Optional[str] = Field(
        None,
        max_length=255,
        description="Substring match on city",
        examples=["Vancouver"]
    )
    
    owner_id: Optional[int] = Field(
        None,
        description="Only properties owned by this user"
    )
    
    minimum_price_per_night: Optional[Decimal] = Field(
        None,
        ge=0,
        description="Minimum nightly price in whole currency units",
        examples=[12]
    )
    
    maximum_price_per_night: Optional[Decimal] = Field(
        None,
        ge=0,
        description="Maximum nightly price in whole currency units",
        examples=[250]
    )
    
    minimum_rating: Optional[float] = Field(
        None,
        ge=0,
        le=5,
        description="Minimum average review rating",
        examples=[4]
    )
    
    @field_validator('*', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        """Form submissions send untouched fields as empty strings."""
        if isinstance(v, str) and not v.strip():
            return None
        return v
    
    model_config = {"extra": "ignore"}
