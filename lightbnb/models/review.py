"""
PropertyReview model. Ratings are averaged per property at query time.
"""

from sqlalchemy import SmallInteger, Integer, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from lightbnb.database import Base
from lightbnb.utils.exceptions import ValidationError
from typing import Optional

MIN_RATING = 0
MAX_RATING = 5


class PropertyReview(Base):
    """A guest's rating of a property, tied to one reservation."""
    
    __tablename__ = "property_reviews"
    
    guest_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    
    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    
    reservation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("reservations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    
    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    def __repr__(self) -> str:
        return f"<PropertyReview(id={self.id}, property_id={self.property_id}, rating={self.rating})>"
    
    def validate_rating(self) -> None:
        """
        Validate rating bounds.
        
        Raises:
            ValidationError: If rating is outside 0..5
        """
        if not (MIN_RATING <= self.rating <= MAX_RATING):
            raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
