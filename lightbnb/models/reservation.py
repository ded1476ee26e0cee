"""
Reservation model linking a guest to a property for a date range.
"""

from sqlalchemy import Date, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from lightbnb.database import Base
from lightbnb.utils.exceptions import ValidationError
from datetime import date


class Reservation(Base):
    """A guest's stay at a property."""
    
    __tablename__ = "reservations"
    
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    
    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    
    guest_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    
    def __repr__(self) -> str:
        return f"<Reservation(id={self.id}, property_id={self.property_id}, {self.start_date}..{self.end_date})>"
    
    def validate_dates(self) -> None:
        """
        Validate the stay covers at least one night.
        
        Raises:
            ValidationError: If end date is not after start date
        """
        if self.end_date <= self.start_date:
            raise ValidationError("Reservation end date must be after start date")


guest_start_index = Index(
    'idx_reservations_guest_start',
    Reservation.guest_id,
    Reservation.start_date
)
