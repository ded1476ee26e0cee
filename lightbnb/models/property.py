"""
Property model for rental listings.
Handles listing details, address fields and nightly pricing in cents.
"""

from sqlalchemy import String, Text, Integer, Boolean, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from lightbnb.database import Base
from lightbnb.utils.exceptions import ValidationError


class Property(Base):
    """
    Property model for rental listings owned by a single user.
    ``cost_per_night`` is stored in the smallest currency unit.
    """
    
    __tablename__ = "properties"
    
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this property"
    )
    
    # Listing information
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    thumbnail_photo_url: Mapped[str] = mapped_column(String(255), nullable=False)
    cover_photo_url: Mapped[str] = mapped_column(String(255), nullable=False)
    
    cost_per_night: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        index=True,
        comment="Nightly price in cents"
    )
    
    # Specifications
    parking_spaces: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    number_of_bathrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    number_of_bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    
    # Address
    country: Mapped[str] = mapped_column(String(255), nullable=False)
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    province: Mapped[str] = mapped_column(String(255), nullable=False)
    post_code: Mapped[str] = mapped_column(String(255), nullable=False)
    
    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the listing is active"
    )
    
    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, cost_per_night={self.cost_per_night})>"
    
    def validate_cost(self) -> None:
        """
        Validate nightly cost.
        
        Raises:
            ValidationError: If cost is negative
        """
        if self.cost_per_night is not None and self.cost_per_night < 0:
            raise ValidationError("Cost per night cannot be negative")
    
    def validate_rooms(self) -> None:
        """
        Validate parking, bathroom and bedroom counts.
        
        Raises:
            ValidationError: If any count is negative
        """
        for field in ("parking_spaces", "number_of_bathrooms", "number_of_bedrooms"):
            value = getattr(self, field)
            if value is not None and value < 0:
                raise ValidationError(f"{field.replace('_', ' ').capitalize()} cannot be negative")
    
    def validate_all(self) -> None:
        """
        Run all validation checks on the property.
        
        Raises:
            ValidationError: If any validation fails
        """
        self.validate_cost()
        self.validate_rooms()


# Search filters hit city and owner, results are sorted by price
city_cost_index = Index(
    'idx_properties_city_cost',
    Property.city,
    Property.cost_per_night
)

owner_cost_index = Index(
    'idx_properties_owner_cost',
    Property.owner_id,
    Property.cost_per_night
)
