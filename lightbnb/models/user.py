"""
User model with password hashing and email normalization.
Users are both guests (making reservations) and owners (listing properties).
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from lightbnb.database import Base
from lightbnb.utils.exceptions import ValidationError
from passlib.context import CryptContext
from email_validator import validate_email, EmailNotValidError

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class User(Base):
    """
    User model for guests and property owners.
    Stores a bcrypt hash of the password, never the plain text.
    """
    
    __tablename__ = "users"
    
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="User's display name"
    )
    
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique and valid"
    )
    
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )
    
    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email})>"
    
    @classmethod
    def validate_email_format(cls, email: str) -> str:
        """
        Validate email format using email-validator.
        
        Args:
            email: Email address to validate
            
        Returns:
            Normalized (lower-cased) email address
            
        Raises:
            ValidationError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except (EmailNotValidError, TypeError) as e:
            raise ValidationError(f"Invalid email format: {str(e)}")
    
    @classmethod
    def hash_password(cls, password: str) -> str:
        """
        Hash a password using bcrypt.
        
        Args:
            password: Plain text password
            
        Returns:
            Hashed password string
        """
        if not password or len(password) < 8:
            raise ValidationError("Password must be at least 8 characters long")
        
        return pwd_context.hash(password)
    
    def verify_password(self, password: str) -> bool:
        """
        Verify a password against the stored hash.
        
        Args:
            password: Plain text password to verify
            
        Returns:
            True if password matches, False otherwise
        """
        return pwd_context.verify(password, self.password)
