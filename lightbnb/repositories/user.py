"""
User repository for account lookups, registration and credential checks.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import select
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.user import User
from lightbnb.utils.exceptions import DuplicateResourceError, QueryFailedError, ValidationError
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user management.
    Passwords arrive already hashed and are checked with bcrypt on login.
    """
    
    def __init__(self, db: AsyncSession):
        super().__init__(User, db)
    
    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with email validation.

        The password is stored exactly as given; callers hash it first
        with ``User.hash_password``.
        
        Args:
            user_data: Dictionary with name, email and password hash
            
        Returns:
            Created user instance
            
        Raises:
            ValidationError: If email is invalid or password is missing
            DuplicateResourceError: If the email is already registered
            QueryFailedError: If database operation fails
        """
        email = User.validate_email_format(user_data["email"])
        if not user_data.get("password"):
            raise ValidationError("Password is required")
        
        existing_user = await self.get_by_email(email)
        if existing_user:
            raise DuplicateResourceError("User", email)
        
        create_data = {
            "name": user_data["name"],
            "email": email,
            "password": user_data["password"],
        }
        
        try:
            created_user = await self.create(create_data)
        except QueryFailedError as e:
            if isinstance(e.original, IntegrityError):
                # Lost a race with a concurrent registration
                raise DuplicateResourceError("User", email) from e
            raise
        
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user
    
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.
        
        Args:
            email: Email address to search for
            
        Returns:
            User instance if found, None otherwise
        """
        normalized_email = email.lower().strip()
        
        try:
            result = await self.db.execute(select(User).where(User.email == normalized_email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._fail(f"get user by email {email}", e)
        
        if user:
            logger.debug(f"Retrieved user by email: {email}")
        else:
            logger.debug(f"User with email {email} not found")
        
        return user
    
    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate user with email and password.
        
        Args:
            email: User's email address
            password: Plain text password
            
        Returns:
            User instance if authentication successful, None otherwise
        """
        user = await self.get_by_email(email)
        
        if not user:
            logger.debug(f"Authentication failed: user {email} not found")
            return None
        
        if not user.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return None
        
        logger.info(f"User authenticated successfully: {email}")
        return user
