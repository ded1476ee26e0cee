"""
Pydantic schemas for user requests and responses.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserBase(BaseModel):
    """Base user schema with common fields."""
    
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name",
        examples=["Devin Sanders"]
    )
    
    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["sebastianguerra@ymail.com"]
    )
    
    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()
    
    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate and clean name."""
        if not v or not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class UserCreate(UserBase):
    """Schema for creating a new user."""
    
    password: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Password hash from User.hash_password, stored as given",
        examples=["$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."]
    )


class UserResponse(UserBase):
    """Public user fields: id, name and email."""
    
    id: int
    
    model_config = {"from_attributes": True}


class UserRecord(UserResponse):
    """Full user row including the password hash, for credential checks."""
    
    password: str
