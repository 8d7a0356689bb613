"""
Pydantic schemas for User entity.
"""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date


class UserBase(BaseModel):
    """Base user schema."""
    username: str = Field(min_length=1, max_length=50)
    name: Optional[str] = None
    surname: Optional[str] = None
    birthdate: Optional[date] = None
    gender: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    # Clients send and receive the flag as "admin"
    is_admin: bool = Field(
        default=False,
        validation_alias=AliasChoices("admin", "isAdmin", "is_admin"),
        serialization_alias="admin",
    )


class UserCreate(UserBase):
    """Schema for user creation."""
    password: str = Field(min_length=1)


class UserResponse(UserBase):
    """Schema for user response. The stored password is never exposed."""
    id: int

    model_config = ConfigDict(from_attributes=True)


class UserLogin(BaseModel):
    """Schema for user login."""
    username: str
    password: str
