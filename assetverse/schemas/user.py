"""User schemas for request/response validation."""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, field_validator

from assetverse.models.user import UserRole
from assetverse.schemas.common import CamelModel


class UserCreate(CamelModel):
    """Schema for registering a user."""
    name: Optional[str] = None
    email: EmailStr
    role: UserRole
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    photo: Optional[str] = None
    date_of_birth: Optional[str] = None

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value


class UserValidate(CamelModel):
    email: EmailStr


class UserResponse(CamelModel):
    """Schema for user response."""
    id: int
    email: str
    name: Optional[str] = None
    role: UserRole
    date_of_birth: Optional[str] = None
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    subscription: Optional[str] = None
    package_limit: Optional[int] = None
    current_employees: Optional[int] = None
    photo: Optional[str] = None
    created_at: Optional[datetime] = None
