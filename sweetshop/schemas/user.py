"""Request and response shapes for user accounts."""

import re
from enum import Enum

from pydantic import BaseModel, EmailStr, field_validator

NAME_PATTERN = re.compile(r'^[a-zA-Z\s]+$')
MIN_PASSWORD_LENGTH = 6


class UserRole(str, Enum):
    USER = 'user'
    ADMIN = 'admin'


class RegisterRequest(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: UserRole = UserRole.USER

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required')
        if not 2 <= len(normalized) <= 50:
            raise ValueError('Name must be between 2 and 50 characters')
        if not NAME_PATTERN.match(normalized):
            raise ValueError('Name can only contain letters and spaces')
        return normalized

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError('Password is required')
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters long')
        if not (
            any(char.islower() for char in value)
            and any(char.isupper() for char in value)
            and any(char.isdigit() for char in value)
        ):
            raise ValueError(
                'Password must contain at least one uppercase letter, one lowercase letter, and one number'
            )
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError('Password is required')
        return value


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole

    class Config:
        from_attributes = True


class CurrentUser(UserResponse):
    """The authenticated caller, handed to route handlers as a dependency value."""

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserResponse


class UserDetailResponse(BaseModel):
    success: bool = True
    data: UserResponse
