"""
Pydantic schemas for users and authentication.
"""

from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.common import RequestSchema, ResponseSchema, reject_null


def _check_email_length(v: Optional[str]) -> Optional[str]:
    if v is not None and not 6 <= len(v) <= 60:
        raise ValueError("Email must be 6-60 characters")
    return v


class UserRegister(RequestSchema):
    """Request schema for self-registration (never creates admins)."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_email_length(v)


class UserNew(UserRegister):
    """Request schema for admin-created users."""
    is_admin: bool = False


class UserUpdate(RequestSchema):
    """Partial update; absent fields are left unchanged."""
    password: Optional[str] = Field(None, min_length=5, max_length=20)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[EmailStr] = None
    is_admin: Optional[bool] = None

    @field_validator("password", "first_name", "last_name", "email", "is_admin")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_email_length(v)


class UserAuth(RequestSchema):
    """Request schema for exchanging credentials for a token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1, max_length=20)


class UserResponse(ResponseSchema):
    """User profile response (no credentials)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetail(UserResponse):
    """User profile with the ids of jobs applied to."""
    jobs: List[int] = []


class UserEnvelope(BaseModel):
    user: UserDetail


class UserCreatedEnvelope(BaseModel):
    user: UserResponse
    token: str


class UserListEnvelope(BaseModel):
    users: List[UserResponse]


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class AppliedResponse(BaseModel):
    applied: int
