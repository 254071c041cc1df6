"""
Authentication schemas.
"""
from datetime import datetime

from pydantic import EmailStr, Field

from simplebiz.schemas.common import BaseSchema, IDSchema, TimestampSchema


class LoginRequest(BaseSchema):
    """Login request schema."""
    
    email: EmailStr
    password: str = Field(min_length=8)


class RegisterRequest(BaseSchema):
    """Registration request schema."""
    
    email: EmailStr
    password: str = Field(min_length=8)
    business_name: str = Field(min_length=2, max_length=255)
    contact_phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)
    abn: str | None = Field(default=None, max_length=50)


class TokenResponse(BaseSchema):
    """Token response schema."""
    
    access_token: str
    token_type: str = "bearer"


class ProfileResponse(IDSchema, TimestampSchema):
    """Profile response schema."""
    
    email: str
    business_name: str
    contact_phone: str | None = None
    address: str | None = None
    abn: str | None = None
    last_login_at: datetime | None = None


class AuthResponse(TokenResponse):
    """Authentication response with profile info."""
    
    profile: ProfileResponse
