"""
Pydantic schemas for SimpleBiz API.
"""
from simplebiz.schemas.common import (
    BaseSchema,
    ErrorResponse,
    IDSchema,
    MessageResponse,
    TimestampSchema,
)
from simplebiz.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    TokenResponse,
)
from simplebiz.schemas.website import (
    ArrayUpdateRequest,
    PathUpdateRequest,
    PublicWebsiteResponse,
    WebsiteReplace,
    WebsiteResponse,
)
from simplebiz.schemas.lead import LeadSubmission

__all__ = [
    "BaseSchema",
    "ErrorResponse",
    "IDSchema",
    "MessageResponse",
    "TimestampSchema",
    "AuthResponse",
    "LoginRequest",
    "ProfileResponse",
    "RegisterRequest",
    "TokenResponse",
    "ArrayUpdateRequest",
    "PathUpdateRequest",
    "PublicWebsiteResponse",
    "WebsiteReplace",
    "WebsiteResponse",
    "LeadSubmission",
]
