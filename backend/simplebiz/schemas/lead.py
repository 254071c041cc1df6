"""
Lead schemas.
"""
from pydantic import EmailStr, Field

from simplebiz.schemas.common import BaseSchema


class LeadSubmission(BaseSchema):
    """Lead form submission from a public website."""
    
    name: str | None = Field(default=None, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    message: str | None = Field(default=None, max_length=5000)

