"""
Website schemas.
"""
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from simplebiz.content.arrays import ArrayOperation
from simplebiz.schemas.common import BaseSchema, IDSchema, TimestampSchema

PATH_PATTERN = r"^[a-z0-9](?:[a-z0-9-]{0,98}[a-z0-9])?$"


class WebsiteReplace(BaseSchema):
    """Create or replace the whole website content."""
    
    content: dict[str, Any] = {}
    path: str | None = Field(default=None, pattern=PATH_PATTERN)


class PathUpdateRequest(BaseSchema):
    """Set one nested field of the content document."""
    
    path: list[str] = Field(min_length=1)
    value: Any = None


class ArrayUpdateRequest(BaseSchema):
    """Add, remove or replace an element of a list field."""
    
    path: list[str] = Field(min_length=1)
    operation: str = Field(description="One of: " + ", ".join(op.value for op in ArrayOperation))
    value: Any = None
    index: int | None = None


class WebsiteResponse(IDSchema, TimestampSchema):
    """Website response with materialized content."""
    
    profile_id: UUID
    path: str
    content: dict[str, Any]
    published: bool
    published_at: datetime | None = None
    version: int
    warnings: list[str] = []


class PublicWebsiteResponse(BaseSchema):
    """Published website as served to visitors."""
    
    path: str
    content: dict[str, Any]
    published_at: datetime | None = None
