"""
Public endpoints for visitors of published websites.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from simplebiz.content.document import materialize
from simplebiz.core.deps import get_db
from simplebiz.core.exceptions import BadRequestError, NotFoundError
from simplebiz.schemas.common import MessageResponse
from simplebiz.schemas.lead import LeadSubmission
from simplebiz.schemas.website import PublicWebsiteResponse
from simplebiz.services.lead_service import LeadFormDisabled, LeadService
from simplebiz.services.website_service import WebsiteService

router = APIRouter(prefix="/public/sites", tags=["Public"])


@router.get("/{path}", response_model=PublicWebsiteResponse)
async def get_public_website(
    path: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get a published website by its path."""
    website = await WebsiteService(db).get_by_path(path)
    if not website:
        raise NotFoundError("Website")
    
    return PublicWebsiteResponse(
        path=website.path,
        content=materialize(website.content),
        published_at=website.published_at,
    )


@router.post("/{path}/leads", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def submit_lead(
    path: str,
    data: LeadSubmission,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Submit the lead form of a published website."""
    website = await WebsiteService(db).get_by_path(path)
    if not website:
        raise NotFoundError("Website")
    
    try:
        await LeadService(db).submit(website, data)
    except LeadFormDisabled as e:
        raise BadRequestError(str(e)) from e
    
    return MessageResponse(message="Thanks! We'll be in touch soon.")
