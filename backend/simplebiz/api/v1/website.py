"""
Website builder endpoints for the signed-in profile.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from simplebiz.content.document import materialize, validate_content
from simplebiz.content.session import persist_array_mutation, persist_path_update
from simplebiz.core.deps import CurrentProfile, Storage, get_db
from simplebiz.core.exceptions import ConflictError, NotFoundError
from simplebiz.models.website import Website
from simplebiz.schemas.website import (
    ArrayUpdateRequest,
    PathUpdateRequest,
    WebsiteReplace,
    WebsiteResponse,
)
from simplebiz.services.upload_service import ImageUploader, upload_top_image
from simplebiz.services.website_service import WebsiteDocumentStore, WebsiteService

router = APIRouter(prefix="/website", tags=["Website"])


def to_response(website: Website) -> WebsiteResponse:
    content = materialize(website.content)
    return WebsiteResponse(
        id=website.id,
        profile_id=website.profile_id,
        path=website.path,
        content=content,
        published=website.published,
        published_at=website.published_at,
        version=website.version,
        created_at=website.created_at,
        updated_at=website.updated_at,
        warnings=validate_content(content),
    )


async def _require_website(service: WebsiteService, profile) -> Website:
    website = await service.get_by_profile(profile.id)
    if not website:
        raise NotFoundError("Website")
    return website


@router.get("", response_model=WebsiteResponse)
async def get_website(
    current_profile: CurrentProfile,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get the profile's website with read-repaired content."""
    website = await _require_website(WebsiteService(db), current_profile)
    return to_response(website)


@router.put("", response_model=WebsiteResponse)
async def replace_website(
    data: WebsiteReplace,
    current_profile: CurrentProfile,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create the website, or replace its whole content and public path."""
    service = WebsiteService(db)
    website = await service.get_by_profile(current_profile.id)
    
    if data.path and await service.path_taken(data.path, exclude_id=website.id if website else None):
        raise ConflictError("Website path already taken")
    
    if not website:
        website = await service.create(current_profile, content=data.content, path=data.path)
        return to_response(website)
    
    store = WebsiteDocumentStore(db)
    await store.write(website.id, materialize(data.content))
    if data.path and data.path != website.path:
        await service.set_path(website, data.path)
    return to_response(await service.get_by_id(website.id))


@router.patch("/content", response_model=WebsiteResponse)
async def update_content_field(
    data: PathUpdateRequest,
    current_profile: CurrentProfile,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Set one field of the content, merged into the latest stored document."""
    service = WebsiteService(db)
    website = await service.get_or_create(current_profile)
    
    await persist_path_update(WebsiteDocumentStore(db), website.id, data.path, data.value)
    return to_response(await service.get_by_id(website.id))


@router.post("/content/array", response_model=WebsiteResponse)
async def update_content_array(
    data: ArrayUpdateRequest,
    current_profile: CurrentProfile,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Add, remove or replace an element of a list field."""
    service = WebsiteService(db)
    website = await service.get_or_create(current_profile)
    
    await persist_array_mutation(
        WebsiteDocumentStore(db),
        website.id,
        data.path,
        data.operation,
        value=data.value,
        index=data.index,
    )
    return to_response(await service.get_by_id(website.id))


@router.post("/top-image", response_model=WebsiteResponse)
async def upload_website_top_image(
    current_profile: CurrentProfile,
    db: Annotated[AsyncSession, Depends(get_db)],
    storage: Storage,
    file: UploadFile = File(...),
):
    """Upload the header image and set it as ``theme.topImage``."""
    service = WebsiteService(db)
    website = await service.get_or_create(current_profile)
    
    uploader = ImageUploader(storage, current_profile.id)
    await upload_top_image(
        WebsiteDocumentStore(db),
        website.id,
        uploader,
        await file.read(),
        file.filename or "top-image",
        file.content_type,
    )
    return to_response(await service.get_by_id(website.id))


@router.post("/publish", response_model=WebsiteResponse)
async def publish_website(
    current_profile: CurrentProfile,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Make the website publicly visible at its path."""
    service = WebsiteService(db)
    website = await _require_website(service, current_profile)
    return to_response(await service.set_published(website, True))


@router.post("/unpublish", response_model=WebsiteResponse)
async def unpublish_website(
    current_profile: CurrentProfile,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Hide the website from the public."""
    service = WebsiteService(db)
    website = await _require_website(service, current_profile)
    return to_response(await service.set_published(website, False))
