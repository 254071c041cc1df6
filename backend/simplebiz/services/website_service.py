"""
Website service: persistence of website rows and their content documents.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from simplebiz.content.document import materialize
from simplebiz.content.errors import DocumentNotFound, TransportFailure, VersionConflict
from simplebiz.content.paths import set_path
from simplebiz.models.profile import Profile
from simplebiz.models.website import Website

logger = logging.getLogger(__name__)


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", (value or "").lower()).strip("-")
    return slug[:90] or "site"


def seed_content(profile: Profile) -> dict[str, Any]:
    """Default content pre-filled from the profile's business details."""
    content = materialize({})
    content = set_path(content, ["businessName"], profile.business_name or "")
    content = set_path(content, ["contactInfo", "email"], profile.email or "")
    content = set_path(content, ["contactInfo", "phone"], profile.contact_phone or "")
    content = set_path(content, ["contactInfo", "address"], profile.address or "")
    return content


class WebsiteService:
    """Service for website operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def get_by_id(self, website_id: UUID) -> Website | None:
        """Get website by ID, always reading the latest stored row."""
        result = await self.db.execute(
            select(Website)
            .where(Website.id == website_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
    
    async def get_by_profile(self, profile_id: UUID) -> Website | None:
        """Get the website owned by a profile."""
        result = await self.db.execute(
            select(Website)
            .where(Website.profile_id == profile_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
    
    async def get_by_path(self, path: str, published_only: bool = True) -> Website | None:
        """Get a website by its public path."""
        query = select(Website).where(Website.path == path)
        if published_only:
            query = query.where(Website.published.is_(True))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()
    
    async def path_taken(self, path: str, exclude_id: UUID | None = None) -> bool:
        query = select(Website.id).where(Website.path == path)
        if exclude_id:
            query = query.where(Website.id != exclude_id)
        result = await self.db.execute(query)
        return result.first() is not None
    
    async def unique_path(self, base: str) -> str:
        """Derive a free public path from ``base``."""
        candidate = slugify(base)
        suffix = 2
        while await self.path_taken(candidate):
            candidate = f"{slugify(base)}-{suffix}"
            suffix += 1
        return candidate
    
    async def get_or_create(self, profile: Profile, path: str | None = None) -> Website:
        """Return the profile's website, creating it on first save."""
        website = await self.get_by_profile(profile.id)
        if website:
            return website
        return await self.create(profile, path=path)
    
    async def create(
        self,
        profile: Profile,
        content: dict[str, Any] | None = None,
        path: str | None = None,
    ) -> Website:
        """Create a website for a profile."""
        website = Website(
            profile_id=profile.id,
            path=path or await self.unique_path(profile.business_name),
            content=materialize(content) if content is not None else seed_content(profile),
            published=False,
            version=1,
        )
        self.db.add(website)
        await self.db.flush()
        await self.db.refresh(website)
        logger.info(f"Created website /{website.path} for profile {profile.id}")
        return website
    
    async def set_path(self, website: Website, path: str) -> Website:
        website.path = path
        await self.db.flush()
        await self.db.refresh(website)
        return website
    
    async def set_published(self, website: Website, published: bool) -> Website:
        """
        Publish or unpublish a website.

        Repeating the current state still stamps the timestamps.
        """
        now = datetime.now(timezone.utc)
        website.published = published
        website.published_at = now
        website.updated_at = now
        await self.db.flush()
        await self.db.refresh(website)
        logger.info(f"Website {website.id} {'published' if published else 'unpublished'}")
        return website


class WebsiteDocumentStore:
    """Document store over the ``websites`` table, keyed by website id."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
        self.websites = WebsiteService(db)
    
    async def _load(self, website_id: UUID) -> Website:
        try:
            website = await self.websites.get_by_id(website_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read website {website_id}: {e}")
            raise TransportFailure(f"Could not load website: {e}") from e
        if website is None:
            raise DocumentNotFound(website_id)
        return website
    
    async def fetch(self, website_id: UUID) -> dict[str, Any]:
        website = await self._load(website_id)
        return website.content
    
    async def fetch_versioned(self, website_id: UUID) -> tuple[dict[str, Any], int]:
        website = await self._load(website_id)
        return website.content, website.version
    
    async def write(
        self,
        website_id: UUID,
        content: dict[str, Any],
        expected_version: int | None = None,
    ) -> dict[str, Any]:
        website = await self._load(website_id)
        if expected_version is not None and website.version != expected_version:
            raise VersionConflict(expected_version, website.version)
        
        website.content = content
        website.version = website.version + 1
        website.updated_at = datetime.now(timezone.utc)
        try:
            await self.db.flush()
            await self.db.refresh(website)
        except SQLAlchemyError as e:
            logger.error(f"Failed to write website {website_id}: {e}")
            raise TransportFailure(f"Could not save website: {e}") from e
        
        logger.debug(f"Wrote website {website_id} content (version {website.version})")
        return website.content
