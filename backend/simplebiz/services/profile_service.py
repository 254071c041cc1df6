"""
Profile service for business logic.
"""
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from simplebiz.core.security import hash_password, verify_password
from simplebiz.models.profile import Profile
from simplebiz.schemas.auth import RegisterRequest


class ProfileService:
    """Service for profile operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def get_by_id(self, profile_id: UUID) -> Profile | None:
        """Get profile by ID."""
        result = await self.db.execute(
            select(Profile).where(Profile.id == profile_id)
        )
        return result.scalar_one_or_none()
    
    async def get_by_email(self, email: str) -> Profile | None:
        """Get profile by email."""
        result = await self.db.execute(
            select(Profile).where(Profile.email == email.lower())
        )
        return result.scalar_one_or_none()
    
    async def create(self, data: RegisterRequest) -> Profile:
        """Create a new profile."""
        profile = Profile(
            email=data.email.lower(),
            password_hash=hash_password(data.password),
            business_name=data.business_name,
            contact_phone=data.contact_phone,
            address=data.address,
            abn=data.abn,
        )
        self.db.add(profile)
        await self.db.flush()
        await self.db.refresh(profile)
        return profile
    
    async def authenticate(self, email: str, password: str) -> Profile | None:
        """Authenticate a profile by email and password."""
        profile = await self.get_by_email(email)
        if not profile:
            return None
        if not verify_password(password, profile.password_hash):
            return None
        return profile
    
    async def update_last_login(self, profile: Profile) -> None:
        """Update profile's last login timestamp."""
        profile.last_login_at = datetime.now(timezone.utc)
        await self.db.flush()
