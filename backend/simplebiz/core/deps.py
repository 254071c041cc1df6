"""
FastAPI dependencies for identity, database and storage.
"""
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from simplebiz.core.exceptions import UnauthorizedError
from simplebiz.core.security import decode_token
from simplebiz.core.session_context import SessionContext
from simplebiz.database import get_db
from simplebiz.integrations.storage import BaseStorageClient, get_storage_client
from simplebiz.models.profile import Profile

security = HTTPBearer(auto_error=False)


async def get_session_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SessionContext:
    """Build the caller's session context from the bearer token, if any."""
    if credentials is None:
        return SessionContext.anonymous()
    
    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise UnauthorizedError("Could not validate credentials")
    
    try:
        profile_id = UUID(payload["sub"])
    except ValueError:
        raise UnauthorizedError("Could not validate credentials") from None
    
    result = await db.execute(select(Profile).where(Profile.id == profile_id))
    profile = result.scalar_one_or_none()
    if profile is None:
        raise UnauthorizedError("Could not validate credentials")
    
    return SessionContext.for_profile(profile)


async def get_current_profile(
    context: Annotated[SessionContext, Depends(get_session_context)],
) -> Profile:
    """Require a signed-in profile."""
    return context.require_profile()


def get_storage() -> BaseStorageClient:
    """Storage client dependency (overridable in tests)."""
    return get_storage_client()


# Common dependencies
CurrentProfile = Annotated[Profile, Depends(get_current_profile)]
Storage = Annotated[BaseStorageClient, Depends(get_storage)]
