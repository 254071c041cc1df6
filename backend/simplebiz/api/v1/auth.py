"""
Authentication endpoints.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from simplebiz.core.deps import CurrentProfile, get_db
from simplebiz.core.security import create_access_token
from simplebiz.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
)
from simplebiz.services.profile_service import ProfileService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """Authenticate a profile and return an access token."""
    service = ProfileService(db)
    
    profile = await service.authenticate(request.email, request.password)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    
    await service.update_last_login(profile)
    
    access_token = create_access_token(data={"sub": str(profile.id)})
    
    return AuthResponse(
        access_token=access_token,
        profile=ProfileResponse.model_validate(profile),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """Register a new business profile."""
    service = ProfileService(db)
    
    existing = await service.get_by_email(request.email)
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    
    profile = await service.create(request)
    access_token = create_access_token(data={"sub": str(profile.id)})
    
    return AuthResponse(
        access_token=access_token,
        profile=ProfileResponse.model_validate(profile),
    )


@router.get("/me", response_model=ProfileResponse)
async def get_me(current_profile: CurrentProfile) -> ProfileResponse:
    """Get the signed-in profile."""
    return ProfileResponse.model_validate(current_profile)
