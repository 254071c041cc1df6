"""
API v1 router aggregating all endpoints.
"""
from fastapi import APIRouter

from simplebiz.api.v1.auth import router as auth_router
from simplebiz.api.v1.website import router as website_router
from simplebiz.api.v1.public import router as public_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(website_router)
api_router.include_router(public_router)
