"""
FastAPI application entry point for SimpleBiz.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from simplebiz.api.v1.router import api_router
from simplebiz.config import settings
from simplebiz.content.errors import (
    ContentError,
    DocumentNotFound,
    InvalidOperation,
    TransportFailure,
    UploadRejected,
    VersionConflict,
)
from simplebiz.database import init_db
from simplebiz.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

CONTENT_ERROR_STATUS = {
    InvalidOperation: status.HTTP_400_BAD_REQUEST,
    UploadRejected: status.HTTP_400_BAD_REQUEST,
    DocumentNotFound: status.HTTP_404_NOT_FOUND,
    VersionConflict: status.HTTP_409_CONFLICT,
    TransportFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging()
    await init_db()
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ContentError)
async def content_error_handler(request: Request, exc: ContentError) -> JSONResponse:
    """Translate content editing failures into HTTP errors."""
    status_code = next(
        (code for error_type, code in CONTENT_ERROR_STATUS.items() if isinstance(exc, error_type)),
        status.HTTP_400_BAD_REQUEST,
    )
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), code=type(exc).__name__).model_dump(),
    )


# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": settings.VERSION}


@app.get(f"{settings.API_V1_STR}/health")
async def api_health_check():
    """API health check endpoint."""
    return {"status": "healthy", "version": settings.VERSION}
