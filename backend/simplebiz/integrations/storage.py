"""
Storage Integration Client

Supports multiple storage backends:
- local: Local filesystem (for development without S3)
- minio: MinIO S3-compatible storage
- b2: Backblaze B2 cloud storage
"""

import io
import logging
import mimetypes
import re
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from simplebiz.config import settings

logger = logging.getLogger(__name__)


class BaseStorageClient(ABC):
    """Abstract base class for storage clients."""
    
    @abstractmethod
    def upload_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        pass
    
    @abstractmethod
    def exists(self, key: str) -> bool:
        pass
    
    @abstractmethod
    def get_public_url(self, key: str) -> str:
        pass
    
    def _get_content_type(self, key: str) -> str:
        content_type, _ = mimetypes.guess_type(key)
        return content_type or "application/octet-stream"


class LocalStorageClient(BaseStorageClient):
    """Local filesystem storage for development."""
    
    def __init__(self, base_path: str = None, base_url: str = None):
        self.base_path = Path(base_path or settings.LOCAL_STORAGE_PATH)
        self.base_url = (base_url or settings.LOCAL_STORAGE_BASE_URL).rstrip("/")
        self.base_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"LocalStorageClient initialized at {self.base_path}")
    
    def _get_full_path(self, key: str) -> Path:
        return self.base_path / key
    
    def upload_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        file_path = self._get_full_path(key)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        
        file_path.write_bytes(data)
        logger.info(f"Uploaded {len(data)} bytes to {key}")
        return key
    
    def exists(self, key: str) -> bool:
        return self._get_full_path(key).exists()
    
    def get_public_url(self, key: str) -> str:
        return f"{self.base_url}/{key}"


class S3StorageClient(BaseStorageClient):
    """S3-compatible storage client using MinIO."""
    
    def __init__(self, endpoint: str, access_key: str, secret_key: str, bucket: str, secure: bool = False, provider: str = "minio"):
        from minio import Minio
        
        self.endpoint = endpoint
        self.bucket = bucket
        self.secure = secure
        self.provider = provider
        
        self._client = Minio(
            endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
        )
        self._ensure_bucket()
        logger.info(f"S3StorageClient initialized for {provider} at {endpoint}/{bucket}")
    
    def _ensure_bucket(self):
        from minio.error import S3Error
        try:
            if not self._client.bucket_exists(self.bucket):
                self._client.make_bucket(self.bucket)
                logger.info(f"Created bucket: {self.bucket}")
        except S3Error as e:
            if e.code != "BucketAlreadyOwnedByYou":
                logger.error(f"Failed to ensure bucket: {e}")
                raise
    
    def upload_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        if content_type is None:
            content_type = self._get_content_type(key)
        
        stream = io.BytesIO(data)
        self._client.put_object(
            self.bucket, key, stream, length=len(data),
            content_type=content_type,
        )
        
        logger.info(f"Uploaded {len(data)} bytes to s3://{self.bucket}/{key}")
        return key
    
    def exists(self, key: str) -> bool:
        from minio.error import S3Error
        try:
            self._client.stat_object(self.bucket, key)
            return True
        except S3Error as e:
            if e.code == "NoSuchKey":
                return False
            raise
    
    def get_public_url(self, key: str) -> str:
        protocol = "https" if self.secure else "http"
        return f"{protocol}://{self.endpoint}/{self.bucket}/{key}"


class SiteStoragePaths:
    """Helper class for consistent storage paths."""
    
    @staticmethod
    def safe_filename(suggested_name: str) -> str:
        name = Path(suggested_name or "").name
        stem = re.sub(r"[^A-Za-z0-9._-]+", "-", Path(name).stem).strip("-.").lower() or "file"
        suffix = re.sub(r"[^A-Za-z0-9.]", "", Path(name).suffix).lower()
        return f"{stem[:80]}{suffix}"
    
    @staticmethod
    def website_image(profile_id: str, suggested_name: str) -> str:
        unique = uuid.uuid4().hex[:12]
        return f"profiles/{profile_id}/website/images/{unique}-{SiteStoragePaths.safe_filename(suggested_name)}"


_default_client: Optional[BaseStorageClient] = None


def get_storage_client() -> BaseStorageClient:
    """Get or create the default storage client based on settings."""
    global _default_client
    
    if _default_client is None:
        provider = getattr(settings, 'STORAGE_PROVIDER', 'local')
        logger.info(f"Initializing storage client with provider: {provider}")
        
        if provider == "local":
            _default_client = LocalStorageClient()
        elif provider == "b2":
            _default_client = S3StorageClient(
                endpoint=settings.B2_ENDPOINT,
                access_key=settings.B2_KEY_ID,
                secret_key=settings.B2_APPLICATION_KEY,
                bucket=settings.B2_BUCKET,
                secure=True,
                provider="b2",
            )
        else:
            _default_client = S3StorageClient(
                endpoint=settings.MINIO_ENDPOINT,
                access_key=settings.MINIO_ACCESS_KEY,
                secret_key=settings.MINIO_SECRET_KEY,
                bucket=settings.MINIO_BUCKET,
                secure=settings.MINIO_USE_SSL,
                provider="minio",
            )
    
    return _default_client

