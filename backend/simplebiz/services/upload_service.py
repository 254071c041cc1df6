"""
Website image uploads.
"""
import asyncio
import logging
from collections.abc import Hashable
from typing import Any

from simplebiz.config import settings
from simplebiz.content.errors import TransportFailure, UploadRejected
from simplebiz.content.session import persist_path_update
from simplebiz.content.store import DocumentStore
from simplebiz.integrations.storage import BaseStorageClient, SiteStoragePaths

logger = logging.getLogger(__name__)

TOP_IMAGE_PATH = ("theme", "topImage")


class ImageUploader:
    """Puts website images into object storage and returns their public URL."""
    
    def __init__(
        self,
        storage: BaseStorageClient,
        profile_id: Any,
        max_bytes: int | None = None,
        allowed_types: list[str] | None = None,
    ):
        self.storage = storage
        self.profile_id = profile_id
        self.max_bytes = settings.MAX_UPLOAD_BYTES if max_bytes is None else max_bytes
        self.allowed_types = settings.allowed_image_types_list if allowed_types is None else allowed_types
    
    def _check(self, file_bytes: bytes, content_type: str | None) -> None:
        if not file_bytes:
            raise UploadRejected("Uploaded file is empty")
        if len(file_bytes) > self.max_bytes:
            raise UploadRejected(f"Image is larger than {self.max_bytes} bytes")
        if content_type and content_type not in self.allowed_types:
            raise UploadRejected(f"Unsupported image type: {content_type}")
    
    def _store(self, file_bytes: bytes, suggested_name: str, content_type: str | None) -> str:
        key = SiteStoragePaths.website_image(str(self.profile_id), suggested_name)
        while self.storage.exists(key):
            key = SiteStoragePaths.website_image(str(self.profile_id), suggested_name)
        return self.storage.upload_bytes(key, file_bytes, content_type)
    
    async def upload(self, file_bytes: bytes, suggested_name: str, content_type: str | None = None) -> str:
        """Store the image and return its public URL."""
        self._check(file_bytes, content_type)
        try:
            key = await asyncio.to_thread(self._store, file_bytes, suggested_name, content_type)
        except Exception as e:
            logger.error(f"Image upload for profile {self.profile_id} failed: {e}")
            raise TransportFailure(f"Image upload failed: {e}") from e
        return self.storage.get_public_url(key)


async def upload_top_image(
    store: DocumentStore,
    website_id: Hashable,
    uploader: ImageUploader,
    file_bytes: bytes,
    suggested_name: str,
    content_type: str | None = None,
) -> dict[str, Any]:
    """Upload the header image and record its URL at ``theme.topImage``."""
    url = await uploader.upload(file_bytes, suggested_name, content_type)
    return await persist_path_update(store, website_id, TOP_IMAGE_PATH, url)
