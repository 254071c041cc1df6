"""
External service integrations for SimpleBiz.

- storage: object storage for website images (local filesystem, MinIO or B2)
"""

from simplebiz.integrations.storage import (
    BaseStorageClient,
    LocalStorageClient,
    S3StorageClient,
    get_storage_client,
    SiteStoragePaths,
)

__all__ = [
    "BaseStorageClient",
    "LocalStorageClient",
    "S3StorageClient",
    "get_storage_client",
    "SiteStoragePaths",
]
