"""
Supabase Storage service for uploaded images.
Stores logos and payment proofs and hands back their public URLs.
"""

import asyncio
import logging
from typing import Optional

from supabase import Client, create_client

from app.config import get_settings
from app.domain.services.storage_service import FileStorage


logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage provider rejects an upload."""


class SupabaseStorageService(FileStorage):
    """FileStorage implementation using a Supabase Storage bucket."""

    def __init__(self, client: Optional[Client] = None, bucket: Optional[str] = None):
        settings = get_settings()
        self._client = client
        self.bucket = bucket or settings.storage_bucket

    @property
    def client(self) -> Client:
        # created on first use so the API starts without storage credentials
        if self._client is None:
            settings = get_settings()
            self._client = create_client(settings.supabase_url, settings.supabase_service_key)
        return self._client

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        """
        Upload content to the bucket.

        Args:
            path: Object path within the bucket
            content: File bytes
            content_type: MIME type stored with the object

        Returns:
            Public URL of the stored object
        """
        try:
            await asyncio.to_thread(self._upload, path, content, content_type)
        except Exception as e:
            logger.error("Upload of %s to bucket %s failed: %s", path, self.bucket, e)
            raise StorageError(f"Failed to upload file: {e}") from e

        url = self.client.storage.from_(self.bucket).get_public_url(path)
        logger.info("Uploaded %s (%d bytes) to bucket %s", path, len(content), self.bucket)
        return url

    def _upload(self, path: str, content: bytes, content_type: str) -> None:
        self.client.storage.from_(self.bucket).upload(
            path=path,
            file=content,
            file_options={
                "content-type": content_type,
                "cache-control": "3600",
                "upsert": "false",
            },
        )


# Singleton instance
_storage_service = None


def get_storage_service() -> SupabaseStorageService:
    """Get singleton storage service instance."""
    global _storage_service
    if _storage_service is None:
        _storage_service = SupabaseStorageService()
    return _storage_service
