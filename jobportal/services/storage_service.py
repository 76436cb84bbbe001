"""
Storage Service - file buckets backed by a MongoDB collection.

Buckets:
- resumes: candidate resumes ({user_id}/resume.pdf)
- avatars: profile pictures ({user_id}/avatar.png)
- bgv:     background verification documents ({user_id}/{document_id}.pdf)

Uploads are upserts: writing the same bucket/path replaces the file.
Files are served back at {PUBLIC_BASE_URL}/storage/{bucket}/{path}.
"""

from datetime import datetime
from typing import Optional

from bson import Binary
from loguru import logger
from pymongo.collection import Collection

from jobportal.core.config import get_settings
from jobportal.db.mongodb import get_collection, COLLECTIONS

settings = get_settings()

BUCKETS = {"resumes", "avatars", "bgv"}


class StorageError(ValueError):
    """Unknown bucket, bad path or oversized file."""


class StorageService:
    """
    Minimal object store API: upload, get, delete, public URL.
    """

    def __init__(self, collection: Collection = None):
        self.collection: Collection = collection if collection is not None else get_collection(COLLECTIONS["storage_objects"])

    @staticmethod
    def _validate(bucket: str, path: str) -> str:
        if bucket not in BUCKETS:
            raise StorageError(f"Unknown bucket '{bucket}'")
        path = path.strip("/")
        if not path or ".." in path.split("/"):
            raise StorageError(f"Invalid object path '{path}'")
        return path

    @staticmethod
    def get_public_url(bucket: str, path: str) -> str:
        return f"{settings.public_base_url.rstrip('/')}/storage/{bucket}/{path.strip('/')}"

    def upload_file(self, bucket: str, path: str, content: bytes,
                    content_type: str = "application/octet-stream") -> str:
        """
        Store a file (replacing any existing object at the same path).

        Returns:
            Public URL of the stored file
        """
        path = self._validate(bucket, path)
        if len(content) > settings.max_upload_bytes:
            raise StorageError(f"File too large. Maximum size: {settings.max_upload_mb}MB")

        self.collection.update_one(
            {"bucket": bucket, "path": path},
            {"$set": {
                "content": Binary(content),
                "content_type": content_type,
                "size": len(content),
                "uploaded_at": datetime.utcnow()
            }},
            upsert=True
        )
        logger.info(f"Stored {len(content)} bytes at {bucket}/{path}")
        return self.get_public_url(bucket, path)

    def get_file(self, bucket: str, path: str) -> Optional[dict]:
        """Return {"content", "content_type", "size", "uploaded_at"} or None."""
        path = self._validate(bucket, path)
        doc = self.collection.find_one({"bucket": bucket, "path": path})
        if doc is None:
            return None
        return {
            "content": bytes(doc["content"]),
            "content_type": doc.get("content_type", "application/octet-stream"),
            "size": doc.get("size", len(doc["content"])),
            "uploaded_at": doc.get("uploaded_at")
        }

    def delete_file(self, bucket: str, path: str) -> bool:
        path = self._validate(bucket, path)
        result = self.collection.delete_one({"bucket": bucket, "path": path})
        if result.deleted_count:
            logger.info(f"Deleted {bucket}/{path}")
        return result.deleted_count > 0


def get_storage_service() -> StorageService:
    return StorageService()
