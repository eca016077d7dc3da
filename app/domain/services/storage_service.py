"""
File storage interface and upload validation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from app.domain.models.base import ValidationError


MAX_IMAGE_SIZE = 5 * 1024 * 1024

IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
}


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded file held in memory."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def validate_image(upload: UploadedFile, max_size: int = MAX_IMAGE_SIZE) -> str:
    """Check an image upload and return the extension to store it with."""
    if not upload.content:
        raise ValidationError("No file uploaded", "file")

    extension = IMAGE_EXTENSIONS.get((upload.content_type or "").lower())
    if extension is None:
        raise ValidationError("Only JPG and PNG files are allowed", "file")

    if upload.size > max_size:
        raise ValidationError(
            f"File too large. Maximum size: {max_size / 1024 / 1024:.0f}MB",
            "file"
        )
    return extension


def dated_path(root: str, owner_id: str, name: str, extension: str, now: datetime) -> str:
    """<root>/<YYYY>/<MM>/<owner_id>/<name>-<timestamp>.<ext>"""
    timestamp = int(now.timestamp() * 1000)
    return f"{root}/{now:%Y}/{now:%m}/{owner_id}/{name}-{timestamp}.{extension}"


class FileStorage(ABC):
    """Durable object storage: bytes in, URL out."""

    @abstractmethod
    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        """
        Store content at path and return its public URL.
        """
        pass
