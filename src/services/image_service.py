"""Local storage for uploaded diary and profile images."""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from src.config import get_settings
from src.exceptions import BadRequestError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


@dataclass
class ImageUpload:
    """An uploaded image read from a multipart request."""

    data: bytes
    content_type: str | None = None


class ImageService:
    """Stores images on disk and hands out URLs under the media mount."""

    def __init__(
        self,
        upload_dir: str | Path | None = None,
        media_url: str | None = None,
        max_size_bytes: int | None = None,
    ) -> None:
        settings = get_settings()
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.media_url = (media_url or settings.media_url).rstrip("/")
        self.max_size_bytes = max_size_bytes or settings.max_image_size_mb * 1024 * 1024

    def upload_image(self, data: bytes, content_type: str | None) -> str:
        """Save an image and return its public URL."""
        if content_type not in ALLOWED_IMAGE_TYPES:
            raise BadRequestError(
                f"Invalid file type. Allowed types: {', '.join(sorted(ALLOWED_IMAGE_TYPES))}"
            )
        if not data:
            raise BadRequestError("Image file is empty")
        if len(data) > self.max_size_bytes:
            raise BadRequestError(
                f"File too large. Maximum size is {self.max_size_bytes // (1024 * 1024)}MB."
            )

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        filename = f"{uuid.uuid4().hex}{ALLOWED_IMAGE_TYPES[content_type]}"
        (self.upload_dir / filename).write_bytes(data)
        logger.info(f"Stored image {filename} ({len(data)} bytes)")
        return f"{self.media_url}/{filename}"

    def delete_image(self, url: str) -> None:
        """Remove a previously uploaded image; unknown URLs are ignored."""
        if not url.startswith(f"{self.media_url}/"):
            logger.warning(f"Not deleting image outside media root: {url}")
            return
        path = self.upload_dir / Path(url).name
        if path.exists():
            path.unlink()
            logger.info(f"Deleted image {path.name}")
