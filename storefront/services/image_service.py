import logging
import uuid
from io import BytesIO
from pathlib import Path, PurePosixPath

from PIL import Image, UnidentifiedImageError

from storefront.config import settings
from storefront.exceptions import InvalidUploadError

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads/products/"


class ImageService:
    def __init__(self):
        settings.product_images_dir.mkdir(parents=True, exist_ok=True)
        settings.thumbnails_dir.mkdir(parents=True, exist_ok=True)

    def save_upload(self, data: bytes, filename: str | None, content_type: str | None) -> str:
        """Validate and store an uploaded product image. Returns its public URL."""
        if not (content_type or "").startswith("image/"):
            raise InvalidUploadError("Only image files are allowed!")
        if len(data) > settings.max_upload_size_mb * 1024 * 1024:
            raise InvalidUploadError(f"Image exceeds {settings.max_upload_size_mb} MB")
        try:
            with Image.open(BytesIO(data)) as img:
                detected = img.format
                img.verify()
        except (UnidentifiedImageError, OSError) as e:
            raise InvalidUploadError("Uploaded file is not a readable image") from e

        ext = PurePosixPath(filename or "").suffix.lower()
        if ext not in Image.registered_extensions():
            ext = f".{(detected or 'jpeg').lower()}"
        name = f"{uuid.uuid4().hex}{ext}"
        dest = settings.product_images_dir / name
        dest.write_bytes(data)
        self._create_thumbnail(dest, settings.thumbnails_dir / name)

        return f"{UPLOAD_URL_PREFIX}{name}"

    def delete(self, url: str) -> bool:
        """Remove an uploaded image and its thumbnail. URLs outside the upload area are ignored."""
        if not url.startswith(UPLOAD_URL_PREFIX):
            return False
        name = self._sanitize(url.removeprefix(UPLOAD_URL_PREFIX))
        removed = False
        for path in (settings.product_images_dir / name, settings.thumbnails_dir / name):
            if path.is_file():
                path.unlink()
                removed = True
        if removed:
            logger.info("Deleted product image %s", name)
        return removed

    def delete_many(self, urls: list[str]) -> int:
        return sum(1 for url in urls if self.delete(url))

    def _create_thumbnail(self, source: Path, dest: Path) -> None:
        with Image.open(source) as img:
            img.thumbnail(settings.thumbnail_size)
            if img.mode not in ("RGB", "L") and dest.suffix in (".jpg", ".jpeg"):
                img = img.convert("RGB")
            img.save(dest, quality=85)

    def _sanitize(self, name: str) -> str:
        return PurePosixPath(name).name
