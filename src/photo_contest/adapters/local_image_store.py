"""Local disk storage for uploaded images."""

import io
import secrets
import time
from dataclasses import dataclass
from pathlib import Path, PurePath

from PIL import Image, UnidentifiedImageError

from photo_contest.domain.errors import PayloadTooLarge, UnsupportedMediaType
from photo_contest.services.photos import ImageStore, ImageUpload

PUBLIC_PREFIX = "/uploads"


@dataclass
class LocalImageStore(ImageStore):
    """Writes images under ``directory`` and serves them from /uploads."""

    directory: Path

    def store(self, upload: ImageUpload) -> str:
        """Verify the image and write it under a unique file name."""
        _verify_image(upload.content)
        self.directory.mkdir(parents=True, exist_ok=True)
        filename = _unique_filename(upload.filename)
        (self.directory / filename).write_bytes(upload.content)
        return f"{PUBLIC_PREFIX}/{filename}"


def _verify_image(content: bytes) -> None:
    """Reject bytes Pillow cannot identify as an image."""
    try:
        with Image.open(io.BytesIO(content)) as image:
            image.verify()
    except Image.DecompressionBombError as exc:
        raise PayloadTooLarge("Image dimensions are too large.") from exc
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise UnsupportedMediaType("Only images are allowed.") from exc


def _unique_filename(original: str) -> str:
    suffix = PurePath(original).suffix.lower()
    if not suffix.isascii() or not suffix[1:].isalnum():
        suffix = ""
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"
