"""Photo upload, deletion and listing."""

import logging
from dataclasses import dataclass
from typing import Protocol

from photo_contest.domain.errors import (
    Forbidden,
    InvalidArgument,
    NotFound,
    PayloadTooLarge,
    Unauthenticated,
    UnsupportedMediaType,
)
from photo_contest.domain.events import photo_added, photo_deleted
from photo_contest.domain.models import Identity
from photo_contest.domain.photos import PhotoRecord, Uploader, is_owner, new_photo_id
from photo_contest.services.notifier import Notifier
from photo_contest.services.votes import VoteRepository

_logger = logging.getLogger(__name__)


class PhotoRepository(Protocol):
    """Whole-ledger persistence for photos."""

    def load(self) -> list[PhotoRecord]:
        """Read every photo record in upload order."""

    def save(self, photos: list[PhotoRecord]) -> None:
        """Replace the stored photo ledger."""


class ImageStore(Protocol):
    """Stores uploaded image bytes and returns their public path."""

    def store(self, upload: "ImageUpload") -> str:
        """Persist the image and return the path it is served from."""


@dataclass(frozen=True)
class ImageUpload:
    """Image part received from a multipart request."""

    filename: str
    content_type: str
    content: bytes


@dataclass
class PhotoService:
    """Maintains the photo ledger and its vote entries."""

    photo_repository: PhotoRepository
    vote_repository: VoteRepository
    image_store: ImageStore
    notifier: Notifier
    max_upload_bytes: int

    def list_photos(self) -> list[PhotoRecord]:
        """Return all photos, oldest first."""
        return self.photo_repository.load()

    async def upload_photo(
        self, identity: Identity | None, upload: ImageUpload | None
    ) -> PhotoRecord:
        """Store an image and register it in both ledgers."""
        if identity is None:
            raise Unauthenticated("Sign in to upload photos.")
        if upload is None or not upload.content:
            raise InvalidArgument("No image was sent.")
        if len(upload.content) > self.max_upload_bytes:
            raise PayloadTooLarge(
                f"Images are limited to {self.max_upload_bytes} bytes."
            )
        if not upload.content_type.startswith("image/"):
            raise UnsupportedMediaType("Only images are allowed.")

        src = self.image_store.store(upload)
        photo = PhotoRecord(
            id=new_photo_id(),
            src=src,
            uploader=Uploader.from_identity(identity),
        )

        photos = self.photo_repository.load()
        photos.append(photo)
        self.photo_repository.save(photos)

        ledger = self.vote_repository.load()
        ledger.voters(photo.id)
        self.vote_repository.save(ledger)

        _logger.info(
            "Photo uploaded: photo_id=%s user_id=%s src=%s",
            photo.id,
            identity.user_id,
            src,
        )
        await self.notifier.notify(photo_added(photo))
        return photo

    async def delete_photo(self, photo_id: str, identity: Identity | None) -> None:
        """Remove an owned photo and its votes; the image file stays on disk."""
        if identity is None:
            raise Unauthenticated("Sign in to delete photos.")

        photos = self.photo_repository.load()
        photo = next((item for item in photos if item.id == photo_id), None)
        if photo is None:
            raise NotFound("Photo not found.")
        if not is_owner(identity, photo):
            raise Forbidden("Only the uploader can delete this photo.")

        self.photo_repository.save([item for item in photos if item.id != photo_id])

        ledger = self.vote_repository.load()
        ledger.discard(photo_id)
        self.vote_repository.save(ledger)

        _logger.info(
            "Photo deleted: photo_id=%s user_id=%s", photo_id, identity.user_id
        )
        await self.notifier.notify(photo_deleted(photo_id))
