"""Domain models for uploaded photos."""

import secrets
import time
from dataclasses import dataclass

from photo_contest.domain.models import Identity


@dataclass(frozen=True)
class Uploader:
    """Identity snapshot taken when a photo was uploaded.

    Records written before subject ids were stored carry only the provider
    and display name, so ``id`` is optional.
    """

    provider: str
    name: str
    id: str | None = None

    @classmethod
    def from_identity(cls, identity: Identity) -> "Uploader":
        return cls(
            provider=identity.provider,
            name=identity.name,
            id=identity.subject_id,
        )


@dataclass(frozen=True)
class PhotoRecord:
    """Single entry of the photo ledger."""

    id: str
    src: str
    uploader: Uploader | None = None


def new_photo_id() -> str:
    """Generate a photo id from the current time and a random suffix."""
    return f"foto-{int(time.time() * 1000)}-{secrets.token_hex(4)}"


def is_owner(identity: Identity, photo: PhotoRecord) -> bool:
    """Return true when the identity may delete the photo.

    Legacy uploaders without an id fall back to a display-name match, which
    anyone sharing the name on the same provider also passes.
    """
    uploader = photo.uploader
    if uploader is None or uploader.provider != identity.provider:
        return False
    if uploader.id is not None:
        return uploader.id == identity.subject_id
    return uploader.name == identity.name
