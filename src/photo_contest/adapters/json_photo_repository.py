"""JSON file photo ledger."""

from dataclasses import dataclass
from pathlib import Path

from photo_contest.adapters.json_files import read_json, write_json
from photo_contest.domain.photos import PhotoRecord, Uploader
from photo_contest.services.photos import PhotoRepository


@dataclass
class JsonPhotoRepository(PhotoRepository):
    """Stores the photo ledger as a JSON list."""

    path: Path

    def load(self) -> list[PhotoRecord]:
        """Read every photo record in upload order."""
        rows = read_json(self.path, [])
        if not isinstance(rows, list):
            raise ValueError(f"Photo ledger {self.path} is not a list")
        return [_to_record(row) for row in rows]

    def save(self, photos: list[PhotoRecord]) -> None:
        """Rewrite the photo ledger file."""
        write_json(self.path, [_to_row(photo) for photo in photos])


def _to_record(row: dict[str, object]) -> PhotoRecord:
    uploader = row.get("uploader")
    return PhotoRecord(
        id=str(row["id"]),
        src=str(row["src"]),
        uploader=_to_uploader(uploader) if isinstance(uploader, dict) else None,
    )


def _to_uploader(row: dict[str, object]) -> Uploader:
    raw_id = row.get("id")
    return Uploader(
        provider=str(row.get("provider", "")),
        name=str(row.get("name", "")),
        id=str(raw_id) if raw_id is not None else None,
    )


def _to_row(photo: PhotoRecord) -> dict[str, object]:
    row: dict[str, object] = {"id": photo.id, "src": photo.src}
    if photo.uploader is not None:
        uploader: dict[str, object] = {
            "provider": photo.uploader.provider,
            "name": photo.uploader.name,
        }
        if photo.uploader.id is not None:
            uploader["id"] = photo.uploader.id
        row["uploader"] = uploader
    return row
