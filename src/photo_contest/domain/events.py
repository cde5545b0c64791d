"""Real-time events broadcast to connected viewers."""

from dataclasses import dataclass

from photo_contest.domain.photos import PhotoRecord
from photo_contest.domain.votes import VoteSummary

VOTE_UPDATED = "voteUpdated"
PHOTO_ADDED = "photoAdded"
PHOTO_DELETED = "photoDeleted"


@dataclass(frozen=True)
class LedgerEvent:
    """A ledger delta pushed to every viewer."""

    name: str
    data: dict[str, object]

    def as_message(self) -> dict[str, object]:
        return {"event": self.name, "data": self.data}


def vote_updated(photo_id: str, summary: VoteSummary) -> LedgerEvent:
    return LedgerEvent(
        name=VOTE_UPDATED,
        data={"photo_id": photo_id, "data": summary.as_dict()},
    )


def photo_added(photo: PhotoRecord) -> LedgerEvent:
    return LedgerEvent(
        name=PHOTO_ADDED,
        data={"id": photo.id, "src": photo.src, "votes": 0, "voted": False},
    )


def photo_deleted(photo_id: str) -> LedgerEvent:
    return LedgerEvent(name=PHOTO_DELETED, data={"id": photo_id})
