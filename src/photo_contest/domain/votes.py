"""Domain models for the vote ledger."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class VoteSummary:
    """Public tally of a photo as seen by one caller."""

    votes: int
    voted: bool

    def as_dict(self) -> dict[str, object]:
        return {"votes": self.votes, "voted": self.voted}


@dataclass
class VoteLedger:
    """Mapping of photo id to the ids of users who voted for it."""

    entries: dict[str, list[str]] = field(default_factory=dict)

    def voters(self, photo_id: str) -> list[str]:
        """Return the voter list for a photo, creating an empty one if needed."""
        return self.entries.setdefault(photo_id, [])

    def toggle(self, photo_id: str, user_id: str) -> bool:
        """Flip the user's vote and return whether it is now cast."""
        voters = self.voters(photo_id)
        if user_id in voters:
            voters.remove(user_id)
            return False
        voters.append(user_id)
        return True

    def summary(self, photo_id: str, user_id: str | None) -> VoteSummary:
        voters = self.entries.get(photo_id, [])
        return VoteSummary(
            votes=len(voters),
            voted=user_id is not None and user_id in voters,
        )

    def discard(self, photo_id: str) -> None:
        self.entries.pop(photo_id, None)
