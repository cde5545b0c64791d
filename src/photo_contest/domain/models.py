"""Domain models for the photo contest."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Authenticated user as reported by an OAuth provider."""

    provider: str
    subject_id: str
    name: str

    @property
    def user_id(self) -> str:
        """Key used for vote attribution."""
        return f"{self.provider}:{self.subject_id}"
