"""Vote toggling and vote read views."""

import logging
from dataclasses import dataclass
from typing import Protocol

from photo_contest.domain.errors import InvalidArgument, Unauthenticated
from photo_contest.domain.events import vote_updated
from photo_contest.domain.models import Identity
from photo_contest.domain.votes import VoteLedger, VoteSummary
from photo_contest.services.notifier import Notifier

_logger = logging.getLogger(__name__)


class VoteRepository(Protocol):
    """Whole-ledger persistence for votes."""

    def load(self) -> VoteLedger:
        """Read the full vote ledger."""

    def save(self, ledger: VoteLedger) -> None:
        """Replace the stored vote ledger."""


@dataclass
class VoteService:
    """Applies vote toggles and builds per-caller vote views.

    Every call reloads the ledger and mutations rewrite it in full. No lock is
    taken, so two writers racing on the same file resolve as last writer wins.
    """

    repository: VoteRepository
    notifier: Notifier

    async def toggle_vote(
        self, photo_id: str | None, identity: Identity | None
    ) -> VoteSummary:
        """Cast the caller's vote, or retract it if already cast."""
        if identity is None:
            raise Unauthenticated("Sign in to vote.")
        if not photo_id:
            raise InvalidArgument("photo_id is required.")

        ledger = self.repository.load()
        voted = ledger.toggle(photo_id, identity.user_id)
        self.repository.save(ledger)

        summary = ledger.summary(photo_id, identity.user_id)
        _logger.info(
            "Vote toggled: photo_id=%s user_id=%s voted=%s votes=%s",
            photo_id,
            identity.user_id,
            voted,
            summary.votes,
        )
        await self.notifier.notify(vote_updated(photo_id, summary))
        return summary

    def get_vote_summary(self, identity: Identity | None) -> dict[str, VoteSummary]:
        """Return every photo's tally with the caller's voted flag."""
        ledger = self.repository.load()
        user_id = identity.user_id if identity else None
        return {
            photo_id: ledger.summary(photo_id, user_id) for photo_id in ledger.entries
        }
