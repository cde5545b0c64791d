"""Real-time notification interface."""

from typing import Protocol

from photo_contest.domain.events import LedgerEvent


class Notifier(Protocol):
    """Broadcasts ledger deltas to every connected viewer."""

    async def notify(self, event: LedgerEvent) -> None:
        """Send an event to all viewers, best effort."""
