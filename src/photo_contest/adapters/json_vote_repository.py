"""JSON file vote ledger."""

from dataclasses import dataclass
from pathlib import Path

from photo_contest.adapters.json_files import read_json, write_json
from photo_contest.domain.votes import VoteLedger
from photo_contest.services.votes import VoteRepository


@dataclass
class JsonVoteRepository(VoteRepository):
    """Stores the vote ledger as ``{photo_id: {"voters": [...]}}``."""

    path: Path

    def load(self) -> VoteLedger:
        """Read the full vote ledger."""
        rows = read_json(self.path, {})
        if not isinstance(rows, dict):
            raise ValueError(f"Vote ledger {self.path} is not an object")
        entries: dict[str, list[str]] = {}
        for photo_id, entry in rows.items():
            voters = entry.get("voters", []) if isinstance(entry, dict) else []
            entries[str(photo_id)] = [str(voter) for voter in voters]
        return VoteLedger(entries=entries)

    def save(self, ledger: VoteLedger) -> None:
        """Rewrite the vote ledger file."""
        write_json(
            self.path,
            {
                photo_id: {"voters": list(voters)}
                for photo_id, voters in ledger.entries.items()
            },
        )
