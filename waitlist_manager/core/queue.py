"""Queue entries waiting for a table."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional, Sequence


class EntryType(str, Enum):
    """Which queue an entry belongs to."""

    RESERVATION = "reservation"
    WAITLIST = "waitlist"


class EntryStatus(str, Enum):
    """Entry status as exposed to remote clients."""

    QUEUED = "QUEUED"
    NOTIFIED = "NOTIFIED"
    SEATED = "SEATED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"
    NO_SHOW = "NO_SHOW"


@dataclass(frozen=True)
class QueueEntry:
    """A guest party waiting for a table."""

    id: int
    name: str
    party_size: int
    joined_at: datetime
    estimated_wait: int  # minutes, advisory only
    type: EntryType = EntryType.WAITLIST
    special_requests: Optional[str] = None

    @property
    def has_special_requests(self) -> bool:
        return bool(self.special_requests and self.special_requests.strip())

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "name": self.name,
            "party_size": self.party_size,
            "joined_at": self.joined_at.isoformat(),
            "estimated_wait": self.estimated_wait,
            "type": self.type.value,
            "special_requests": self.special_requests,
        }


def find_entry(entries: Iterable[QueueEntry], entry_id: int) -> Optional[QueueEntry]:
    for entry in entries:
        if entry.id == entry_id:
            return entry
    return None


def entries_of_type(entries: Iterable[QueueEntry], entry_type: EntryType) -> List[QueueEntry]:
    return [e for e in entries if e.type == entry_type]


def position_in_queue(entries: Sequence[QueueEntry], entry_id: int) -> Optional[int]:
    """1-based position of an entry among entries of the same type."""
    entry = find_entry(entries, entry_id)
    if entry is None:
        return None
    same_type = entries_of_type(entries, entry.type)
    return [e.id for e in same_type].index(entry_id) + 1


def requests_first(entries: Sequence[QueueEntry]) -> List[QueueEntry]:
    """Stable order putting entries with special requests ahead of the rest."""
    return sorted(entries, key=lambda e: not e.has_special_requests)
