"""Staff-facing notifications for seating outcomes and table changes."""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Deque, Dict, List, Optional

from ..core.engine import BatchResult, PromotionResult
from ..core.queue import EntryType
from ..core.selector import SeatingOutcome

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    """Severity shown to staff."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Notification:
    """Notification data structure."""

    id: str
    message: str
    level: NotificationLevel
    table_id: Optional[int] = None
    entry_id: Optional[int] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "message": self.message,
            "level": self.level.value,
            "table_id": self.table_id,
            "entry_id": self.entry_id,
            "created_at": self.created_at.isoformat(),
            "metadata": self.metadata,
        }


def _plural(count: int, entry_type: EntryType) -> str:
    if entry_type == EntryType.RESERVATION:
        noun = "reservation" if count == 1 else "reservations"
    else:
        noun = "waitlist party" if count == 1 else "waitlist parties"
    return f"{count} {noun}"


class NotificationService:
    """Turns engine results into messages and keeps a bounded history."""

    def __init__(self, max_history: int = 200):
        self.history: Deque[Notification] = deque(maxlen=max_history)
        self._counter = 0

    def _generate_id(self) -> str:
        """Generate unique notification ID."""
        self._counter += 1
        return f"notif_{datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S')}_{self._counter}"

    def send(
        self,
        message: str,
        level: NotificationLevel = NotificationLevel.INFO,
        table_id: Optional[int] = None,
        entry_id: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Notification:
        notification = Notification(
            id=self._generate_id(),
            message=message,
            level=level,
            table_id=table_id,
            entry_id=entry_id,
            metadata=metadata or {},
        )
        self.history.append(notification)
        logger.debug("[%s] %s", level.value, message)
        return notification

    def for_promotion(self, result: PromotionResult) -> List[Notification]:
        """Messages for a single promotion, preference misses first."""
        if result.outcome == SeatingOutcome.ENTRY_NOT_FOUND:
            return []

        notifications = []
        selection = result.selection
        for note in result.notes:
            if note == SeatingOutcome.REQUESTED_OCCUPIED:
                message = f"Requested {selection.requested_table.name} is occupied. Finding alternative..."
            elif note == SeatingOutcome.REQUESTED_TOO_SMALL:
                message = f"Requested {selection.requested_table.name} is too small. Finding alternative..."
            elif note == SeatingOutcome.NEAR_GUEST_NO_TABLE:
                message = (
                    f"No tables available near {selection.near_guest_table.guest_name}. "
                    "Finding alternative..."
                )
            else:
                message = (
                    f'Guest "{selection.preference.near_guest_name}" not found or not yet seated.'
                )
            notifications.append(
                self.send(message, NotificationLevel.INFO, entry_id=result.entry_id)
            )

        entry = result.entry
        if not result.success:
            notifications.append(
                self.send(
                    f"No tables available for party of {entry.party_size}",
                    NotificationLevel.ERROR,
                    entry_id=result.entry_id,
                )
            )
            return notifications

        if result.outcome == SeatingOutcome.SEATED_REQUESTED:
            message = f"{entry.name} seated at requested {result.table.name}"
        elif result.outcome == SeatingOutcome.SEATED_NEAR:
            message = (
                f"{entry.name} seated near {selection.near_guest_table.guest_name} "
                f"at {result.table.name}"
            )
        elif selection.preference.requested_table_id or selection.preference.near_guest_name:
            # Fallback after a stated preference: the miss messages stand alone
            return notifications
        else:
            message = f"{entry.name} seated at {result.table.name}"
        notifications.append(
            self.send(
                message,
                NotificationLevel.SUCCESS,
                table_id=result.table_id,
                entry_id=result.entry_id,
            )
        )
        return notifications

    def for_batch(self, result: BatchResult) -> List[Notification]:
        if result.nothing_to_do:
            noun = "reservations" if result.entry_type == EntryType.RESERVATION else "waitlist parties"
            return [self.send(f"No {noun} to seat", NotificationLevel.INFO)]

        notifications = []
        if result.seated_count:
            notifications.append(
                self.send(
                    f"Seated {_plural(result.seated_count, result.entry_type)}",
                    NotificationLevel.SUCCESS,
                    metadata={"seated_entry_ids": list(result.seated_entry_ids)},
                )
            )
        if result.failed_count:
            notifications.append(
                self.send(
                    f"{_plural(result.failed_count, result.entry_type)} could not be seated "
                    "(no available tables)",
                    NotificationLevel.WARNING,
                    metadata={"failed_entry_ids": list(result.failed_entry_ids)},
                )
            )
        return notifications

    def get_recent(self, limit: int = 50) -> List[Notification]:
        if limit <= 0:
            return []
        return list(self.history)[-limit:]
