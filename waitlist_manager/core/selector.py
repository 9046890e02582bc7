"""Table selection policy for a single queue entry."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .layout import Table, find_adjacent_tables, find_table
from .preferences import ParsedPreference, parse_special_requests
from .queue import QueueEntry

logger = logging.getLogger(__name__)


class SeatingOutcome(str, Enum):
    """Outcome tags reported by the selector and the engine."""

    SEATED_REQUESTED = "seated-requested"
    SEATED_NEAR = "seated-near"
    SEATED_FALLBACK = "seated-fallback"
    REQUESTED_OCCUPIED = "requested-occupied"
    REQUESTED_TOO_SMALL = "requested-too-small"
    NEAR_GUEST_NOT_FOUND = "near-guest-not-found"
    NEAR_GUEST_NO_TABLE = "near-guest-no-table"
    NO_TABLE_AVAILABLE = "no-table-available"
    ENTRY_NOT_FOUND = "entry-not-found"

    @property
    def is_seated(self) -> bool:
        return self in (
            SeatingOutcome.SEATED_REQUESTED,
            SeatingOutcome.SEATED_NEAR,
            SeatingOutcome.SEATED_FALLBACK,
        )


@dataclass
class Selection:
    """Result of running the selector for one entry."""

    table: Optional[Table]
    outcome: SeatingOutcome
    preference: ParsedPreference = field(default_factory=ParsedPreference)

    # Preference misses recorded before the final outcome, in order
    notes: List[SeatingOutcome] = field(default_factory=list)

    # Table referenced by a preference miss, for staff-facing messages
    requested_table: Optional[Table] = None
    near_guest_table: Optional[Table] = None


class TableSelector:
    """
    Picks one table for a queue entry.

    Priority order, first success wins:
    1. The table named in the special request, if free and large enough
    2. The first free table adjacent to the named guest's table, if large enough
    3. The first free table in layout order that fits the party

    Ties are always broken by layout order, never by distance.
    """

    def select(self, entry: QueueEntry, tables: Sequence[Table]) -> Selection:
        preference = parse_special_requests(entry.special_requests)
        selection = Selection(table=None, outcome=SeatingOutcome.NO_TABLE_AVAILABLE, preference=preference)

        if preference.requested_table_id:
            if self._try_requested(entry, tables, selection):
                return selection

        if preference.near_guest_name:
            if self._try_near(entry, tables, selection):
                return selection

        for table in tables:
            if not table.occupied and table.fits(entry.party_size):
                selection.table = table
                selection.outcome = SeatingOutcome.SEATED_FALLBACK
                return selection

        logger.debug(
            "No table for entry %s (party of %s)", entry.id, entry.party_size
        )
        return selection

    def _try_requested(
        self, entry: QueueEntry, tables: Sequence[Table], selection: Selection
    ) -> bool:
        requested = find_table(tables, selection.preference.requested_table_id)
        if requested is None:
            # Unknown ids fall through silently
            return False

        selection.requested_table = requested
        if requested.occupied:
            selection.notes.append(SeatingOutcome.REQUESTED_OCCUPIED)
            return False
        if not requested.fits(entry.party_size):
            selection.notes.append(SeatingOutcome.REQUESTED_TOO_SMALL)
            return False

        selection.table = requested
        selection.outcome = SeatingOutcome.SEATED_REQUESTED
        return True

    def _try_near(
        self, entry: QueueEntry, tables: Sequence[Table], selection: Selection
    ) -> bool:
        target = selection.preference.near_guest_name.lower()
        guest_table = next(
            (
                t
                for t in tables
                if t.occupied and t.guest_name and target in t.guest_name.lower()
            ),
            None,
        )
        if guest_table is None:
            selection.notes.append(SeatingOutcome.NEAR_GUEST_NOT_FOUND)
            return False

        selection.near_guest_table = guest_table
        candidates = find_adjacent_tables(guest_table, tables)
        if not candidates or not candidates[0].fits(entry.party_size):
            selection.notes.append(SeatingOutcome.NEAR_GUEST_NO_TABLE)
            return False

        selection.table = candidates[0]
        selection.outcome = SeatingOutcome.SEATED_NEAR
        return True
