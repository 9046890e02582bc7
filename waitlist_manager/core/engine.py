"""Assignment engine: seats queue entries and manages the table layout."""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from .layout import (
    GRID_COLUMNS,
    Table,
    find_table,
    replace_table,
    resize_tables,
)
from .queue import (
    EntryType,
    QueueEntry,
    entries_of_type,
    find_entry,
    position_in_queue,
    requests_first,
)
from .selector import Selection, SeatingOutcome, TableSelector

if TYPE_CHECKING:
    from ..store.base import Store

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PromotionResult:
    """Result of promoting a single entry."""

    entry_id: int
    success: bool
    outcome: SeatingOutcome
    table_id: Optional[int] = None
    entry: Optional[QueueEntry] = None
    table: Optional[Table] = None
    notes: List[SeatingOutcome] = field(default_factory=list)
    selection: Optional[Selection] = None

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "success": self.success,
            "table_id": self.table_id,
            "outcome": self.outcome.value,
            "notes": [n.value for n in self.notes],
        }


@dataclass
class BatchResult:
    """Result of seating every entry of one type."""

    entry_type: EntryType
    seated_entry_ids: List[int] = field(default_factory=list)
    failed_entry_ids: List[int] = field(default_factory=list)
    assignments: Dict[int, int] = field(default_factory=dict)  # entry_id -> table_id
    nothing_to_do: bool = False

    @property
    def seated_count(self) -> int:
        return len(self.seated_entry_ids)

    @property
    def failed_count(self) -> int:
        return len(self.failed_entry_ids)

    def to_dict(self) -> dict:
        return {
            "type": self.entry_type.value,
            "seated_count": self.seated_count,
            "failed_count": self.failed_count,
            "seated_entry_ids": self.seated_entry_ids,
            "failed_entry_ids": self.failed_entry_ids,
            "assignments": self.assignments,
            "nothing_to_do": self.nothing_to_do,
        }


class AssignmentEngine:
    """
    Seats guests from the queue onto tables.

    The engine holds no state of its own: every operation reads a snapshot
    from the store and applies at most one ``Store.commit``. Lookup misses
    and out-of-range configuration are no-ops reported through return
    values, never exceptions.
    """

    def __init__(
        self,
        store: "Store",
        selector: Optional[TableSelector] = None,
        clock: Callable[[], datetime] = utc_now,
        columns: int = GRID_COLUMNS,
        min_tables: int = 1,
        max_tables: int = 24,
        min_capacity: int = 1,
        max_capacity: int = 20,
        base_wait_minutes: int = 15,
        wait_minutes_per_party: int = 5,
    ):
        self.store = store
        self.selector = selector or TableSelector()
        self.clock = clock
        self.columns = columns
        self.min_tables = min_tables
        self.max_tables = max_tables
        self.min_capacity = min_capacity
        self.max_capacity = max_capacity
        self.base_wait_minutes = base_wait_minutes
        self.wait_minutes_per_party = wait_minutes_per_party

    # ------------------------------------------------------------------
    # Queue
    # ------------------------------------------------------------------

    def join(
        self,
        name: str,
        party_size: int,
        special_requests: Optional[str] = None,
        entry_type: EntryType = EntryType.WAITLIST,
    ) -> QueueEntry:
        """Add a party to the queue and return the new entry."""
        queued = len(self.store.get_entries())
        if special_requests is not None and not special_requests.strip():
            special_requests = None

        entry = QueueEntry(
            id=self.store.next_entry_id(),
            name=name,
            party_size=party_size,
            joined_at=self.clock(),
            estimated_wait=self.base_wait_minutes + queued * self.wait_minutes_per_party,
            type=entry_type,
            special_requests=special_requests,
        )
        self.store.add_entry(entry)
        logger.info("%s joined the %s queue (party of %s)", name, entry_type.value, party_size)
        return entry

    def position(self, entry_id: int) -> Optional[int]:
        return position_in_queue(self.store.get_entries(), entry_id)

    def no_show(self, entry_id: int) -> bool:
        """Remove an entry without seating it."""
        if find_entry(self.store.get_entries(), entry_id) is None:
            return False
        self.store.commit(remove_entry_ids=[entry_id])
        logger.info("Entry %s marked no-show", entry_id)
        return True

    def cancel(self, entry_id: int) -> bool:
        """Guest-initiated removal from the queue."""
        if find_entry(self.store.get_entries(), entry_id) is None:
            return False
        self.store.commit(remove_entry_ids=[entry_id])
        logger.info("Entry %s cancelled", entry_id)
        return True

    # ------------------------------------------------------------------
    # Promotion
    # ------------------------------------------------------------------

    def promote(self, entry_id: int) -> PromotionResult:
        """Seat one entry at the table chosen by the selector."""
        entry = find_entry(self.store.get_entries(), entry_id)
        if entry is None:
            return PromotionResult(
                entry_id=entry_id, success=False, outcome=SeatingOutcome.ENTRY_NOT_FOUND
            )

        tables = self.store.get_tables()
        selection = self.selector.select(entry, tables)
        if selection.table is None:
            logger.info(
                "Could not seat %s (party of %s): %s",
                entry.name,
                entry.party_size,
                selection.outcome.value,
            )
            return PromotionResult(
                entry_id=entry_id,
                success=False,
                outcome=selection.outcome,
                entry=entry,
                notes=list(selection.notes),
                selection=selection,
            )

        seated = selection.table.occupy(
            self.clock(), guest_name=entry.name, party_size=entry.party_size
        )
        self.store.commit(
            tables=replace_table(tables, seated), remove_entry_ids=[entry_id]
        )
        logger.info("Seated %s at %s (%s)", entry.name, seated.name, selection.outcome.value)

        return PromotionResult(
            entry_id=entry_id,
            success=True,
            outcome=selection.outcome,
            table_id=seated.id,
            entry=entry,
            table=seated,
            notes=list(selection.notes),
            selection=selection,
        )

    def seat_all(self, entry_type: EntryType = EntryType.RESERVATION) -> BatchResult:
        """
        Seat every queued entry of ``entry_type`` in one commit.

        Entries with special requests go first, otherwise queue order is
        kept. Each selection runs against a working copy of the tables that
        already reflects earlier seatings in the batch, so no table is
        handed out twice. Nothing is committed when no entry could be seated.
        """
        result = BatchResult(entry_type=entry_type)
        candidates = entries_of_type(self.store.get_entries(), entry_type)
        if not candidates:
            result.nothing_to_do = True
            return result

        working = self.store.get_tables()
        for entry in requests_first(candidates):
            selection = self.selector.select(entry, working)
            if selection.table is None:
                result.failed_entry_ids.append(entry.id)
                continue

            seated = selection.table.occupy(
                self.clock(), guest_name=entry.name, party_size=entry.party_size
            )
            working = replace_table(working, seated)
            result.seated_entry_ids.append(entry.id)
            result.assignments[entry.id] = seated.id

        if result.seated_entry_ids:
            self.store.commit(tables=working, remove_entry_ids=result.seated_entry_ids)

        logger.info(
            "Seat all %s: %d seated, %d failed",
            entry_type.value,
            result.seated_count,
            result.failed_count,
        )
        return result

    # ------------------------------------------------------------------
    # Table lifecycle
    # ------------------------------------------------------------------

    def _update_table(self, table_id: int, update: Callable[[Table], Table]) -> bool:
        tables = self.store.get_tables()
        table = find_table(tables, table_id)
        if table is None:
            return False
        self.store.commit(tables=replace_table(tables, update(table)))
        return True

    def clear_table(self, table_id: int) -> bool:
        return self._update_table(table_id, lambda t: t.clear())

    def clear_all_tables(self) -> int:
        """Clear every occupied table; returns how many were cleared."""
        tables = self.store.get_tables()
        occupied = sum(1 for t in tables if t.occupied)
        if occupied:
            self.store.commit(tables=[t.clear() for t in tables])
        return occupied

    def occupy_manually(self, table_id: int) -> bool:
        """Mark a table occupied without guest details (walk-in)."""
        return self._update_table(table_id, lambda t: t.occupy(self.clock()))

    def update_table(
        self,
        table_id: int,
        name: Optional[str] = None,
        capacity: Optional[int] = None,
    ) -> bool:
        """Rename a table and/or change its capacity in one commit."""
        if capacity is not None and not self.min_capacity <= capacity <= self.max_capacity:
            return False

        def update(table: Table) -> Table:
            if name is not None:
                table = replace(table, name=name)
            if capacity is not None:
                table = replace(table, capacity=capacity)
            return table

        return self._update_table(table_id, update)

    def rename_table(self, table_id: int, name: str) -> bool:
        return self.update_table(table_id, name=name)

    def update_capacity(self, table_id: int, capacity: int) -> bool:
        return self.update_table(table_id, capacity=capacity)

    def resize_layout(self, count: int) -> bool:
        if not self.min_tables <= count <= self.max_tables:
            return False
        self.store.commit(tables=resize_tables(self.store.get_tables(), count, self.columns))
        logger.info("Layout resized to %d tables", count)
        return True
