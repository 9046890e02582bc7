"""In-memory store."""

from typing import Iterable, Optional, Sequence, Tuple

from ..core.layout import Table
from ..core.queue import QueueEntry


class InMemoryStore:
    """Holds tables and entries as tuples, swapped wholesale on commit."""

    def __init__(
        self,
        tables: Sequence[Table] = (),
        entries: Sequence[QueueEntry] = (),
    ):
        self._tables: Tuple[Table, ...] = tuple(tables)
        self._entries: Tuple[QueueEntry, ...] = tuple(entries)
        self._last_id = max((e.id for e in self._entries), default=0)
        self.commit_count = 0

    def get_tables(self) -> Tuple[Table, ...]:
        return self._tables

    def get_entries(self) -> Tuple[QueueEntry, ...]:
        return self._entries

    def next_entry_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def add_entry(self, entry: QueueEntry) -> None:
        self._entries = self._entries + (entry,)
        self._last_id = max(self._last_id, entry.id)

    def commit(
        self,
        tables: Optional[Sequence[Table]] = None,
        remove_entry_ids: Iterable[int] = (),
    ) -> None:
        removed = set(remove_entry_ids)
        if tables is not None:
            self._tables = tuple(tables)
        if removed:
            self._entries = tuple(e for e in self._entries if e.id not in removed)
        self.commit_count += 1
