"""Store interface the assignment engine reads from and commits to."""

from typing import Iterable, Optional, Protocol, Sequence, Tuple

from ..core.layout import Table
from ..core.queue import QueueEntry


class Store(Protocol):
    """
    Owner of the table layout and the queue.

    The engine only ever reads snapshots and hands back one ``commit`` per
    operation; implementations must apply a commit atomically.
    """

    def get_tables(self) -> Tuple[Table, ...]:
        ...

    def get_entries(self) -> Tuple[QueueEntry, ...]:
        ...

    def next_entry_id(self) -> int:
        """Reserve the next monotonic entry id."""
        ...

    def add_entry(self, entry: QueueEntry) -> None:
        ...

    def commit(
        self,
        tables: Optional[Sequence[Table]] = None,
        remove_entry_ids: Iterable[int] = (),
    ) -> None:
        """Replace the table collection and/or remove entries in one step."""
        ...
