"""SQL-backed store using SQLAlchemy."""

import logging
from typing import Iterable, Optional, Sequence, Tuple

from sqlalchemy import delete, select

from ..core.layout import Table
from ..core.queue import QueueEntry
from ..models import Counter, QueueEntryRecord, TableRecord, create_session_factory

logger = logging.getLogger(__name__)

ENTRY_COUNTER = "queue_entry_id"


class SqlStore:
    """
    Store persisting tables and entries through SQLAlchemy.

    Tables are kept in layout order via their ``position`` column. A commit
    runs in a single transaction.
    """

    def __init__(self, database_url: str = "sqlite:///:memory:"):
        self.database_url = database_url
        self._session_factory = create_session_factory(database_url)

    def get_tables(self) -> Tuple[Table, ...]:
        with self._session_factory() as session:
            records = session.scalars(select(TableRecord).order_by(TableRecord.position))
            return tuple(r.to_domain() for r in records)

    def get_entries(self) -> Tuple[QueueEntry, ...]:
        with self._session_factory() as session:
            records = session.scalars(select(QueueEntryRecord).order_by(QueueEntryRecord.id))
            return tuple(r.to_domain() for r in records)

    def next_entry_id(self) -> int:
        with self._session_factory.begin() as session:
            counter = session.get(Counter, ENTRY_COUNTER)
            if counter is None:
                counter = Counter(name=ENTRY_COUNTER, value=0)
                session.add(counter)
            counter.value += 1
            return counter.value

    def add_entry(self, entry: QueueEntry) -> None:
        with self._session_factory.begin() as session:
            session.add(QueueEntryRecord.from_domain(entry))
            counter = session.get(Counter, ENTRY_COUNTER)
            if counter is None:
                session.add(Counter(name=ENTRY_COUNTER, value=entry.id))
            elif counter.value < entry.id:
                counter.value = entry.id

    def commit(
        self,
        tables: Optional[Sequence[Table]] = None,
        remove_entry_ids: Iterable[int] = (),
    ) -> None:
        removed = list(remove_entry_ids)
        with self._session_factory.begin() as session:
            if tables is not None:
                keep_ids = [t.id for t in tables]
                session.execute(delete(TableRecord).where(TableRecord.id.not_in(keep_ids)))
                for position, table in enumerate(tables):
                    session.merge(TableRecord.from_domain(table, position))
            if removed:
                session.execute(
                    delete(QueueEntryRecord).where(QueueEntryRecord.id.in_(removed))
                )
        logger.debug(
            "Committed %s tables, removed %s entries",
            "no" if tables is None else len(tables),
            len(removed),
        )
