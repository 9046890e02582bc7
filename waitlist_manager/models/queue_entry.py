"""Queue entry and id counter models."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum as SQLEnum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.queue import EntryType, QueueEntry
from .base import Base
from .table import as_utc


class QueueEntryRecord(Base):
    """Waitlist or reservation entry row."""

    __tablename__ = "queue_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    estimated_wait: Mapped[int] = mapped_column(Integer, default=0)
    type: Mapped[EntryType] = mapped_column(SQLEnum(EntryType), nullable=False)
    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @classmethod
    def from_domain(cls, entry: QueueEntry) -> "QueueEntryRecord":
        return cls(
            id=entry.id,
            name=entry.name,
            party_size=entry.party_size,
            joined_at=entry.joined_at,
            estimated_wait=entry.estimated_wait,
            type=entry.type,
            special_requests=entry.special_requests,
        )

    def to_domain(self) -> QueueEntry:
        return QueueEntry(
            id=self.id,
            name=self.name,
            party_size=self.party_size,
            joined_at=as_utc(self.joined_at),
            estimated_wait=self.estimated_wait,
            type=self.type,
            special_requests=self.special_requests,
        )


class Counter(Base):
    """Named monotonic counters; entry ids are never reused."""

    __tablename__ = "counters"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, default=0)
