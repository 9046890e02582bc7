"""Table model for venue tables."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.layout import Table
from .base import Base


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; they were written as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TableRecord(Base):
    """Venue table row."""

    __tablename__ = "tables"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    row: Mapped[int] = mapped_column(Integer, nullable=False)
    col: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, default=4)

    # Occupancy
    occupied: Mapped[bool] = mapped_column(Boolean, default=False)
    guest_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    party_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    seated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @classmethod
    def from_domain(cls, table: Table, position: int) -> "TableRecord":
        return cls(
            id=table.id,
            position=position,
            row=table.row,
            col=table.col,
            name=table.name,
            capacity=table.capacity,
            occupied=table.occupied,
            guest_name=table.guest_name,
            party_size=table.party_size,
            seated_at=table.seated_at,
        )

    def to_domain(self) -> Table:
        return Table(
            id=self.id,
            row=self.row,
            col=self.col,
            name=self.name,
            capacity=self.capacity,
            occupied=self.occupied,
            guest_name=self.guest_name,
            party_size=self.party_size,
            seated_at=as_utc(self.seated_at),
        )
