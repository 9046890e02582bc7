"""Table layout: the grid of physical tables and their occupancy."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

# Default capacity per grid slot, indexed by position in the layout
DEFAULT_CAPACITIES = [2, 2, 4, 4, 2, 4, 6, 6, 4, 4, 6, 8, 2, 4, 4, 6, 2, 4, 6, 8, 4, 4, 6, 8]
FALLBACK_CAPACITY = 4
GRID_COLUMNS = 4


@dataclass(frozen=True)
class Table:
    """A physical table on the venue grid."""

    id: int
    row: int
    col: int
    name: str
    capacity: int
    occupied: bool = False

    # Only set while occupied
    guest_name: Optional[str] = None
    party_size: Optional[int] = None
    seated_at: Optional[datetime] = None

    def occupy(
        self,
        seated_at: datetime,
        guest_name: Optional[str] = None,
        party_size: Optional[int] = None,
    ) -> "Table":
        """Return a copy of this table seated with the given guest."""
        return replace(
            self,
            occupied=True,
            guest_name=guest_name,
            party_size=party_size,
            seated_at=seated_at,
        )

    def clear(self) -> "Table":
        """Return a copy of this table with occupancy removed."""
        return replace(
            self, occupied=False, guest_name=None, party_size=None, seated_at=None
        )

    def fits(self, party_size: int) -> bool:
        return self.capacity >= party_size

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "row": self.row,
            "col": self.col,
            "name": self.name,
            "capacity": self.capacity,
            "occupied": self.occupied,
            "guest_name": self.guest_name,
            "party_size": self.party_size,
            "seated_at": self.seated_at.isoformat() if self.seated_at else None,
        }


def grid_position(index: int, columns: int = GRID_COLUMNS) -> Tuple[int, int]:
    """Row and column for the table at ``index`` in a fixed-width grid."""
    return index // columns, index % columns


def default_capacity(index: int) -> int:
    if index < len(DEFAULT_CAPACITIES):
        return DEFAULT_CAPACITIES[index]
    return FALLBACK_CAPACITY


def new_table(index: int, columns: int = GRID_COLUMNS) -> Table:
    """Fresh, unoccupied table for grid slot ``index``."""
    row, col = grid_position(index, columns)
    return Table(
        id=index + 1,
        row=row,
        col=col,
        name=f"Table {index + 1}",
        capacity=default_capacity(index),
    )


def build_default_tables(count: int = 12, columns: int = GRID_COLUMNS) -> Tuple[Table, ...]:
    """Create the initial layout of ``count`` tables."""
    return tuple(new_table(i, columns) for i in range(count))


def resize_tables(
    tables: Sequence[Table], count: int, columns: int = GRID_COLUMNS
) -> Tuple[Table, ...]:
    """
    Resize the layout to ``count`` tables.

    Surviving indices keep their name, capacity and occupancy; ids are
    renumbered to ``index + 1`` and grid positions re-derived from
    ``columns``. New slots get the default capacity for their index.
    """
    resized: List[Table] = []
    for i in range(count):
        if i < len(tables):
            row, col = grid_position(i, columns)
            resized.append(replace(tables[i], id=i + 1, row=row, col=col))
        else:
            resized.append(new_table(i, columns))
    return tuple(resized)


def find_table(tables: Iterable[Table], table_id: int) -> Optional[Table]:
    for table in tables:
        if table.id == table_id:
            return table
    return None


def replace_table(tables: Sequence[Table], updated: Table) -> Tuple[Table, ...]:
    """Return a new collection with the table of the same id swapped out."""
    return tuple(updated if t.id == updated.id else t for t in tables)


def find_adjacent_tables(reference: Table, tables: Iterable[Table]) -> List[Table]:
    """
    Free tables within one row and one column of ``reference``.

    Diagonals count as adjacent. The reference slot itself is never
    returned. Order follows ``tables``; callers take the first candidate.
    """
    candidates = []
    for t in tables:
        if t.occupied:
            continue
        row_diff = abs(t.row - reference.row)
        col_diff = abs(t.col - reference.col)
        if row_diff <= 1 and col_diff <= 1 and not (row_diff == 0 and col_diff == 0):
            candidates.append(t)
    return candidates
