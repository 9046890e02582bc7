"""Staff dashboard summary and the venue occupancy counter."""

from datetime import datetime, timezone
from typing import Any, Dict

from ..core.queue import EntryType, entries_of_type
from ..store.base import Store


class OccupancyCounter:
    """Head count kept by staff at the door, bounded by venue capacity."""

    def __init__(self, current: int = 0, capacity: int = 100):
        self.capacity = capacity
        self.current = max(0, min(current, capacity))

    def increment(self) -> bool:
        if self.current >= self.capacity:
            return False
        self.current += 1
        return True

    def decrement(self) -> bool:
        if self.current <= 0:
            return False
        self.current -= 1
        return True

    @property
    def percent(self) -> float:
        if self.capacity == 0:
            return 100.0
        return round(self.current / self.capacity * 100, 1)

    def to_dict(self) -> Dict[str, Any]:
        return {"current": self.current, "capacity": self.capacity, "percent": self.percent}


class DashboardService:
    """Builds the staff dashboard from a store snapshot."""

    def __init__(self, store: Store, occupancy: OccupancyCounter):
        self.store = store
        self.occupancy = occupancy

    def get_dashboard(self) -> Dict[str, Any]:
        tables = self.store.get_tables()
        entries = self.store.get_entries()
        occupied = [t for t in tables if t.occupied]

        return {
            "occupancy": self.occupancy.to_dict(),
            "queues": {
                "reservations_queued": len(entries_of_type(entries, EntryType.RESERVATION)),
                "waitlist_queued": len(entries_of_type(entries, EntryType.WAITLIST)),
            },
            "tables": {
                "total": len(tables),
                "occupied": len(occupied),
                "available": len(tables) - len(occupied),
                "all_occupied": bool(tables) and len(occupied) == len(tables),
                "seated_guests": sum(t.party_size or 0 for t in occupied),
            },
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
