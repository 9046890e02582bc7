"""Wires a store, the assignment engine and the services for one venue."""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from ..config import Settings
from ..core.engine import AssignmentEngine
from ..core.layout import build_default_tables
from ..core.queue import EntryType, QueueEntry
from ..store import InMemoryStore, SqlStore, Store
from .dashboard import DashboardService, OccupancyCounter
from .notification import NotificationService

logger = logging.getLogger(__name__)

# (name, party size, minutes since joining, estimated wait, type)
DEMO_ENTRIES = [
    ("Sarah Johnson", 4, 15, 25, EntryType.WAITLIST),
    ("Michael Chen", 2, 10, 20, EntryType.RESERVATION),
    ("Emily Rodriguez", 6, 8, 30, EntryType.WAITLIST),
    ("David Thompson", 3, 5, 15, EntryType.RESERVATION),
    ("Jessica Lee", 2, 3, 12, EntryType.WAITLIST),
]


@dataclass
class Venue:
    """Everything the HTTP layer needs for one venue."""

    store: Store
    engine: AssignmentEngine
    notifications: NotificationService
    occupancy: OccupancyCounter
    dashboard: DashboardService


def create_venue(settings: Settings, store: Optional[Store] = None) -> Venue:
    """Build a venue from settings, using an in-memory store unless a database is configured."""
    if store is None:
        if settings.database_url:
            store = SqlStore(settings.database_url)
        else:
            store = InMemoryStore()

    engine = AssignmentEngine(
        store,
        columns=settings.grid_columns,
        min_tables=settings.min_tables,
        max_tables=settings.max_tables,
        min_capacity=settings.min_table_capacity,
        max_capacity=settings.max_table_capacity,
        base_wait_minutes=settings.base_wait_minutes,
        wait_minutes_per_party=settings.wait_minutes_per_party,
    )
    occupancy = OccupancyCounter(
        current=settings.venue_initial_occupancy,
        capacity=settings.venue_max_capacity,
    )
    return Venue(
        store=store,
        engine=engine,
        notifications=NotificationService(max_history=settings.notification_history_size),
        occupancy=occupancy,
        dashboard=DashboardService(store, occupancy),
    )


def initialize_sample_data(venue: Venue, table_count: int = 12, columns: int = 4) -> None:
    """Seed the default layout and demo queue if the store is empty."""
    store = venue.store
    if not store.get_tables():
        store.commit(tables=build_default_tables(table_count, columns))
        logger.info("Created %d sample tables", table_count)

    if not store.get_entries():
        now = venue.engine.clock()
        for name, party_size, minutes_ago, wait, entry_type in DEMO_ENTRIES:
            store.add_entry(
                QueueEntry(
                    id=store.next_entry_id(),
                    name=name,
                    party_size=party_size,
                    joined_at=now - timedelta(minutes=minutes_ago),
                    estimated_wait=wait,
                    type=entry_type,
                )
            )
        logger.info("Created %d sample queue entries", len(DEMO_ENTRIES))
