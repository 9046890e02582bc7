"""Services layered on top of the assignment engine."""

from .notification import Notification, NotificationLevel, NotificationService
from .dashboard import DashboardService, OccupancyCounter
from .venue import DEMO_ENTRIES, Venue, create_venue, initialize_sample_data

__all__ = [
    "Notification",
    "NotificationLevel",
    "NotificationService",
    "DashboardService",
    "OccupancyCounter",
    "DEMO_ENTRIES",
    "Venue",
    "create_venue",
    "initialize_sample_data",
]
