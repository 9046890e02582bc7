"""Database models for the SQL-backed store."""

from .base import Base, create_session_factory
from .table import TableRecord
from .queue_entry import QueueEntryRecord, Counter

__all__ = [
    "Base",
    "create_session_factory",
    "TableRecord",
    "QueueEntryRecord",
    "Counter",
]
