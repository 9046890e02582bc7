"""Table assignment engine."""

from .layout import Table, build_default_tables, find_adjacent_tables, resize_tables
from .preferences import ParsedPreference, parse_special_requests
from .queue import EntryStatus, EntryType, QueueEntry
from .selector import SeatingOutcome, Selection, TableSelector
from .engine import AssignmentEngine, BatchResult, PromotionResult

__all__ = [
    "Table",
    "build_default_tables",
    "find_adjacent_tables",
    "resize_tables",
    "ParsedPreference",
    "parse_special_requests",
    "EntryStatus",
    "EntryType",
    "QueueEntry",
    "SeatingOutcome",
    "Selection",
    "TableSelector",
    "AssignmentEngine",
    "BatchResult",
    "PromotionResult",
]
