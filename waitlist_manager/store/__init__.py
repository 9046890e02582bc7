"""Queue and table stores."""

from .base import Store
from .memory import InMemoryStore
from .sql import SqlStore

__all__ = ["Store", "InMemoryStore", "SqlStore"]
