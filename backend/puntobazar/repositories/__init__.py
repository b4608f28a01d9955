"""
Storage abstraction.

Services depend on the Repository interface, never on a concrete store, so
the same business rules run against process memory (tests, demos) or the
SQL database with no behavioural difference.
"""
from .base import Repository
from .memory import MemoryRepository
from .sql import SqlRepository

__all__ = ["Repository", "MemoryRepository", "SqlRepository"]
