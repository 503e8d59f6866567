"""Record store layer for fintrack."""

from fintrack.database.base import Database
from fintrack.database.factories import create_database, create_sqlite_database
from fintrack.database.fixtures import load_fixtures
from fintrack.database.memory import MemoryDatabase

__all__ = [
    "Database",
    "MemoryDatabase",
    "create_database",
    "create_sqlite_database",
    "load_fixtures",
]
