"""Database factory functions for creating record stores."""

import os
from typing import Optional

from fintrack.database.base import Database
from fintrack.database.memory import MemoryDatabase
from fintrack.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "FINTRACK_DB_PATH"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed store.

    Args:
        database_path: Path to SQLite database file. If None, the database
            lives in memory for the lifetime of the process.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        return SQLAlchemyDatabase("sqlite://")
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")


def create_database(database_path: Optional[str] = None) -> Database:
    """Create the record store selected by configuration.

    Args:
        database_path: Path to a SQLite file. If None, checks the
            FINTRACK_DB_PATH environment variable, then falls back to a plain
            in-memory store.

    Returns:
        Database instance
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV) or None

    if database_path is None:
        return MemoryDatabase()
    return create_sqlite_database(database_path)
