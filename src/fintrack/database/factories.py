"""Factory functions for creating snapshot repositories."""

import os
from pathlib import Path
from typing import Optional

from fintrack.database.sqlalchemy_db import SQLAlchemySnapshotRepository


def create_sqlite_repository(database_path: Optional[str] = None) -> SQLAlchemySnapshotRepository:
    """Create a SQLite snapshot repository.

    Args:
        database_path: Path to SQLite database file. If None, checks FINTRACK_DB_PATH
            environment variable, then defaults to ~/.fintrack/fintrack.db

    Returns:
        SQLAlchemySnapshotRepository configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("FINTRACK_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".fintrack"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "fintrack.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemySnapshotRepository(database_url)
