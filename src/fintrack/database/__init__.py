"""Storage layer for fintrack application."""

from fintrack.database.base import SnapshotRepository
from fintrack.database.factories import create_sqlite_repository

__all__ = ["SnapshotRepository", "create_sqlite_repository"]
