"""Generic SQLAlchemy snapshot repository."""

from typing import Optional
from sqlalchemy.orm import Session

from fintrack.database.base import SnapshotRepository
from fintrack.database.models import Snapshot, create_session_factory


class SQLAlchemySnapshotRepository(SnapshotRepository):
    """SQLAlchemy-based implementation of SnapshotRepository."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy repository.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def load(self, slot: str) -> Optional[str]:
        """Return the payload stored under ``slot``."""
        session = self._get_session()
        row = session.get(Snapshot, slot)
        if row is None:
            return None
        return row.payload

    def save(self, slot: str, payload: str) -> None:
        """Overwrite the payload stored under ``slot``."""
        session = self._get_session()
        try:
            row = session.get(Snapshot, slot)
            if row is None:
                session.add(Snapshot(slot=slot, payload=payload))
            else:
                row.payload = payload
            session.commit()
        except Exception:
            session.rollback()
            raise
