"""Abstract snapshot storage interface."""

from abc import ABC, abstractmethod
from typing import Optional


class SnapshotRepository(ABC):
    """Durable key-value storage for serialized ledgers."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the storage backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        pass

    @abstractmethod
    def load(self, slot: str) -> Optional[str]:
        """Return the payload stored under ``slot``, or None if empty."""
        pass

    @abstractmethod
    def save(self, slot: str, payload: str) -> None:
        """Store ``payload`` under ``slot``, overwriting any previous value."""
        pass
