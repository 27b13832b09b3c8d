"""Persistence bridge between the ledger store and snapshot storage.

Loading falls back to the seed ledger when the slot is empty or unreadable.
Saving is fire-and-forget: failures are logged and never reach the caller,
so an in-memory change is never undone because the disk write failed.
"""

import logging
from typing import Optional

import simplejson
from sqlalchemy.exc import SQLAlchemyError

from fintrack.database.base import SnapshotRepository
from fintrack.database.mappers import (
    dumps_snapshot,
    ledger_from_dict,
    ledger_to_dict,
    loads_snapshot,
)
from fintrack.domain.entities import Ledger
from fintrack.domain.errors import ValidationError
from fintrack.domain.ledger import LedgerStore
from fintrack.domain.seed import seed_ledger
from fintrack.utils.ids import IdGenerator, uuid_ids

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "financeData"


class SnapshotBridge:
    """Reads and writes one ledger snapshot slot."""

    def __init__(self, repository: SnapshotRepository, slot: str = DEFAULT_SLOT):
        """Initialize the bridge.

        Args:
            repository: Storage backend
            slot: Name of the slot holding the snapshot
        """
        self.repository = repository
        self.slot = slot

    def load(self) -> Ledger:
        """Return the saved ledger, or the seed ledger if none can be read."""
        seed = seed_ledger()
        try:
            payload: Optional[str] = self.repository.load(self.slot)
        except SQLAlchemyError:
            logger.exception("Failed to read saved data from slot '%s'", self.slot)
            return seed

        if payload is None:
            logger.info("No saved data in slot '%s'; starting from seed data", self.slot)
            return seed

        try:
            # Saved data is merged over the seed, like a JSON import.
            return ledger_from_dict(loads_snapshot(payload), seed)
        except (simplejson.JSONDecodeError, ValidationError) as e:
            logger.error("Failed to load saved data: %s", e)
            return seed

    def save(self, ledger: Ledger) -> None:
        """Overwrite the slot with ``ledger``; log and swallow storage errors."""
        payload = dumps_snapshot(ledger_to_dict(ledger))
        try:
            self.repository.save(self.slot, payload)
        except (SQLAlchemyError, OSError):
            logger.exception("Failed to save data to slot '%s'", self.slot)


def open_store(bridge: SnapshotBridge, new_id: IdGenerator = uuid_ids) -> LedgerStore:
    """Create the process store from saved data, saving after every change."""
    return LedgerStore(bridge.load(), new_id=new_id, on_change=bridge.save)
