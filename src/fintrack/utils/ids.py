"""Id generators for new ledger records."""

import itertools
import uuid
from typing import Callable

IdGenerator = Callable[[], str]


def uuid_ids() -> str:
    """Return a random hex id."""
    return uuid.uuid4().hex


class CounterIds:
    """Monotonic id generator, handy for deterministic tests.

    Args:
        start: First id to hand out
        prefix: Optional prefix prepended to every id
    """

    def __init__(self, start: int = 1, prefix: str = ""):
        self._counter = itertools.count(start)
        self.prefix = prefix

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"
