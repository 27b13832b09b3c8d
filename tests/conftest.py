"""Shared pytest fixtures for fintrack tests."""

from decimal import Decimal
import pytest

from fintrack.database.bridge import SnapshotBridge
from fintrack.database.factories import create_sqlite_repository
from fintrack.domain.account import AccountService
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import Account, Category, Ledger
from fintrack.domain.importer import ImportService
from fintrack.domain.ledger import LedgerStore
from fintrack.domain.seed import SEED_TRANSACTION_TYPES
from fintrack.domain.transaction import TransactionService
from fintrack.domain.transaction_type import TransactionTypeService
from fintrack.utils.ids import CounterIds


@pytest.fixture
def db_path(tmp_path):
    """Path to a temporary SQLite database file."""
    return str(tmp_path / "fintrack.db")


@pytest.fixture
def repository(db_path):
    """Create a temporary snapshot repository for testing."""
    repo = create_sqlite_repository(database_path=db_path)
    repo.connect()

    yield repo

    repo.disconnect()


@pytest.fixture
def bridge(repository):
    """Persistence bridge on a test slot."""
    return SnapshotBridge(repository, slot="test")


@pytest.fixture
def base_ledger():
    """Small ledger: one account with balance 100 and one category."""
    return Ledger(
        accounts=(Account(id="A", name="Main", type="checking", balance=Decimal("100")),),
        categories=(Category(id="C", name="Food", subcategories=("Groceries", "Coffee")),),
        transaction_types=SEED_TRANSACTION_TYPES,
    )


@pytest.fixture
def store(base_ledger):
    """Ledger store with deterministic ids starting at 100."""
    return LedgerStore(base_ledger, new_id=CounterIds(start=100))


@pytest.fixture
def account_service(store):
    """Create an AccountService on the test store."""
    return AccountService(store)


@pytest.fixture
def category_service(store):
    """Create a CategoryService on the test store."""
    return CategoryService(store)


@pytest.fixture
def transaction_service(store):
    """Create a TransactionService on the test store."""
    return TransactionService(store)


@pytest.fixture
def transaction_type_service(store):
    """Create a TransactionTypeService on the test store."""
    return TransactionTypeService(store)


@pytest.fixture
def import_service(store):
    """Create an ImportService whose fallback date is fixed."""
    from datetime import date

    return ImportService(store, today=date(2024, 6, 1))


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
