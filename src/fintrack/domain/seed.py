"""Starting ledger used when nothing has been saved yet."""

from datetime import date
from decimal import Decimal

from fintrack.domain.entities import Account, Category, Ledger, Transaction, TransactionType

SEED_ACCOUNTS = (
    Account(id="1", name="Checking Account", type="checking", balance=Decimal("2500.00")),
    Account(id="2", name="Savings Account", type="savings", balance=Decimal("15000.00")),
    Account(id="3", name="Credit Card", type="credit", balance=Decimal("-850.00")),
)

SEED_TRANSACTION_TYPES = (
    TransactionType(id="1", name="Income", category="income"),
    TransactionType(id="2", name="Expense", category="expense"),
    TransactionType(id="3", name="Transfer In", category="transfer"),
    TransactionType(id="4", name="Transfer Out", category="transfer"),
)

SEED_CATEGORIES = (
    Category(id="1", name="Food & Dining", subcategories=("Restaurants", "Groceries", "Coffee")),
    Category(id="2", name="Transportation", subcategories=("Gas", "Public Transit", "Parking")),
    Category(id="3", name="Entertainment", subcategories=("Movies", "Games", "Subscriptions")),
    Category(id="4", name="Income", subcategories=("Salary", "Freelance", "Investment")),
)

# Seed balances already include these two transactions.
SEED_TRANSACTIONS = (
    Transaction(
        id="1",
        date=date(2024, 1, 15),
        time="14:30",
        type="expense",
        account="1",
        description="Grocery shopping",
        category="1",
        subcategory="Groceries",
        amount=Decimal("125.50"),
    ),
    Transaction(
        id="2",
        date=date(2024, 1, 14),
        time="09:00",
        type="income",
        account="1",
        description="Salary deposit",
        category="4",
        subcategory="Salary",
        amount=Decimal("5000.00"),
    ),
)


def seed_ledger() -> Ledger:
    """Return the fixed starting ledger."""
    return Ledger(
        accounts=SEED_ACCOUNTS,
        transactions=SEED_TRANSACTIONS,
        categories=SEED_CATEGORIES,
        transaction_types=SEED_TRANSACTION_TYPES,
    )
