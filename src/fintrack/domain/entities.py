"""Domain model entities for fintrack.

These are pure data classes representing the ledger's collections. They are
immutable so the ledger reducer can hand out snapshots without callers being
able to change them behind its back.
"""

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence, TypeVar

from fintrack.domain.errors import ValidationError

ACCOUNT_TYPES = ("checking", "savings", "credit", "investment", "loan")
TRANSACTION_CATEGORIES = ("income", "expense", "transfer")

INCOME = "income"
EXPENSE = "expense"
TRANSFER = "transfer"

DEFAULT_TIME = "12:00"

# Amounts and balances must stay below this magnitude so two-decimal sums
# fit the default 28-digit decimal context.
MAX_AMOUNT = Decimal("1e18")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass(frozen=True)
class Account:
    """Account domain entity.

    The balance is stored, not computed: the ledger reducer keeps it in step
    with the transactions that reference the account.
    """

    id: str
    name: str
    type: str
    balance: Decimal


@dataclass(frozen=True)
class Category:
    """Category domain entity with an ordered list of subcategory names."""

    id: str
    name: str
    subcategories: tuple[str, ...] = ()


@dataclass(frozen=True)
class TransactionType:
    """Transaction type domain entity.

    ``category`` controls the sign of transactions created with this type.
    """

    id: str
    name: str
    category: str


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: str
    date: date
    time: str
    type: str
    account: str
    description: str
    category: str
    subcategory: str
    amount: Decimal


@dataclass(frozen=True)
class Ledger:
    """The full set of collections at a point in time."""

    accounts: tuple[Account, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    categories: tuple[Category, ...] = ()
    transaction_types: tuple[TransactionType, ...] = ()

    def get_account(self, account_id: str) -> Optional[Account]:
        for account in self.accounts:
            if account.id == account_id:
                return account
        return None

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self.transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def get_category(self, category_id: str) -> Optional[Category]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def get_transaction_type(self, type_id: str) -> Optional[TransactionType]:
        for transaction_type in self.transaction_types:
            if transaction_type.id == type_id:
                return transaction_type
        return None


Named = TypeVar("Named", Account, Category)


def find_by_name(records: Sequence[Named], name: str) -> Optional[Named]:
    """Return the first record whose name matches ``name`` ignoring case."""
    wanted = name.strip().lower()
    for record in records:
        if record.name.strip().lower() == wanted:
            return record
    return None


def amount_in_range(value: Decimal) -> bool:
    """Return True for finite amounts below MAX_AMOUNT in magnitude."""
    return value.is_finite() and abs(value) < MAX_AMOUNT


def validate_account(account: Account) -> Account:
    """Check an account's fields before it enters the ledger.

    Raises:
        ValidationError: If the name is blank, the type is unknown or the
            balance is out of range
    """
    if not account.name.strip():
        raise ValidationError("Account name is required")
    if not amount_in_range(account.balance):
        raise ValidationError(f"Balance out of range: {account.balance}")
    if account.type not in ACCOUNT_TYPES:
        raise ValidationError(
            f"Unknown account type '{account.type}'. "
            f"Expected one of: {', '.join(ACCOUNT_TYPES)}"
        )
    return account


def validate_category(category: Category) -> Category:
    """Check a category's name and that its subcategories are unique.

    Raises:
        ValidationError: If the name is blank or subcategories repeat
    """
    if not category.name.strip():
        raise ValidationError("Category name is required")
    seen = set()
    for subcategory in category.subcategories:
        if subcategory in seen:
            raise ValidationError(
                f"Duplicate subcategory '{subcategory}' in category '{category.name}'"
            )
        seen.add(subcategory)
    return category


def validate_transaction_type(transaction_type: TransactionType) -> TransactionType:
    """Check a transaction type's label and sign category.

    Raises:
        ValidationError: If the name is blank or the category is unknown
    """
    if not transaction_type.name.strip():
        raise ValidationError("Transaction type name is required")
    if transaction_type.category not in TRANSACTION_CATEGORIES:
        raise ValidationError(
            f"Unknown transaction category '{transaction_type.category}'. "
            f"Expected one of: {', '.join(TRANSACTION_CATEGORIES)}"
        )
    return transaction_type


def validate_transaction(transaction: Transaction, ledger: Ledger) -> Transaction:
    """Check a transaction against the ledger it is about to enter.

    Args:
        transaction: Transaction to check
        ledger: Current ledger, used to resolve account and category

    Raises:
        ValidationError: If the amount is negative or out of range, the
            type is unknown, the account does not exist, or the subcategory
            does not belong to the category
    """
    if transaction.amount < 0:
        raise ValidationError("Amount must not be negative; the type sets the sign")
    if not amount_in_range(transaction.amount):
        raise ValidationError(f"Amount out of range: {transaction.amount}")
    if not TIME_PATTERN.match(transaction.time):
        raise ValidationError(f"Time must be HH:MM, got '{transaction.time}'")
    if transaction.type not in TRANSACTION_CATEGORIES:
        raise ValidationError(
            f"Unknown transaction type '{transaction.type}'. "
            f"Expected one of: {', '.join(TRANSACTION_CATEGORIES)}"
        )
    if ledger.get_account(transaction.account) is None:
        raise ValidationError(f"Account {transaction.account} not found")
    if transaction.subcategory:
        category = ledger.get_category(transaction.category) if transaction.category else None
        if category is None:
            raise ValidationError("A subcategory requires a category")
        if transaction.subcategory not in category.subcategories:
            raise ValidationError(
                f"Subcategory '{transaction.subcategory}' is not part of "
                f"category '{category.name}'"
            )
    return transaction
