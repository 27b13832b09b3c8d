"""Ledger operations.

Each mutation the ledger accepts is one of these frozen records. The reducer
in :mod:`fintrack.domain.ledger` pattern-matches on them.

``Add*`` operations carry a full entity whose ``id`` is replaced by a freshly
generated one, unless ``keep_id`` is set (bulk import pre-allocates ids so
that rows can reference accounts created in the same batch).
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from fintrack.domain.entities import Account, Category, Transaction, TransactionType


@dataclass(frozen=True)
class AddAccount:
    account: Account
    keep_id: bool = False


@dataclass(frozen=True)
class UpdateAccount:
    account: Account


@dataclass(frozen=True)
class DeleteAccount:
    account_id: str


@dataclass(frozen=True)
class AddTransactionType:
    transaction_type: TransactionType


@dataclass(frozen=True)
class DeleteTransactionType:
    type_id: str


@dataclass(frozen=True)
class AddCategory:
    category: Category
    keep_id: bool = False


@dataclass(frozen=True)
class UpdateCategory:
    category: Category


@dataclass(frozen=True)
class DeleteCategory:
    category_id: str


@dataclass(frozen=True)
class AddTransaction:
    transaction: Transaction


@dataclass(frozen=True)
class UpdateTransaction:
    transaction: Transaction


@dataclass(frozen=True)
class DeleteTransaction:
    transaction_id: str


@dataclass(frozen=True)
class ImportSnapshot:
    """Replace whole collections with the ones given.

    A collection left as ``None`` is kept as it is.
    """

    accounts: Optional[tuple[Account, ...]] = None
    transactions: Optional[tuple[Transaction, ...]] = None
    categories: Optional[tuple[Category, ...]] = None
    transaction_types: Optional[tuple[TransactionType, ...]] = None

    def collections(self) -> dict[str, Any]:
        """Return only the collections that were provided."""
        present = {
            "accounts": self.accounts,
            "transactions": self.transactions,
            "categories": self.categories,
            "transaction_types": self.transaction_types,
        }
        return {key: value for key, value in present.items() if value is not None}


Operation = Union[
    AddAccount,
    UpdateAccount,
    DeleteAccount,
    AddTransactionType,
    DeleteTransactionType,
    AddCategory,
    UpdateCategory,
    DeleteCategory,
    AddTransaction,
    UpdateTransaction,
    DeleteTransaction,
    ImportSnapshot,
]
