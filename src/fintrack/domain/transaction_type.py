"""Transaction type domain service."""

from typing import Optional

from fintrack.domain.entities import (
    TRANSACTION_CATEGORIES,
    TransactionType,
    validate_transaction_type,
)
from fintrack.domain.errors import NotFoundError, transaction_type_not_found
from fintrack.domain.ledger import LedgerStore


class TransactionTypeService:
    """Service for managing transaction types."""

    def __init__(self, store: LedgerStore):
        """Initialize transaction type service.

        Args:
            store: Ledger store
        """
        self.store = store

    def create_type(self, name: str, category: str) -> TransactionType:
        """Create a transaction type.

        Args:
            name: Display label (e.g., "Transfer In")
            category: income, expense or transfer

        Returns:
            The created type

        Raises:
            ValidationError: If the name is blank or the category is unknown
        """
        transaction_type = validate_transaction_type(
            TransactionType(id="", name=name.strip(), category=category.lower())
        )
        ledger = self.store.add_transaction_type(transaction_type)
        return ledger.transaction_types[-1]

    def list_types(self) -> list[TransactionType]:
        """List all transaction types."""
        return list(self.store.state.transaction_types)

    def delete_type(self, type_id: str) -> None:
        """Delete a transaction type.

        Raises:
            NotFoundError: If the type does not exist
        """
        if self.store.state.get_transaction_type(type_id) is None:
            raise NotFoundError(transaction_type_not_found(type_id))
        self.store.delete_transaction_type(type_id)

    def resolve_category(self, value: str) -> Optional[str]:
        """Map a type label or category string to its sign category.

        "Transfer Out" and "transfer" both give "transfer".

        Returns:
            The category string, or None if nothing matches
        """
        wanted = value.strip().lower()
        if wanted in TRANSACTION_CATEGORIES:
            return wanted
        for transaction_type in self.store.state.transaction_types:
            if transaction_type.id == value or transaction_type.name.lower() == wanted:
                return transaction_type.category
        return None
