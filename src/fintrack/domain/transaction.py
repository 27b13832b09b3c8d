"""Transaction domain service."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from fintrack.domain.entities import (
    DEFAULT_TIME,
    EXPENSE,
    Transaction,
    validate_transaction,
)
from fintrack.domain.errors import NotFoundError, transaction_not_found
from fintrack.domain.ledger import LedgerStore
from fintrack.domain.reports import filter_transactions, sort_newest_first


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, store: LedgerStore):
        """Initialize transaction service.

        Args:
            store: Ledger store
        """
        self.store = store

    def create_transaction(
        self,
        account_id: str,
        date: date,
        amount: Decimal,
        transaction_type: str = EXPENSE,
        time: str = DEFAULT_TIME,
        description: str = "",
        category_id: str = "",
        subcategory: str = "",
    ) -> Transaction:
        """Create a transaction and apply it to its account balance.

        Args:
            account_id: Account ID
            date: Transaction date
            amount: Non-negative amount
            transaction_type: income, expense or transfer
            time: Time of day as HH:MM
            description: Optional description
            category_id: Optional category ID
            subcategory: Optional subcategory of the category

        Returns:
            The created transaction

        Raises:
            ValidationError: If the account doesn't exist, the amount is
                negative, or the subcategory doesn't belong to the category
        """
        transaction = validate_transaction(
            Transaction(
                id="",
                date=date,
                time=time,
                type=transaction_type,
                account=account_id,
                description=description,
                category=category_id,
                subcategory=subcategory,
                amount=amount,
            ),
            self.store.state,
        )
        ledger = self.store.add_transaction(transaction)
        return ledger.transactions[-1]

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.store.state.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: str,
        account_id: Optional[str] = None,
        date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        transaction_type: Optional[str] = None,
        time: Optional[str] = None,
        description: Optional[str] = None,
        category_id: Optional[str] = None,
        subcategory: Optional[str] = None,
    ) -> Transaction:
        """Update transaction fields.

        Fields left as None keep their current value; pass an empty string
        to clear the category or subcategory. Balances move from the old
        values to the new ones.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If the resulting transaction is invalid
        """
        txn = self.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        updated = replace(
            txn,
            account=txn.account if account_id is None else account_id,
            date=txn.date if date is None else date,
            amount=txn.amount if amount is None else amount,
            type=txn.type if transaction_type is None else transaction_type,
            time=txn.time if time is None else time,
            description=txn.description if description is None else description,
            category=txn.category if category_id is None else category_id,
            subcategory=txn.subcategory if subcategory is None else subcategory,
        )
        # Changing category invalidates the old subcategory unless a new one is given.
        if category_id is not None and subcategory is None and category_id != txn.category:
            updated = replace(updated, subcategory="")

        validate_transaction(updated, self.store.state)
        self.store.update_transaction(updated)
        return updated

    def delete_transaction(self, transaction_id: str) -> Transaction:
        """Delete a transaction and take it off its account balance.

        Args:
            transaction_id: Transaction ID to delete

        Returns:
            The deleted transaction

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        txn = self.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.store.delete_transaction(transaction_id)
        return txn

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[str] = None,
        category_id: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with filters, newest first.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            account_id: Optional account ID filter
            category_id: Optional category ID filter

        Returns:
            List of transaction entities
        """
        return sort_newest_first(
            filter_transactions(
                self.store.state,
                start_date=start_date,
                end_date=end_date,
                account_id=account_id,
                category_id=category_id,
            )
        )
