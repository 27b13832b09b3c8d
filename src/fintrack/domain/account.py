"""Account domain service."""

from decimal import Decimal
from typing import Optional
from dataclasses import replace

from fintrack.domain.entities import Account, validate_account
from fintrack.domain.errors import ConflictError, NotFoundError, account_not_found
from fintrack.domain.ledger import LedgerStore


class AccountService:
    """Service for managing accounts."""

    def __init__(self, store: LedgerStore):
        """Initialize account service.

        Args:
            store: Ledger store
        """
        self.store = store

    def _check_unique_name(self, name: str, exclude_id: Optional[str] = None) -> None:
        wanted = name.strip().lower()
        for acc in self.store.state.accounts:
            if acc.id != exclude_id and acc.name.strip().lower() == wanted:
                raise ConflictError(f"Account with name '{acc.name}' already exists")

    def create_account(
        self, name: str, account_type: str = "checking", balance: Decimal = Decimal("0")
    ) -> Account:
        """Create a new account.

        Args:
            name: Account name
            account_type: One of checking, savings, credit, investment, loan
            balance: Starting balance

        Returns:
            The created account, with its generated ID

        Raises:
            ValidationError: If name is blank, type is unknown or the balance
                is out of range
            ConflictError: If an account with the same name (ignoring case) exists
        """
        account = validate_account(
            Account(id="", name=name.strip(), type=account_type, balance=balance)
        )
        self._check_unique_name(account.name)
        ledger = self.store.add_account(account)
        return ledger.accounts[-1]

    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.store.state.get_account(account_id)

    def list_accounts(self) -> list[Account]:
        """List all accounts in creation order."""
        return list(self.store.state.accounts)

    def update_account(
        self,
        account_id: str,
        name: Optional[str] = None,
        account_type: Optional[str] = None,
        balance: Optional[Decimal] = None,
    ) -> Account:
        """Replace an account's fields.

        Fields left as None keep their current value. Setting ``balance``
        directly is a manual correction; it does not touch transactions.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the new values are invalid
            ConflictError: If the new name is taken by another account
        """
        account = self.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        updated = replace(
            account,
            name=account.name if name is None else name.strip(),
            type=account.type if account_type is None else account_type,
            balance=account.balance if balance is None else balance,
        )
        validate_account(updated)
        if name is not None:
            self._check_unique_name(updated.name, exclude_id=account_id)

        self.store.update_account(updated)
        return updated

    def delete_account(self, account_id: str) -> int:
        """Delete an account.

        Transactions that reference the account are kept; they show up as
        "Unknown Account" afterwards.

        Args:
            account_id: Account ID to delete

        Returns:
            Number of transactions left without an account

        Raises:
            NotFoundError: If account not found
        """
        if self.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        orphaned = self.transaction_count(account_id)
        self.store.delete_account(account_id)
        return orphaned

    def transaction_count(self, account_id: str) -> int:
        """Count transactions referencing an account."""
        return sum(1 for t in self.store.state.transactions if t.account == account_id)
