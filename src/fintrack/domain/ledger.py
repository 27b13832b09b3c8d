"""Ledger reducer and store.

``apply`` is the single total function ``(ledger, operation) -> ledger``.
``LedgerStore`` owns the current ledger for the life of the process, funnels
every mutation through ``apply`` and writes a snapshot after each change.
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

from fintrack.domain import operations as ops
from fintrack.domain.balance import apply_effect, revert_effect
from fintrack.domain.entities import Account, Category, Ledger, Transaction, TransactionType
from fintrack.utils.ids import IdGenerator, uuid_ids

logger = logging.getLogger(__name__)


def _add_account(ledger: Ledger, op: ops.AddAccount, new_id: IdGenerator) -> Ledger:
    account = op.account if op.keep_id else replace(op.account, id=new_id())
    return replace(ledger, accounts=ledger.accounts + (account,))


def _update_account(ledger: Ledger, op: ops.UpdateAccount, new_id: IdGenerator) -> Ledger:
    accounts = tuple(
        op.account if account.id == op.account.id else account for account in ledger.accounts
    )
    return replace(ledger, accounts=accounts)


def _delete_account(ledger: Ledger, op: ops.DeleteAccount, new_id: IdGenerator) -> Ledger:
    # Transactions referencing the account are kept and shown as orphans.
    accounts = tuple(account for account in ledger.accounts if account.id != op.account_id)
    return replace(ledger, accounts=accounts)


def _add_transaction_type(
    ledger: Ledger, op: ops.AddTransactionType, new_id: IdGenerator
) -> Ledger:
    transaction_type = replace(op.transaction_type, id=new_id())
    return replace(ledger, transaction_types=ledger.transaction_types + (transaction_type,))


def _delete_transaction_type(
    ledger: Ledger, op: ops.DeleteTransactionType, new_id: IdGenerator
) -> Ledger:
    transaction_types = tuple(t for t in ledger.transaction_types if t.id != op.type_id)
    return replace(ledger, transaction_types=transaction_types)


def _add_category(ledger: Ledger, op: ops.AddCategory, new_id: IdGenerator) -> Ledger:
    category = op.category if op.keep_id else replace(op.category, id=new_id())
    return replace(ledger, categories=ledger.categories + (category,))


def _update_category(ledger: Ledger, op: ops.UpdateCategory, new_id: IdGenerator) -> Ledger:
    categories = tuple(
        op.category if category.id == op.category.id else category
        for category in ledger.categories
    )
    return replace(ledger, categories=categories)


def _delete_category(ledger: Ledger, op: ops.DeleteCategory, new_id: IdGenerator) -> Ledger:
    categories = tuple(c for c in ledger.categories if c.id != op.category_id)
    return replace(ledger, categories=categories)


def _add_transaction(ledger: Ledger, op: ops.AddTransaction, new_id: IdGenerator) -> Ledger:
    transaction = replace(op.transaction, id=new_id())
    accounts = apply_effect(
        ledger.accounts, transaction.account, transaction.type, transaction.amount
    )
    return replace(
        ledger,
        transactions=ledger.transactions + (transaction,),
        accounts=accounts,
    )


def _update_transaction(
    ledger: Ledger, op: ops.UpdateTransaction, new_id: IdGenerator
) -> Ledger:
    updated = op.transaction
    old = ledger.get_transaction(updated.id)
    if old is None:
        logger.error("Transaction not found for update: %s", updated.id)
        return ledger

    # Revert with the old type's sign, then apply with the new type's sign.
    accounts = revert_effect(ledger.accounts, old.account, old.type, old.amount)
    accounts = apply_effect(accounts, updated.account, updated.type, updated.amount)
    transactions = tuple(
        updated if transaction.id == updated.id else transaction
        for transaction in ledger.transactions
    )
    return replace(ledger, transactions=transactions, accounts=accounts)


def _delete_transaction(
    ledger: Ledger, op: ops.DeleteTransaction, new_id: IdGenerator
) -> Ledger:
    old = ledger.get_transaction(op.transaction_id)
    if old is None:
        logger.error("Transaction not found for deletion: %s", op.transaction_id)
        return ledger

    accounts = revert_effect(ledger.accounts, old.account, old.type, old.amount)
    transactions = tuple(t for t in ledger.transactions if t.id != op.transaction_id)
    return replace(ledger, transactions=transactions, accounts=accounts)


def _import_snapshot(ledger: Ledger, op: ops.ImportSnapshot, new_id: IdGenerator) -> Ledger:
    # Balances in the snapshot are trusted as given.
    return replace(ledger, **op.collections())


_HANDLERS: dict[type, Callable[[Ledger, ops.Operation, IdGenerator], Ledger]] = {
    ops.AddAccount: _add_account,
    ops.UpdateAccount: _update_account,
    ops.DeleteAccount: _delete_account,
    ops.AddTransactionType: _add_transaction_type,
    ops.DeleteTransactionType: _delete_transaction_type,
    ops.AddCategory: _add_category,
    ops.UpdateCategory: _update_category,
    ops.DeleteCategory: _delete_category,
    ops.AddTransaction: _add_transaction,
    ops.UpdateTransaction: _update_transaction,
    ops.DeleteTransaction: _delete_transaction,
    ops.ImportSnapshot: _import_snapshot,
}


def apply(ledger: Ledger, operation: ops.Operation, new_id: IdGenerator = uuid_ids) -> Ledger:
    """Apply one operation to a ledger.

    Args:
        ledger: Current ledger (never modified)
        operation: Operation to apply
        new_id: Id generator used by add operations

    Returns:
        The resulting ledger. Updating or deleting an unknown transaction
        logs an error and returns ``ledger`` itself.

    Raises:
        TypeError: If ``operation`` is not a ledger operation
    """
    handler = _HANDLERS.get(type(operation))
    if handler is None:
        raise TypeError(f"Unsupported ledger operation: {operation!r}")
    return handler(ledger, operation, new_id)


class LedgerStore:
    """Process-wide owner of the current ledger.

    Reads go through :attr:`state`; every mutation goes through
    :meth:`dispatch`, which applies the operation and hands the new ledger
    to the ``on_change`` callback (the persistence bridge). The callback
    must not raise; the snapshot writer logs its own failures.
    """

    def __init__(
        self,
        ledger: Ledger,
        new_id: IdGenerator = uuid_ids,
        on_change: Optional[Callable[[Ledger], None]] = None,
    ):
        """Initialize the store.

        Args:
            ledger: Starting ledger
            new_id: Id generator for add operations
            on_change: Called with the new ledger after every dispatch
        """
        self._ledger = ledger
        self.new_id = new_id
        self.on_change = on_change

    @property
    def state(self) -> Ledger:
        """Current ledger snapshot."""
        return self._ledger

    def dispatch(self, operation: ops.Operation) -> Ledger:
        """Apply an operation and publish the resulting ledger."""
        logger.debug("Dispatching %s", type(operation).__name__)
        self._ledger = apply(self._ledger, operation, self.new_id)
        if self.on_change is not None:
            self.on_change(self._ledger)
        return self._ledger

    def add_account(self, account: Account) -> Ledger:
        return self.dispatch(ops.AddAccount(account))

    def update_account(self, account: Account) -> Ledger:
        return self.dispatch(ops.UpdateAccount(account))

    def delete_account(self, account_id: str) -> Ledger:
        return self.dispatch(ops.DeleteAccount(account_id))

    def add_transaction_type(self, transaction_type: TransactionType) -> Ledger:
        return self.dispatch(ops.AddTransactionType(transaction_type))

    def delete_transaction_type(self, type_id: str) -> Ledger:
        return self.dispatch(ops.DeleteTransactionType(type_id))

    def add_category(self, category: Category) -> Ledger:
        return self.dispatch(ops.AddCategory(category))

    def update_category(self, category: Category) -> Ledger:
        return self.dispatch(ops.UpdateCategory(category))

    def delete_category(self, category_id: str) -> Ledger:
        return self.dispatch(ops.DeleteCategory(category_id))

    def add_transaction(self, transaction: Transaction) -> Ledger:
        return self.dispatch(ops.AddTransaction(transaction))

    def update_transaction(self, transaction: Transaction) -> Ledger:
        return self.dispatch(ops.UpdateTransaction(transaction))

    def delete_transaction(self, transaction_id: str) -> Ledger:
        return self.dispatch(ops.DeleteTransaction(transaction_id))

    def import_snapshot(self, snapshot: ops.ImportSnapshot) -> Ledger:
        return self.dispatch(snapshot)

    def has_transaction(self, transaction_id: str) -> bool:
        """Return True if a transaction with this id is in the ledger."""
        return self._ledger.get_transaction(transaction_id) is not None

    def flush(self) -> None:
        """Publish the current ledger again (final write at shutdown)."""
        if self.on_change is not None:
            self.on_change(self._ledger)
