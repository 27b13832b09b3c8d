"""Balance reconciliation.

Pure functions that move a transaction's signed effect onto or off an
account balance. Only ``income`` adds to a balance; every other type value,
transfers included, subtracts.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Sequence

from fintrack.domain.entities import INCOME, Account


def signed_amount(transaction_type: str, amount: Decimal) -> Decimal:
    """Return the contribution of a transaction to its account balance."""
    return amount if transaction_type == INCOME else -amount


def _adjust(accounts: Sequence[Account], account_id: str, delta: Decimal) -> tuple[Account, ...]:
    return tuple(
        replace(account, balance=account.balance + delta) if account.id == account_id else account
        for account in accounts
    )


def apply_effect(
    accounts: Sequence[Account], account_id: str, transaction_type: str, amount: Decimal
) -> tuple[Account, ...]:
    """Add a transaction's signed amount to the matching account.

    Args:
        accounts: Current accounts
        account_id: Account the transaction references
        transaction_type: Transaction type category ("income", "expense", ...)
        amount: Non-negative transaction amount

    Returns:
        Accounts with the matching balance adjusted. If no account matches,
        the accounts are returned unchanged.
    """
    return _adjust(accounts, account_id, signed_amount(transaction_type, amount))


def revert_effect(
    accounts: Sequence[Account], account_id: str, transaction_type: str, amount: Decimal
) -> tuple[Account, ...]:
    """Remove a transaction's signed amount from the matching account."""
    return _adjust(accounts, account_id, -signed_amount(transaction_type, amount))
