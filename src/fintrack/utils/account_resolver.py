"""Utility for resolving account and category references to IDs."""

from typing import Sequence, Union

from fintrack.domain.entities import Account, Category, Ledger
from fintrack.domain.errors import (
    ConflictError,
    NotFoundError,
    account_not_found,
    ambiguous_name,
    category_not_found,
)


def _resolve(records: Sequence[Union[Account, Category]], reference: str, kind: str) -> str:
    # An exact id match wins over a name match.
    for record in records:
        if record.id == reference:
            return record.id

    wanted = reference.strip().lower()
    matches = [record for record in records if record.name.strip().lower() == wanted]
    if len(matches) > 1:
        raise ConflictError(ambiguous_name(kind, reference, len(matches)))
    if matches:
        return matches[0].id
    raise NotFoundError(
        account_not_found(reference) if kind == "account" else category_not_found(reference)
    )


def resolve_account(ledger: Ledger, account: str) -> str:
    """Resolve account name or ID to account ID.

    Args:
        ledger: Ledger to search
        account: Account ID or name (case-insensitive)

    Returns:
        Account ID

    Raises:
        NotFoundError: If no account matches
        ConflictError: If several accounts share the name
    """
    return _resolve(ledger.accounts, account, "account")


def resolve_category(ledger: Ledger, category: str) -> str:
    """Resolve category name or ID to category ID.

    Raises:
        NotFoundError: If no category matches
        ConflictError: If several categories share the name
    """
    return _resolve(ledger.categories, category, "category")
