"""Mapper functions to convert between domain entities and snapshot dicts.

A snapshot is the JSON-ready form of a ledger: the shape written to the
persistence slot and produced by JSON export. Keys follow the snapshot
format (``transactionTypes``), dates are ISO strings and amounts are Decimals,
written as exact JSON numbers by :func:`dumps_snapshot`.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

import simplejson

from fintrack.domain import entities as domain
from fintrack.domain.errors import ValidationError
from fintrack.domain.operations import ImportSnapshot


def _to_decimal(value: Any) -> Decimal:
    # str() first so floats keep their shortest repr instead of binary noise
    amount = Decimal(str(value))
    if not domain.amount_in_range(amount):
        raise ValueError(f"amount out of range: {value}")
    return amount


def dumps_snapshot(data: dict[str, Any], **kwargs: Any) -> str:
    """Serialize a snapshot dict, writing Decimals as exact JSON numbers."""
    return simplejson.dumps(data, use_decimal=True, **kwargs)


def loads_snapshot(text: str) -> Any:
    """Parse snapshot JSON, reading every non-integer number as a Decimal.

    Raises:
        simplejson.JSONDecodeError: If the text is not valid JSON
    """
    return simplejson.loads(text, use_decimal=True)


def account_to_dict(account: domain.Account) -> dict[str, Any]:
    """Convert Account entity to snapshot dict."""
    return {
        "id": account.id,
        "name": account.name,
        "type": account.type,
        "balance": account.balance,
    }


def account_from_dict(data: dict[str, Any]) -> domain.Account:
    """Convert snapshot dict to Account entity."""
    return domain.Account(
        id=str(data["id"]),
        name=data["name"],
        type=data.get("type", "checking"),
        balance=_to_decimal(data.get("balance", 0)),
    )


def category_to_dict(category: domain.Category) -> dict[str, Any]:
    """Convert Category entity to snapshot dict."""
    return {
        "id": category.id,
        "name": category.name,
        "subcategories": list(category.subcategories),
    }


def category_from_dict(data: dict[str, Any]) -> domain.Category:
    """Convert snapshot dict to Category entity."""
    return domain.Category(
        id=str(data["id"]),
        name=data["name"],
        subcategories=tuple(data.get("subcategories") or ()),
    )


def transaction_type_to_dict(transaction_type: domain.TransactionType) -> dict[str, Any]:
    """Convert TransactionType entity to snapshot dict."""
    return {
        "id": transaction_type.id,
        "name": transaction_type.name,
        "category": transaction_type.category,
    }


def transaction_type_from_dict(data: dict[str, Any]) -> domain.TransactionType:
    """Convert snapshot dict to TransactionType entity."""
    return domain.TransactionType(
        id=str(data["id"]),
        name=data["name"],
        category=data["category"],
    )


def transaction_to_dict(transaction: domain.Transaction) -> dict[str, Any]:
    """Convert Transaction entity to snapshot dict."""
    return {
        "id": transaction.id,
        "date": transaction.date.isoformat(),
        "time": transaction.time,
        "type": transaction.type,
        "account": transaction.account,
        "description": transaction.description,
        "category": transaction.category,
        "subcategory": transaction.subcategory,
        "amount": transaction.amount,
    }


def transaction_from_dict(data: dict[str, Any]) -> domain.Transaction:
    """Convert snapshot dict to Transaction entity."""
    return domain.Transaction(
        id=str(data["id"]),
        date=date.fromisoformat(data["date"]),
        time=data.get("time") or domain.DEFAULT_TIME,
        type=data.get("type") or domain.EXPENSE,
        account=str(data.get("account") or ""),
        description=data.get("description") or "",
        category=str(data.get("category") or ""),
        subcategory=data.get("subcategory") or "",
        amount=_to_decimal(data.get("amount", 0)),
    )


def ledger_to_dict(ledger: domain.Ledger) -> dict[str, Any]:
    """Convert a full ledger to a snapshot dict."""
    return {
        "accounts": [account_to_dict(a) for a in ledger.accounts],
        "transactionTypes": [transaction_type_to_dict(t) for t in ledger.transaction_types],
        "categories": [category_to_dict(c) for c in ledger.categories],
        "transactions": [transaction_to_dict(t) for t in ledger.transactions],
    }


def snapshot_from_dict(data: dict[str, Any]) -> ImportSnapshot:
    """Convert a (possibly partial) snapshot dict to an ImportSnapshot.

    Collections missing from ``data`` stay ``None`` so applying the result
    leaves them untouched.

    Raises:
        ValidationError: If a present collection holds malformed records
    """
    if not isinstance(data, dict):
        raise ValidationError("Snapshot must be a JSON object")

    readers = {
        "accounts": ("accounts", account_from_dict),
        "transactions": ("transactions", transaction_from_dict),
        "categories": ("categories", category_from_dict),
        "transactionTypes": ("transaction_types", transaction_type_from_dict),
    }
    collections = {}
    for key, (field_name, reader) in readers.items():
        if key not in data:
            continue
        try:
            collections[field_name] = tuple(reader(item) for item in data[key])
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            raise ValidationError(f"Invalid record in '{key}': {e}") from e
    return ImportSnapshot(**collections)


def ledger_from_dict(data: dict[str, Any], base: domain.Ledger) -> domain.Ledger:
    """Overlay a snapshot dict on ``base`` and return the merged ledger."""
    snapshot = snapshot_from_dict(data)
    return domain.Ledger(
        accounts=base.accounts if snapshot.accounts is None else snapshot.accounts,
        transactions=base.transactions if snapshot.transactions is None else snapshot.transactions,
        categories=base.categories if snapshot.categories is None else snapshot.categories,
        transaction_types=(
            base.transaction_types
            if snapshot.transaction_types is None
            else snapshot.transaction_types
        ),
    )
