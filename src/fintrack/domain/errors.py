"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as an ambiguous name."""


def account_not_found(account: str) -> str:
    """Return message for missing account."""
    return f"Account '{account}' not found"


def category_not_found(category: str) -> str:
    """Return message for missing category."""
    return f"Category '{category}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def transaction_type_not_found(type_id: str) -> str:
    """Return message for missing transaction type."""
    return f"Transaction type '{type_id}' not found"


def ambiguous_name(kind: str, name: str, count: int) -> str:
    """Return message when a name matches several records."""
    return f"{count} {kind}s are named '{name}'; use the ID instead"
