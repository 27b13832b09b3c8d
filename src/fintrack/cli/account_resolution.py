"""CLI helpers for account and category resolution."""

from __future__ import annotations

import click
from fintrack.domain.entities import Ledger
from fintrack.domain.errors import DomainError
from fintrack.utils.account_resolver import resolve_account, resolve_category


def resolve_account_or_exit(ctx: click.Context, ledger: Ledger, account: str) -> str:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(ledger, account)
    except DomainError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_category_or_exit(ctx: click.Context, ledger: Ledger, category: str) -> str:
    """Resolve category name or ID, or exit with a CLI error."""
    try:
        return resolve_category(ledger, category)
    except DomainError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
