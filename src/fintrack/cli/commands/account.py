"""Account management commands."""

import click
from fintrack.cli.account_resolution import resolve_account_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.account import AccountService
from fintrack.domain.entities import ACCOUNT_TYPES
from fintrack.domain.errors import DomainError
from fintrack.utils.amount_parser import parse_amount


def _parse_balance(ctx, value: str):
    """Parse a balance option; balances may be negative."""
    try:
        return parse_amount(value, allow_negative=True)
    except ValueError as e:
        click.echo(f"Error: Invalid balance: {e}", err=True)
        ctx.exit(1)


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("add")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    default="checking",
    show_default=True,
    help="Account type",
)
@click.option("--balance", default="0", help="Starting balance (may be negative for credit)")
@click.pass_context
def add_account(ctx, name: str, account_type: str, balance: str):
    """Create a new account.

    Examples:
        fintrack account add "Chase Checking"
        fintrack account add "Visa" --type credit --balance -250.00
    """
    store = ctx.obj["store"]
    service = AccountService(store)
    starting_balance = _parse_balance(ctx, balance)

    try:
        account = service.create_account(
            name=name, account_type=account_type.lower(), balance=starting_balance
        )
        click.echo(f"Created account '{account.name}' (ID: {account.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balances."""
    store = ctx.obj["store"]
    service = AccountService(store)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        click.echo(f"ID: {acc.id:>12s} | {acc.name:24s} | {acc.type:10s} | {acc.balance:>12,.2f}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="New account type",
)
@click.option("--balance", help="Overwrite the stored balance")
@click.pass_context
def update_account(ctx, account: str, name: str | None, account_type: str | None, balance: str | None):
    """Update an account.

    ACCOUNT can be an account name or ID.

    Examples:
        fintrack account update "Chase Checking" --name "Chase"
        fintrack account update 2 --type savings
    """
    store = ctx.obj["store"]
    service = AccountService(store)
    account_id = resolve_account_or_exit(ctx, store.state, account)

    new_balance = _parse_balance(ctx, balance) if balance is not None else None

    try:
        updated = service.update_account(
            account_id,
            name=name,
            account_type=account_type.lower() if account_type else None,
            balance=new_balance,
        )
        click.echo(f"Updated account '{updated.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    Transactions of the account are kept and listed as "Unknown Account".

    Examples:
        fintrack account delete "Chase"
        fintrack account delete 1 --yes
    """
    store = ctx.obj["store"]
    service = AccountService(store)
    account_id = resolve_account_or_exit(ctx, store.state, account)
    account_obj = service.get_account(account_id)

    count = service.transaction_count(account_id)
    if count:
        click.echo(
            f"Warning: {count} transaction{'s' if count != 1 else ''} "
            "will be kept without an account."
        )

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
        click.echo(f"Deleted account '{account_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
