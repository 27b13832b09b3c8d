"""Transaction management commands."""

import click
from fintrack.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.entities import DEFAULT_TIME
from fintrack.domain.errors import DomainError
from fintrack.domain.reports import account_name, category_name
from fintrack.domain.transaction import TransactionService
from fintrack.domain.transaction_type import TransactionTypeService
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.date_parser import format_display_date, parse_date


def _resolve_type_or_exit(ctx, store, value: str) -> str:
    category = TransactionTypeService(store).resolve_category(value)
    if category is None:
        click.echo(f"Error: Unknown transaction type '{value}'", err=True)
        ctx.exit(1)
    return category


def _parse_date_or_exit(ctx, value: str, label: str = "date"):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--amount", required=True, help="Amount (positive; the type sets the sign)")
@click.option("--type", "type_", default="expense", show_default=True,
              help="Transaction type name or category (income, expense, transfer)")
@click.option("--date", default="today", show_default=True,
              help="Transaction date (YYYY-MM-DD, DD/MM/YYYY, 'today', 'yesterday')")
@click.option("--time", default=DEFAULT_TIME, show_default=True, help="Time of day (HH:MM)")
@click.option("--description", default="", help="Transaction description")
@click.option("--category", help="Category name or ID")
@click.option("--subcategory", default="", help="Subcategory of the category")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    amount: str,
    type_: str,
    date: str,
    time: str,
    description: str,
    category: str | None,
    subcategory: str,
):
    """Add a transaction and update the account balance.

    Examples:
        fintrack transaction add --account "Checking Account" --amount 42.10 --category "Food & Dining" --subcategory Groceries
        fintrack transaction add --account 1 --amount 2500 --type income --date 01/02/2024
    """
    store = ctx.obj["store"]
    service = TransactionService(store)

    account_id = resolve_account_or_exit(ctx, store.state, account)
    category_id = resolve_category_or_exit(ctx, store.state, category) if category else ""
    transaction_type = _resolve_type_or_exit(ctx, store, type_)
    txn_date = _parse_date_or_exit(ctx, date)
    txn_amount = _parse_amount_or_exit(ctx, amount)

    try:
        txn = service.create_transaction(
            account_id=account_id,
            date=txn_date,
            amount=txn_amount,
            transaction_type=transaction_type,
            time=time,
            description=description,
            category_id=category_id,
            subcategory=subcategory,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    account_obj = store.state.get_account(account_id)
    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Account: {account_obj.name}")
    click.echo(f"  Date: {format_display_date(txn.date)} {txn.time}")
    click.echo(f"  Amount: {txn.amount:,.2f} ({txn.type})")
    click.echo(f"  Balance: {account_obj.balance:,.2f}")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or DD/MM/YYYY)")
@click.option("--end-date", help="End date (YYYY-MM-DD or DD/MM/YYYY)")
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.pass_context
def list_transactions(ctx, start_date, end_date, account, category):
    """List transactions, newest first."""
    store = ctx.obj["store"]
    service = TransactionService(store)
    ledger = store.state

    start = _parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = _parse_date_or_exit(ctx, end_date, "end date") if end_date else None
    account_id = resolve_account_or_exit(ctx, ledger, account) if account else None
    category_id = resolve_category_or_exit(ctx, ledger, category) if category else None

    transactions = service.list_transactions(
        start_date=start, end_date=end, account_id=account_id, category_id=category_id
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(
        f"{'ID':>12s}  {'Date':10s} {'Time':5s}  {'Type':8s}  {'Account':20s}  "
        f"{'Category':28s}  {'Amount':>12s}  Description"
    )
    click.echo("-" * 122)
    for txn in transactions:
        category_label = category_name(ledger, txn.category)
        if txn.subcategory:
            category_label = f"{category_label} > {txn.subcategory}"
        click.echo(
            f"{txn.id:>12s}  {format_display_date(txn.date):10s} {txn.time:5s}  {txn.type:8s}  "
            f"{account_name(ledger, txn.account)[:20]:20s}  {category_label[:28]:28s}  "
            f"{txn.amount:>12,.2f}  {txn.description}"
        )


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--account", help="Account name or ID")
@click.option("--amount", help="Amount (positive; the type sets the sign)")
@click.option("--type", "type_", help="Transaction type name or category")
@click.option("--date", help="Transaction date")
@click.option("--time", help="Time of day (HH:MM)")
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category name or ID, or empty string to clear")
@click.option("--subcategory", help="Subcategory, or empty string to clear")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    account: str | None,
    amount: str | None,
    type_: str | None,
    date: str | None,
    time: str | None,
    description: str | None,
    category: str | None,
    subcategory: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. The old amount is taken off
    the old account before the new amount is applied.

    Examples:
        fintrack transaction update 1 --amount 75.00
        fintrack transaction update 1 --type income
        fintrack transaction update 1 --category ""  # Clear category
    """
    store = ctx.obj["store"]
    service = TransactionService(store)
    ledger = store.state

    account_id = resolve_account_or_exit(ctx, ledger, account) if account is not None else None
    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, ledger, category) if category else ""
    transaction_type = _resolve_type_or_exit(ctx, store, type_) if type_ is not None else None
    txn_date = _parse_date_or_exit(ctx, date) if date is not None else None
    txn_amount = _parse_amount_or_exit(ctx, amount) if amount is not None else None

    try:
        service.update_transaction(
            transaction_id,
            account_id=account_id,
            date=txn_date,
            amount=txn_amount,
            transaction_type=transaction_type,
            time=time,
            description=description,
            category_id=category_id,
            subcategory=subcategory,
        )
        click.echo(f"Updated transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str) -> None:
    """Delete a transaction and reverse its effect on the balance."""
    store = ctx.obj["store"]
    service = TransactionService(store)

    try:
        txn = service.delete_transaction(transaction_id)
        click.echo(f"Deleted transaction {txn.id} ({txn.amount:,.2f} {txn.type})")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
