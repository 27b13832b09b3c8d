"""Transaction type commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.entities import TRANSACTION_CATEGORIES
from fintrack.domain.errors import DomainError
from fintrack.domain.transaction_type import TransactionTypeService


@click.group()
def type_group():
    """Manage transaction types."""
    pass


@type_group.command("list")
@click.pass_context
def list_types(ctx):
    """List transaction types."""
    service = TransactionTypeService(ctx.obj["store"])

    types = service.list_types()
    if not types:
        click.echo("No transaction types found.")
        return

    click.echo("\nTransaction types:")
    for transaction_type in types:
        click.echo(
            f"ID: {transaction_type.id:>12s} | {transaction_type.name:20s} | {transaction_type.category}"
        )


@type_group.command("add")
@click.argument("name")
@click.option(
    "--category",
    type=click.Choice(TRANSACTION_CATEGORIES, case_sensitive=False),
    default="expense",
    show_default=True,
    help="Whether the type adds to (income) or takes from the balance",
)
@click.pass_context
def add_type(ctx, name: str, category: str):
    """Create a transaction type."""
    service = TransactionTypeService(ctx.obj["store"])

    try:
        transaction_type = service.create_type(name=name, category=category)
        click.echo(f"Created transaction type '{transaction_type.name}' (ID: {transaction_type.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@type_group.command("delete")
@click.argument("type_id")
@click.pass_context
def delete_type(ctx, type_id: str):
    """Delete a transaction type by ID."""
    service = TransactionTypeService(ctx.obj["store"])

    try:
        service.delete_type(type_id)
        click.echo(f"Deleted transaction type {type_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register transaction type commands with main CLI."""
    cli.add_command(type_group, name="type")
