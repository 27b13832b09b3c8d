"""Reset command."""

import click
from fintrack.domain import operations as ops
from fintrack.domain.seed import seed_ledger


@click.command("reset")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset_data(ctx, yes: bool):
    """Replace all data with the starting sample data."""
    store = ctx.obj["store"]

    if not yes and not click.confirm("This replaces all accounts and transactions. Continue?"):
        click.echo("Reset cancelled.")
        return

    seed = seed_ledger()
    store.import_snapshot(
        ops.ImportSnapshot(
            accounts=seed.accounts,
            transactions=seed.transactions,
            categories=seed.categories,
            transaction_types=seed.transaction_types,
        )
    )
    click.echo("Restored sample data.")


def register_commands(cli):
    """Register reset command with main CLI."""
    cli.add_command(reset_data)
