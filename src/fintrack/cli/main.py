"""Main CLI entry point."""

import logging

import click
from fintrack.database.bridge import DEFAULT_SLOT, SnapshotBridge, open_store
from fintrack.database.factories import create_sqlite_repository

# Import and register all commands at module level
from fintrack.cli.commands import (
    account,
    category,
    transaction_type,
    transaction,
    import_cmd,
    export_cmd,
    summary,
    reset,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINTRACK_DB_PATH environment variable)",
    envvar="FINTRACK_DB_PATH",
)
@click.option(
    "--slot",
    default=DEFAULT_SLOT,
    show_default=True,
    envvar="FINTRACK_SLOT",
    help="Name of the saved-data slot",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, slot: str, verbose: bool):
    """Fintrack - Personal finance tracker.

    Keep accounts, categories and transactions in one ledger, with balances
    that follow every change, and import or export your data as CSV, Excel
    or JSON.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)
    ctx.ensure_object(dict)

    # Load the ledger only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        repository = create_sqlite_repository(database_path=db_path)
        repository.connect()
        bridge = SnapshotBridge(repository, slot=slot)
        store = open_store(bridge)
        ctx.obj["store"] = store

        def _close():
            store.flush()
            repository.disconnect()

        ctx.call_on_close(_close)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
transaction_type.register_commands(cli)
transaction.register_commands(cli)
import_cmd.register_commands(cli)
export_cmd.register_commands(cli)
summary.register_commands(cli)
reset.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
