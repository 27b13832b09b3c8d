"""Export command."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.errors import DomainError
from fintrack.domain.exporter import EXPORT_FORMATS, export_ledger


@click.command("export")
@click.argument("file", type=click.Path(dir_okay=False, writable=True))
@click.option(
    "--format",
    "export_format",
    type=click.Choice(EXPORT_FORMATS, case_sensitive=False),
    help="Output format (defaults to the file extension)",
)
@click.pass_context
def export_file(ctx, file: str, export_format: str | None):
    """Export transactions (CSV, Excel) or a full backup (JSON).

    Examples:
        fintrack export transactions.xlsx
        fintrack export backup.json
        fintrack export out.txt --format csv
    """
    store = ctx.obj["store"]

    try:
        count = export_ledger(store.state, file, export_format)
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Exported {count} transactions to {file}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_file)
