"""Import command."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.errors import DomainError
from fintrack.domain.importer import ImportService


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_file(ctx, file: str):
    """Import data from a CSV, Excel (.xlsx) or JSON file.

    CSV and Excel files need the columns Date, Time, Type, Account,
    Description, Category, Subcategory and Amount, with dates as
    DD/MM/YYYY. Unknown accounts and categories are created.

    JSON files are full backups (as written by 'export --format json') and
    replace the accounts and transactions they contain.
    """
    service = ImportService(ctx.obj["store"])

    try:
        result = service.import_file(file)
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)
        return

    if result.status == "failed":
        click.echo(f"Error: {result.message}", err=True)
        ctx.exit(1)

    click.echo(result.message)
    for error in result.errors:
        click.echo(f"  {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_file)
