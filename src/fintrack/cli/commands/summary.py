"""Summary commands."""

import click
from fintrack.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from fintrack.domain.entities import INCOME
from fintrack.domain.reports import account_name, build_report
from fintrack.utils.date_parser import format_display_date, get_date_range, parse_date


@click.command("summary")
@click.option("--start-date", help="Start date (YYYY-MM-DD, DD/MM/YYYY or 'today')")
@click.option("--end-date", help="End date (YYYY-MM-DD, DD/MM/YYYY or 'today')")
@click.option("--this-month", is_flag=True, help="Filter to current month")
@click.option("--this-year", is_flag=True, help="Filter to current year")
@click.option("--last-month", is_flag=True, help="Filter to previous month")
@click.option("--last-year", is_flag=True, help="Filter to previous year")
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.option("--recent", default=5, show_default=True, type=click.IntRange(min=0),
              help="Number of recent transactions to show")
@click.pass_context
def summary(
    ctx,
    start_date: str,
    end_date: str,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
    account: str,
    category: str,
    recent: int,
):
    """Show balances, income, expenses and spending by category."""
    store = ctx.obj["store"]
    ledger = store.state

    periods = {
        "this-month": this_month,
        "this-year": this_year,
        "last-month": last_month,
        "last-year": last_year,
    }
    selected = [name for name, flag in periods.items() if flag]

    if len(selected) > 1:
        click.echo("Error: Only one period option (--this-month, --this-year, --last-month, --last-year) can be specified at a time.", err=True)
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo("Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.", err=True)
        ctx.exit(1)

    start = None
    end = None
    if selected:
        start, end = get_date_range(selected[0])
    else:
        if start_date:
            try:
                start = parse_date(start_date)
            except ValueError as e:
                click.echo(f"Error: Invalid start date: {e}", err=True)
                ctx.exit(1)

        if end_date:
            try:
                end = parse_date(end_date)
            except ValueError as e:
                click.echo(f"Error: Invalid end date: {e}", err=True)
                ctx.exit(1)

    account_id = resolve_account_or_exit(ctx, ledger, account) if account else None
    category_id = resolve_category_or_exit(ctx, ledger, category) if category else None

    report = build_report(
        ledger,
        start_date=start,
        end_date=end,
        account_id=account_id,
        category_id=category_id,
        recent_limit=recent,
    )

    if start or end:
        start_label = format_display_date(start) if start else "..."
        end_label = format_display_date(end) if end else "..."
        click.echo(f"Period: {start_label} - {end_label}")

    click.echo(f"{'Total Balance':<30} {report.total_balance:>15,.2f}")
    click.echo(f"{'Income':<30} {report.total_income:>15,.2f}")
    click.echo(f"{'Expenses':<30} {report.total_expenses:>15,.2f}")
    click.echo(f"{'Net':<30} {report.net_income:>15,.2f}")
    click.echo(f"{'Transactions':<30} {report.transaction_count:>15d}")

    click.echo("\nAccounts:")
    for name, balance in report.account_balances.items():
        click.echo(f"  {name:<28} {balance:>15,.2f}")

    if report.categories:
        click.echo("\nExpenses by category:")
        for item in report.categories:
            click.echo(f"  {item.name:<28} {item.total:>15,.2f} {item.percentage:6.1f}%")

    if len(report.months) > 1:
        click.echo("\nMonthly trend:")
        for month in report.months:
            click.echo(
                f"  {month.month:<10} income {month.income:>12,.2f}  "
                f"expenses {month.expenses:>12,.2f}  net {month.net:>12,.2f}"
            )

    if report.recent:
        click.echo("\nRecent transactions:")
        for txn in report.recent:
            sign = "+" if txn.type == INCOME else "-"
            click.echo(
                f"  {format_display_date(txn.date)}  {account_name(ledger, txn.account)[:20]:<20} "
                f"{sign}{txn.amount:,.2f}  {txn.description}"
            )


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
