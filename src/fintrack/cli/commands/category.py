"""Category management commands."""

import click
from fintrack.cli.account_resolution import resolve_category_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.category import CategoryService
from fintrack.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories with their subcategories."""
    store = ctx.obj["store"]
    service = CategoryService(store)

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"{cat.name} (ID: {cat.id})")
        for sub in cat.subcategories:
            click.echo(f"  {sub}")


@category_group.command("add")
@click.argument("name")
@click.option("--sub", "subcategories", multiple=True, help="Subcategory (repeatable)")
@click.pass_context
def add_category(ctx, name: str, subcategories: tuple[str, ...]):
    """Create a new category.

    Examples:
        fintrack category add "Health" --sub Pharmacy --sub Doctor
    """
    store = ctx.obj["store"]
    service = CategoryService(store)

    try:
        category = service.create_category(name=name, subcategories=subcategories)
        click.echo(f"Created category '{category.name}' (ID: {category.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("update")
@click.argument("category")
@click.option("--name", help="New category name")
@click.option(
    "--sub",
    "subcategories",
    multiple=True,
    help="Subcategory (repeatable); replaces the current list",
)
@click.option("--clear-subs", is_flag=True, help="Remove all subcategories")
@click.pass_context
def update_category(
    ctx, category: str, name: str | None, subcategories: tuple[str, ...], clear_subs: bool
):
    """Update a category.

    CATEGORY can be a category name or ID.
    """
    store = ctx.obj["store"]
    service = CategoryService(store)
    category_id = resolve_category_or_exit(ctx, store.state, category)

    if clear_subs and subcategories:
        click.echo("Error: Cannot use --sub together with --clear-subs", err=True)
        ctx.exit(1)

    new_subs = None
    if clear_subs:
        new_subs = ()
    elif subcategories:
        new_subs = subcategories

    try:
        updated = service.update_category(category_id, name=name, subcategories=new_subs)
        click.echo(f"Updated category '{updated.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("category")
@click.pass_context
def delete_category(ctx, category: str):
    """Delete a category.

    Transactions keep their category reference and show it as blank.
    """
    store = ctx.obj["store"]
    service = CategoryService(store)
    category_id = resolve_category_or_exit(ctx, store.state, category)
    name = service.get_category(category_id).name

    try:
        service.delete_category(category_id)
        click.echo(f"Deleted category '{name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
