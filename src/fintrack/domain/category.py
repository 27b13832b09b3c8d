"""Category domain service."""

from dataclasses import replace
from typing import Optional, Sequence

from fintrack.domain.entities import Category, validate_category
from fintrack.domain.errors import ConflictError, NotFoundError, category_not_found
from fintrack.domain.ledger import LedgerStore


def _clean_subcategories(subcategories: Sequence[str]) -> tuple[str, ...]:
    # Blank entries are dropped, the same as empty form rows.
    return tuple(sub.strip() for sub in subcategories if sub.strip())


class CategoryService:
    """Service for managing categories."""

    def __init__(self, store: LedgerStore):
        """Initialize category service.

        Args:
            store: Ledger store
        """
        self.store = store

    def _check_unique_name(self, name: str, exclude_id: Optional[str] = None) -> None:
        wanted = name.strip().lower()
        for cat in self.store.state.categories:
            if cat.id != exclude_id and cat.name.strip().lower() == wanted:
                raise ConflictError(f"Category with name '{cat.name}' already exists")

    def create_category(self, name: str, subcategories: Sequence[str] = ()) -> Category:
        """Create a category.

        Args:
            name: Category name
            subcategories: Subcategory names, in display order

        Returns:
            The created category

        Raises:
            ValidationError: If the name is blank or subcategories repeat
            ConflictError: If a category with the same name exists
        """
        category = validate_category(
            Category(id="", name=name.strip(), subcategories=_clean_subcategories(subcategories))
        )
        self._check_unique_name(category.name)
        ledger = self.store.add_category(category)
        return ledger.categories[-1]

    def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by ID."""
        return self.store.state.get_category(category_id)

    def list_categories(self) -> list[Category]:
        """List all categories."""
        return list(self.store.state.categories)

    def update_category(
        self,
        category_id: str,
        name: Optional[str] = None,
        subcategories: Optional[Sequence[str]] = None,
    ) -> Category:
        """Replace a category's name and/or subcategory list.

        Transactions keep their subcategory text even if it is removed from
        the category.

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If the new values are invalid
            ConflictError: If the new name is taken
        """
        category = self.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))

        updated = replace(
            category,
            name=category.name if name is None else name.strip(),
            subcategories=(
                category.subcategories
                if subcategories is None
                else _clean_subcategories(subcategories)
            ),
        )
        validate_category(updated)
        if name is not None:
            self._check_unique_name(updated.name, exclude_id=category_id)

        self.store.update_category(updated)
        return updated

    def delete_category(self, category_id: str) -> None:
        """Delete a category.

        Transactions referencing it keep the dangling ID.

        Raises:
            NotFoundError: If the category does not exist
        """
        if self.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))
        self.store.delete_category(category_id)
