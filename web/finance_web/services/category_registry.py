import logging

from ..errors import BackendRejected, NetworkFailure, ParseFailure, ValidationFailure
from ..schemas import CategoryCreate, CategorySet, TransactionType
from .backend_client import BackendClient

logger = logging.getLogger(__name__)

# Used when the backend category list cannot be loaded
FALLBACK_CATEGORIES = CategorySet(
    income=["Salary", "Business Income", "Investment Returns", "Other Income"],
    expense=["Food & Dining", "Rent & Housing", "Transportation", "Utilities", "Other Expenses"],
)


class CategoryRegistry:
    """Valid income and expense category names for forms and filters."""

    def __init__(self, client: BackendClient):
        self.client = client
        self.categories = CategorySet()
        self.error: str | None = None

    async def refresh(self) -> CategorySet:
        """Reload the category set, falling back to the defaults on failure."""
        self.error = None
        try:
            self.categories = await self.client.fetch_categories()
        except (NetworkFailure, ParseFailure, BackendRejected) as exc:
            logger.warning("Error fetching categories: %s", exc.message)
            self.error = exc.message
            self.categories = FALLBACK_CATEGORIES.model_copy(deep=True)
        return self.categories

    async def ensure_loaded(self) -> CategorySet:
        """Load the set unless it has already been loaded."""
        if not self.categories.income and not self.categories.expense:
            return await self.refresh()
        return self.categories

    def categories_for_type(self, type_: str) -> list[str]:
        return self.categories.for_type(type_)

    def default_category(self, type_: str) -> str:
        names = self.categories_for_type(type_)
        return names[0] if names else ""

    def is_known(self, name: str, type_: str) -> bool:
        return name in self.categories_for_type(type_)

    async def add_category(self, name: str, type_: TransactionType | str) -> CategorySet:
        """Create a category and reload the set.

        Backend failures propagate to the caller, which reports them.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationFailure("Category name is required", field="name")
        try:
            type_ = TransactionType(type_)
        except ValueError as exc:
            raise ValidationFailure("Type must be income or expense", field="type") from exc
        if self.is_known(name, type_.value):
            raise ValidationFailure(f"Category '{name}' already exists", field="name")

        await self.client.create_category(CategoryCreate(name=name, type=type_))
        return await self.refresh()
