import logging

from ..errors import ClientError, ValidationFailure
from ..schemas import Transaction, TransactionCreate
from .backend_client import BackendClient
from .category_registry import CategoryRegistry
from .forms import validate_form

logger = logging.getLogger(__name__)


class TransactionStore:
    """The user's transactions as last fetched from the backend.

    Records are never edited in place; creating or deleting one goes through
    the backend and is followed by a refetch.
    """

    def __init__(self, client: BackendClient, categories: CategoryRegistry):
        self.client = client
        self.categories = categories
        self.transactions: list[Transaction] = []

    async def refresh(self) -> list[Transaction]:
        self.transactions = await self.client.fetch_transactions()
        logger.debug("Loaded %d transactions", len(self.transactions))
        return self.transactions

    def validate(self, data: TransactionCreate) -> None:
        """Check the category against the registry before anything is sent."""
        known = self.categories.categories_for_type(data.type.value)
        if known and data.category not in known:
            raise ValidationFailure(
                f"Unknown {data.type.value} category '{data.category}'",
                field="category",
            )

    async def create(self, form: dict | TransactionCreate) -> list[Transaction]:
        data = validate_form(TransactionCreate, form)
        self.validate(data)
        try:
            await self.client.create_transaction(data)
        except ClientError as exc:
            logger.error("Failed to create transaction: %s", exc.message)
            raise
        return await self.refresh()

    async def delete(self, transaction_id: str) -> list[Transaction]:
        try:
            await self.client.delete_transaction(transaction_id)
        except ClientError as exc:
            logger.error("Failed to delete transaction %s: %s", transaction_id, exc.message)
            raise
        return await self.refresh()

    def recent(self, limit: int = 10) -> list[Transaction]:
        """Newest transactions first."""
        return sorted(self.transactions, key=lambda t: t.date, reverse=True)[:limit]
