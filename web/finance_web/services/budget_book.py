import asyncio
import logging
from collections.abc import Callable
from datetime import date

from ..errors import ClientError
from ..schemas import (
    Budget,
    BudgetAggregate,
    BudgetCreate,
    BudgetFormDefaults,
    BudgetInsights,
    BudgetStatus,
    BudgetTotals,
    BudgetUpdate,
)
from .aggregation import apply_current_spending, budget_insights, budget_totals
from .backend_client import BackendClient
from .category_registry import CategoryRegistry
from .forms import validate_form
from .transaction_store import TransactionStore

logger = logging.getLogger(__name__)


class BudgetBook:
    """The user's budgets and their spending for the current month."""

    def __init__(
        self,
        client: BackendClient,
        store: TransactionStore,
        categories: CategoryRegistry,
        clock: Callable[[], date] = date.today,
        currency_symbol: str = "₹",
    ):
        self.client = client
        self.store = store
        self.categories = categories
        self.clock = clock
        self.currency_symbol = currency_symbol
        self.budgets: list[Budget] = []

    async def refresh(self) -> list[Budget]:
        """Fetch transactions and budgets together, then join them.

        Each side falls back to an empty list on its own; a 401 from either
        one propagates.
        """
        transactions, budgets = await asyncio.gather(
            self.client.fetch_transactions(),
            self.client.fetch_budgets(),
        )
        self.store.transactions = transactions
        self.budgets = budgets
        return self.budgets

    def statuses(self) -> list[BudgetStatus]:
        # Spending always comes from the current month, whatever month the
        # budget itself is tagged with.
        return apply_current_spending(
            self.budgets, self.store.transactions, self.clock(), self.currency_symbol
        )

    def totals(self) -> BudgetTotals:
        return budget_totals(self.statuses())

    def insights(self) -> BudgetInsights:
        return budget_insights(self.statuses())

    def form_defaults(self) -> BudgetFormDefaults:
        today = self.clock()
        return BudgetFormDefaults(
            category=self.categories.default_category("expense"),
            month=today.month,
            year=today.year,
        )

    async def comparison(self) -> list[BudgetAggregate]:
        return await self.client.fetch_budget_comparison()

    async def create(self, form: dict | BudgetCreate) -> list[Budget]:
        data = validate_form(BudgetCreate, form)
        try:
            await self.client.create_budget(data)
        except ClientError as exc:
            logger.error("Error creating budget: %s", exc.message)
            raise
        return await self.refresh()

    async def update_amount(self, budget_id: str, form: dict | BudgetUpdate) -> list[Budget]:
        data = validate_form(BudgetUpdate, form)
        try:
            await self.client.update_budget(budget_id, data)
        except ClientError as exc:
            logger.error("Failed to update budget %s: %s", budget_id, exc.message)
            raise
        return await self.refresh()

    async def delete(self, budget_id: str) -> list[Budget]:
        try:
            await self.client.delete_budget(budget_id)
        except ClientError as exc:
            logger.error("Failed to delete budget %s: %s", budget_id, exc.message)
            raise
        return await self.refresh()
