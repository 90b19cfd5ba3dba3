from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from ..schemas import Stats, TransactionFormDefaults, TransactionType
from .aggregation import calculate_stats
from .backend_client import BackendClient
from .budget_book import BudgetBook
from .category_registry import CategoryRegistry
from .filter_controller import FilterController
from .transaction_store import TransactionStore


class Workspace:
    """All client-side state for one signed-in session.

    The store, registry, budget book and filter controller share one backend
    client, which carries the session token the workspace was created for.
    """

    def __init__(
        self,
        client: BackendClient,
        clock: Callable[[], date] = date.today,
        currency_symbol: str = "₹",
    ):
        self.client = client
        self.clock = clock
        self.categories = CategoryRegistry(client)
        self.store = TransactionStore(client, self.categories)
        self.budgets = BudgetBook(client, self.store, self.categories, clock, currency_symbol)
        self.filters = FilterController(self.store, client, self.categories, clock)

    def stats(self) -> Stats:
        return calculate_stats(self.store.transactions, self.clock())

    def transaction_form_defaults(self, type_: TransactionType = TransactionType.EXPENSE) -> TransactionFormDefaults:
        return TransactionFormDefaults(
            category=self.categories.default_category(type_.value),
            type=type_,
            date=self.clock(),
        )


@dataclass
class WorkspaceRegistry:
    """Workspaces keyed by session token, least recently used evicted first.

    A workspace belongs to exactly one token, so its backend client never
    changes after creation and concurrent sessions cannot see each other's.
    """
    factory: Callable[[BackendClient], Workspace]
    max_size: int = 256
    workspaces: OrderedDict[str, Workspace] = field(default_factory=OrderedDict)

    def get(self, token: str, client: BackendClient) -> Workspace:
        """Workspace for ``token``; ``client`` is only used to create one."""
        workspace = self.workspaces.get(token)
        if workspace is None:
            workspace = self.factory(client)
            self.workspaces[token] = workspace
            while len(self.workspaces) > self.max_size:
                self.workspaces.popitem(last=False)
        else:
            self.workspaces.move_to_end(token)
        return workspace

    def discard(self, token: str) -> None:
        self.workspaces.pop(token, None)
