from .aggregation import (
    filter_transactions,
    aggregate_by_category,
    compute_budget_rollup,
    budget_status,
    apply_current_spending,
    budget_totals,
    budget_insights,
    category_insights,
    calculate_stats,
    format_currency,
)
from .backend_client import BackendClient
from .category_registry import CategoryRegistry, FALLBACK_CATEGORIES
from .transaction_store import TransactionStore
from .budget_book import BudgetBook
from .filter_controller import FilterController, default_filter
from .route_guard import GuardAction, GuardDecision, guard, verify_token
from .workspace import Workspace, WorkspaceRegistry

__all__ = [
    "filter_transactions",
    "aggregate_by_category",
    "compute_budget_rollup",
    "budget_status",
    "apply_current_spending",
    "budget_totals",
    "budget_insights",
    "category_insights",
    "calculate_stats",
    "format_currency",
    "BackendClient",
    "CategoryRegistry",
    "FALLBACK_CATEGORIES",
    "TransactionStore",
    "BudgetBook",
    "FilterController",
    "default_filter",
    "GuardAction",
    "GuardDecision",
    "guard",
    "verify_token",
    "Workspace",
    "WorkspaceRegistry",
]
