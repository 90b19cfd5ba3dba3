from .common import Money, Percentage
from .transaction import (
    TransactionType,
    Transaction,
    TransactionCreate,
    TransactionFormDefaults,
)
from .category import CategorySet, CategoryCreate
from .budget import (
    BudgetCreate,
    BudgetUpdate,
    Budget,
    BudgetAggregate,
    BudgetStatus,
    BudgetTotals,
    BudgetFormDefaults,
    BudgetInsights,
)
from .analytics import (
    ALL,
    FilterType,
    Filter,
    FilterState,
    CategoryAggregate,
    CategoryInsights,
    MonthlyAggregate,
    Stats,
)
from .user import User, Identity, FALLBACK_USER
from .pages import PageUser, DashboardPage, AnalyticsPage, BudgetPage, PublicPage

__all__ = [
    "Money",
    "Percentage",
    "TransactionType",
    "Transaction",
    "TransactionCreate",
    "TransactionFormDefaults",
    "CategorySet",
    "CategoryCreate",
    "BudgetCreate",
    "BudgetUpdate",
    "Budget",
    "BudgetAggregate",
    "BudgetStatus",
    "BudgetTotals",
    "BudgetFormDefaults",
    "BudgetInsights",
    "ALL",
    "FilterType",
    "Filter",
    "FilterState",
    "CategoryAggregate",
    "CategoryInsights",
    "MonthlyAggregate",
    "Stats",
    "User",
    "Identity",
    "FALLBACK_USER",
    "PageUser",
    "DashboardPage",
    "AnalyticsPage",
    "BudgetPage",
    "PublicPage",
]
