from pydantic import BaseModel

from .analytics import CategoryAggregate, CategoryInsights, Filter, MonthlyAggregate, Stats
from .budget import BudgetAggregate, BudgetFormDefaults, BudgetInsights, BudgetStatus, BudgetTotals
from .category import CategorySet
from .transaction import Transaction, TransactionFormDefaults
from .user import User


class PageUser(BaseModel):
    id: str
    username: str
    email: str
    display_name: str

    @classmethod
    def from_user(cls, user: User) -> "PageUser":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            display_name=user.display_name,
        )


class DashboardPage(BaseModel):
    user: PageUser
    stats: Stats
    recent_transactions: list[Transaction]
    monthly: list[MonthlyAggregate]
    categories: CategorySet
    form: TransactionFormDefaults


class AnalyticsPage(BaseModel):
    user: PageUser
    draft: Filter
    applied: Filter
    category_data: list[CategoryAggregate]
    insights: CategoryInsights
    available_categories: list[str]
    loading: bool


class BudgetPage(BaseModel):
    user: PageUser
    budgets: list[BudgetStatus]
    totals: BudgetTotals
    insights: BudgetInsights
    comparison: list[BudgetAggregate]
    expense_categories: list[str]
    form: BudgetFormDefaults


class PublicPage(BaseModel):
    page: str
    links: dict[str, str]
