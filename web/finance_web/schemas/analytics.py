import enum
from datetime import date
from decimal import Decimal
from pydantic import BaseModel, ConfigDict

from .common import Money, Percentage

ALL = "All"


class FilterType(str, enum.Enum):
    """Transaction types selectable in the analytics filter."""
    INCOME = "income"
    EXPENSE = "expense"
    ALL = ALL


class Filter(BaseModel):
    """Query parameters for the analytics views."""
    model_config = ConfigDict(frozen=True)

    category: str = ALL
    type: FilterType = FilterType.EXPENSE
    start_date: date
    end_date: date


class FilterState(BaseModel):
    """The filter being edited and the filter driving the aggregates."""
    model_config = ConfigDict(frozen=True)

    draft: Filter
    applied: Filter


class CategoryAggregate(BaseModel):
    category: str
    amount: Money
    count: int
    percentage: Percentage


class MonthlyAggregate(BaseModel):
    month: str
    amount: Money


class Stats(BaseModel):
    total_income: Money = Decimal("0")
    total_expenses: Money = Decimal("0")
    balance: Money = Decimal("0")
    monthly_income: Money = Decimal("0")
    monthly_expenses: Money = Decimal("0")


class CategoryInsights(BaseModel):
    """Highlights of a category breakdown; empty when there is no data."""
    top_category: str | None = None
    top_amount: Money = Decimal("0")
    top_percentage: Percentage = Decimal("0")
    frequent_category: str | None = None
    frequent_count: int = 0
