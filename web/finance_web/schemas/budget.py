from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import Money, Percentage


# --- Input schemas ---

class BudgetCreate(BaseModel):
    category: str = Field(min_length=1)
    amount: Money = Field(gt=0)
    month: int = Field(ge=1, le=12)
    year: int

    @field_validator("category", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class BudgetUpdate(BaseModel):
    amount: Money = Field(gt=0)


# --- Backend records ---

class Budget(BaseModel):
    """A monthly spending cap for one category.

    ``spent`` is never taken from the backend; it is recomputed from the
    transaction list every time it is needed.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    amount: Money
    month: int
    year: int

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return str(value) if isinstance(value, int) else value


# --- Derived schemas ---

class BudgetAggregate(BaseModel):
    category: str
    budget: Money
    spent: Money


class BudgetStatus(BaseModel):
    id: str
    category: str
    amount: Money
    spent: Money
    month: int
    year: int
    percentage_used: Percentage
    remaining: Money
    over_budget: bool
    near_budget: bool
    status_text: str


class BudgetTotals(BaseModel):
    total_budget: Money = Decimal("0")
    total_spent: Money = Decimal("0")
    remaining: Money = Decimal("0")


class BudgetFormDefaults(BaseModel):
    category: str
    amount: str = ""
    month: int
    year: int


class BudgetInsights(BaseModel):
    top_category: str | None = None
    top_spent: Money = Decimal("0")
    over_budget: list[str] = []
    under_80_percent: list[str] = []
