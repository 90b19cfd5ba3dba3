from pydantic import BaseModel, Field, field_validator

from .transaction import TransactionType


class CategorySet(BaseModel):
    """Valid category names, per transaction type, in display order."""
    income: list[str] = []
    expense: list[str] = []

    @field_validator("income", "expense")
    @classmethod
    def _unique(cls, names: list[str]) -> list[str]:
        # Keep the first occurrence of each name
        return list(dict.fromkeys(names))

    def for_type(self, type_: str) -> list[str]:
        """Names for one type; anything else yields both lists."""
        if type_ == TransactionType.INCOME.value:
            return list(self.income)
        if type_ == TransactionType.EXPENSE.value:
            return list(self.expense)
        return [*self.income, *self.expense]


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    type: TransactionType

    @field_validator("name", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value
