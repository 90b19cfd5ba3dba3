import enum
from datetime import date as date_type
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import Money, to_calendar_date


class TransactionType(str, enum.Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class Transaction(BaseModel):
    """A transaction as returned by the backend."""
    model_config = ConfigDict(frozen=True)

    id: str
    amount: Money
    description: str = ""
    category: str
    type: TransactionType
    date: date_type

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return str(value) if isinstance(value, int) else value

    @field_validator("type", mode="before")
    @classmethod
    def _lower_type(cls, value):
        # The backend serialises the enum as INCOME / EXPENSE
        return value.lower() if isinstance(value, str) else value

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_date(cls, value):
        return to_calendar_date(value)


class TransactionCreate(BaseModel):
    """Fields submitted by the transaction form."""
    amount: Money = Field(gt=0)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1)
    type: TransactionType = TransactionType.EXPENSE
    date: date_type

    @field_validator("description", "category", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class TransactionFormDefaults(BaseModel):
    """Initial values for an empty transaction form."""
    amount: str = ""
    description: str = ""
    category: str
    type: TransactionType = TransactionType.EXPENSE
    date: date_type
