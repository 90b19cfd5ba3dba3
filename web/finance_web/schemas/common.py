from datetime import date, datetime
from decimal import Decimal
from typing import Annotated
from pydantic import PlainSerializer

# Money is kept as Decimal so sums are exact; JSON gets plain numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Percentages rounded to one decimal place, also sent as plain numbers.
Percentage = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def to_calendar_date(value):
    """Reduce backend date values ("2025-09-01", ISO timestamps) to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10 and value[4:5] == "-" and value[10:11] in ("T", " "):
        return date.fromisoformat(value[:10])
    return value
