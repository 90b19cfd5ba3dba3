from typing import Any, TypeVar
from pydantic import BaseModel, ValidationError

from ..errors import ValidationFailure

M = TypeVar("M", bound=BaseModel)

_MESSAGES = {
    "amount": "Please enter a valid amount greater than 0",
    "month": "Please choose a month between 1 and 12",
    "date": "Please enter a valid date",
    "type": "Type must be income or expense",
}


def validate_form(model: type[M], data: dict[str, Any] | M) -> M:
    """Validate submitted form data, raising ValidationFailure on bad input."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else None
        if error["type"] in ("missing", "string_too_short") or error.get("input") == "":
            message = "Please fill in all fields"
        else:
            message = _MESSAGES.get(field, error["msg"])
        raise ValidationFailure(message, field=field) from exc
