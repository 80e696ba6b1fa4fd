# trip_budget/utils.py

from decimal import Decimal, InvalidOperation
from typing import Union

from .errors import InvalidArgument

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number, name: str = "value") -> Decimal:
    """
    Coerce user-facing numbers to Decimal.
    Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"{name} must be a number, got {value!r}")

    if isinstance(value, float):
        value = str(value)
    elif isinstance(value, str):
        value = value.strip().replace(",", "")

    if not isinstance(value, (int, str, Decimal)):
        raise InvalidArgument(f"{name} must be a number, got {value!r}")

    try:
        result = Decimal(value)
    except InvalidOperation as exc:
        raise InvalidArgument(f"{name} is not a number: {value!r}") from exc

    if not result.is_finite():
        raise InvalidArgument(f"{name} must be finite, got {value!r}")
    return result


def parse_days(text: str) -> int:
    """Parse a whole number of days typed at a prompt."""
    try:
        return int(text.strip())
    except ValueError as exc:
        raise InvalidArgument(f"trip days must be a whole number: {text!r}") from exc
