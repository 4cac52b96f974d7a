"""Money helpers."""

from decimal import Decimal, InvalidOperation
from typing import Union

from cashsaver.core.exceptions import InvalidInputError

Amount = Union[Decimal, int, float, str]

ZERO = Decimal("0")
CENT = Decimal("0.01")

# Exclusive upper bound of a Numeric(15, 2) column
MAX_AMOUNT = Decimal("1e13")

# Scale of the stored daily figure, Numeric(24, 10)
DAILY_SCALE = Decimal("1e-10")


def to_decimal(value: Amount, field: str = "amount") -> Decimal:
    """
    Coerce a user-supplied amount to ``Decimal``.

    Floats go through ``str`` first so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises:
        InvalidInputError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a number")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidInputError(f"{field} must be a number, got {value!r}")
    if not result.is_finite():
        raise InvalidInputError(f"{field} must be finite, got {value!r}")
    return result
