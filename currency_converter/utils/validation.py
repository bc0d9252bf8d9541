"""Input validation utilities."""
import math
from numbers import Real
from typing import Any, Optional

from currency_converter.utils.errors import ValidationError


def parse_amount(raw: Any) -> float:
    """
    Parse a raw amount as typed by the user.

    Args:
        raw: Amount as a number or string (e.g. "100", " 12.5 ")

    Returns:
        The amount as a float

    Raises:
        ValidationError: If the amount is missing, non-numeric, non-finite,
            or not strictly positive
    """
    if raw is None or isinstance(raw, bool):
        raise ValidationError("Amount is required")

    if isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if not text:
            raise ValidationError("Amount is required")
        try:
            amount = float(text)
        except ValueError:
            raise ValidationError(f"Amount is not a number: {raw!r}")
    elif isinstance(raw, Real):
        amount = float(raw)
    else:
        raise ValidationError(f"Amount is not a number: {raw!r}")

    return validate_amount(amount)


def validate_amount(amount: float) -> float:
    """
    Validate conversion amount.

    Args:
        amount: Amount to validate

    Returns:
        Validated amount

    Raises:
        ValidationError: If amount is not a positive finite number
    """
    if not math.isfinite(amount):
        raise ValidationError(f"Amount must be a finite number, got: {amount}")

    if amount <= 0:
        raise ValidationError(f"Amount must be positive, got: {amount}")

    return amount


def validate_currency_code(code: Optional[str], field: str = "currency") -> str:
    """Normalize a currency selection to an uppercase code.

    Only presence and shape are checked here; whether the code is known is
    decided against the current rate table.
    """
    if code is None or not str(code).strip():
        raise ValidationError(f"Missing {field} selection")

    normalized = str(code).strip().upper()
    if not normalized.isalpha():
        raise ValidationError(f"Invalid {field} code: {code}")
    return normalized
