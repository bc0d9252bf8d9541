"""
Data models for currency conversion.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from currency_converter.utils.errors import ValidationError
from currency_converter.utils.validation import validate_amount, validate_currency_code


BASE_CURRENCY = "USD"

# Units of each currency per 1 unit of the base currency
RateTable = Mapping[str, float]


class Currency(str, Enum):
    """Currencies selectable as source or target."""
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    AUD = "AUD"
    CAD = "CAD"
    PKR = "PKR"


SUPPORTED_CURRENCIES = tuple(c.value for c in Currency)


class LoadState(Enum):
    """Lifecycle of the rate table within a session."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversionRequest:
    """
    A single conversion asked for by the user.
    """
    amount: Optional[float]
    source_currency: Optional[str]
    target_currency: Optional[str]

    def validate(self) -> "ConversionRequest":
        """Return a normalized copy, or raise ValidationError."""
        if self.amount is None or isinstance(self.amount, bool):
            raise ValidationError("Amount is required")
        try:
            amount = float(self.amount)
        except (TypeError, ValueError):
            raise ValidationError(f"Amount is not a number: {self.amount!r}")
        validate_amount(amount)

        return ConversionRequest(
            amount=amount,
            source_currency=validate_currency_code(self.source_currency, "source currency"),
            target_currency=validate_currency_code(self.target_currency, "target currency"),
        )


@dataclass(frozen=True)
class ConversionRecord:
    """
    Outcome of a successful conversion, as kept in the session history.
    """
    amount: float
    source_currency: str
    target_currency: str
    result: str  # always two decimals, e.g. "123.40"

    @property
    def display_amount(self) -> str:
        """Amount as typed: 100 rather than 100.0."""
        if float(self.amount).is_integer():
            return str(int(self.amount))
        return str(self.amount)

    def __str__(self) -> str:
        return f"{self.display_amount} {self.source_currency} = {self.result} {self.target_currency}"
