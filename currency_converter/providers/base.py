"""Provider base classes and data contracts for exchange-rate providers."""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional

from currency_converter.utils.errors import MalformedResponseError, ValidationError


@dataclass
class RateSnapshot:
    """A full rate table as returned by one provider call.

    Every rate is quoted as units of that currency per 1 unit of ``base``.
    """

    base: str
    rates: Dict[str, float]
    date: Optional[str] = None  # provider's own date string, if any
    source: str = "unknown"
    fetched_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def validate(self) -> None:
        if not self.rates:
            raise MalformedResponseError("Rate table is empty")
        for code, rate in self.rates.items():
            if not isinstance(code, str) or not code.isalpha() or code != code.upper():
                raise MalformedResponseError(f"Invalid currency key: {code!r}")
            if (
                isinstance(rate, bool)
                or not isinstance(rate, (int, float))
                or not math.isfinite(rate)
                or rate <= 0
            ):
                raise MalformedResponseError(f"Invalid rate for {code}: {rate!r}")
        base_rate = self.rates.get(self.base)
        if base_rate is not None and not math.isclose(base_rate, 1.0):
            raise MalformedResponseError(
                f"Base currency {self.base} quoted at {base_rate}, expected 1"
            )


class BaseProvider(ABC):
    """Abstract base class for rate providers."""

    NAME: str = "base"

    @abstractmethod
    async def fetch_rates(self, base: str) -> RateSnapshot:
        """Fetch every rate quoted against ``base``."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True when the upstream service looks reachable/healthy."""

    @staticmethod
    def validate_currency_code(code: str) -> None:
        """Validate a 3-letter ISO currency code in uppercase."""
        if not code or len(code) != 3 or not code.isalpha() or code != code.upper():
            raise ValidationError(
                f"Invalid currency code: {code}. Expect 3-letter uppercase ISO code."
            )
