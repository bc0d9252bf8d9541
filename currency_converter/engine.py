"""Conversion math: direct and cross rates through the common base currency."""
from __future__ import annotations

import math
from typing import Optional

from currency_converter.history import ConversionHistory
from currency_converter.models import BASE_CURRENCY, ConversionRecord, ConversionRequest, RateTable
from currency_converter.rate_store import resolve_rate
from currency_converter.utils.errors import UnknownCurrencyError, ValidationError
from currency_converter.utils.logging import get_logger


logger = get_logger(__name__)


def format_result(value: float) -> str:
    """Fixed two-decimal rendering, e.g. 123.4 -> "123.40"."""
    return f"{value:.2f}"


class ConversionEngine:
    """Computes conversions against a rate table and logs them to history.

    Rates are "units per 1 base". Converting from the base uses the target
    rate directly; anything else goes through the base as
    ``rates[target] / rates[source]``. Converting a currency to itself uses a
    rate of exactly 1 as long as the table knows that currency.
    """

    def __init__(
        self,
        history: Optional[ConversionHistory] = None,
        base_currency: str = BASE_CURRENCY,
    ) -> None:
        self.history = history if history is not None else ConversionHistory()
        self.base_currency = base_currency

    def effective_rate(self, source: str, target: str, rates: RateTable) -> float:
        target_rate = resolve_rate(rates, target, self.base_currency)
        if source == target:
            return 1.0
        if source == self.base_currency:
            return target_rate
        source_rate = resolve_rate(rates, source, self.base_currency)
        return target_rate / source_rate

    def compute(self, request: ConversionRequest, rates: RateTable) -> ConversionRecord:
        """Validate and price ``request`` without touching history."""
        req = request.validate()
        rate = self.effective_rate(req.source_currency, req.target_currency, rates)
        converted = req.amount * rate
        if not math.isfinite(converted):
            raise ValidationError(
                f"Amount {req.amount} {req.source_currency} is too large to convert to {req.target_currency}"
            )
        return ConversionRecord(
            amount=req.amount,
            source_currency=req.source_currency,
            target_currency=req.target_currency,
            result=format_result(converted),
        )

    def convert(self, request: ConversionRequest, rates: RateTable) -> ConversionRecord:
        """Price ``request`` and prepend the record to history.

        Raises ValidationError or UnknownCurrencyError; history is only
        written after a record has been built.
        """
        try:
            record = self.compute(request, rates)
        except (ValidationError, UnknownCurrencyError) as e:
            logger.warning(
                f"Conversion rejected: {e}",
                extra={"source": request.source_currency, "target": request.target_currency},
            )
            raise
        self.history.record(record)
        logger.debug(f"Converted {record}")
        return record
