"""Session-scoped holder for the most recently fetched rate table."""
from __future__ import annotations

import asyncio
from types import MappingProxyType
from typing import Optional

from currency_converter.models import BASE_CURRENCY, LoadState, RateTable
from currency_converter.providers.base import BaseProvider, RateSnapshot
from currency_converter.utils.errors import (
    DataProviderError,
    FetchError,
    MalformedResponseError,
    UnknownCurrencyError,
)
from currency_converter.utils.logging import get_logger


logger = get_logger(__name__)

_EMPTY: RateTable = MappingProxyType({})


def resolve_rate(rates: RateTable, currency: str, base: str = BASE_CURRENCY) -> float:
    """Rate of ``currency`` against ``base`` in ``rates``.

    The base is worth 1.0 whether or not the provider lists it, but only once
    a table has been loaded; an empty table knows no currencies at all.
    """
    rate = rates.get(currency)
    if rate is not None:
        return rate
    if currency == base and rates:
        return 1.0
    raise UnknownCurrencyError(currency)


class RateStore:
    """Holds one rate table quoted against a fixed base currency.

    The table is replaced wholesale by ``load()`` and never mutated in place.
    A failed load keeps whatever table was there before and records the error
    in ``last_error`` with the state set to ``FAILED``.
    """

    def __init__(self, provider: BaseProvider, base_currency: str = BASE_CURRENCY) -> None:
        self.provider = provider
        self.base_currency = base_currency
        self._rates: RateTable = _EMPTY
        self._snapshot: Optional[RateSnapshot] = None
        self._state = LoadState.IDLE
        self._last_error: Optional[DataProviderError] = None

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def last_error(self) -> Optional[DataProviderError]:
        """Error from the most recent load attempt, None after a success."""
        return self._last_error

    @property
    def rates(self) -> RateTable:
        """Read-only view of the current table."""
        return self._rates

    @property
    def snapshot(self) -> Optional[RateSnapshot]:
        """Metadata of the last successful fetch (base, provider date, fetch time)."""
        return self._snapshot

    @property
    def is_loaded(self) -> bool:
        return bool(self._rates)

    async def load(self) -> LoadState:
        """Fetch a fresh table from the provider.

        Never raises for provider failures; inspect the returned state and
        ``last_error`` instead. Cancellation restores the previous state.
        """
        previous_state = self._state
        self._state = LoadState.LOADING
        logger.info(f"Loading {self.base_currency} rates from {self.provider.NAME}")

        try:
            snapshot = await self.provider.fetch_rates(self.base_currency)
            if snapshot.base != self.base_currency:
                raise MalformedResponseError(
                    f"Provider returned {snapshot.base} rates, expected {self.base_currency}"
                )
        except asyncio.CancelledError:
            self._state = previous_state
            logger.warning("Rate load cancelled")
            raise
        except DataProviderError as e:
            return self._fail(e)
        except Exception as e:
            # Anything else from a provider still ends the attempt as FAILED
            error = FetchError(f"{e.__class__.__name__}: {e}")
            error.__cause__ = e
            return self._fail(error)

        # Single assignment: readers see the old table or the new one
        self._rates = MappingProxyType(dict(snapshot.rates))
        self._snapshot = snapshot
        self._last_error = None
        self._state = LoadState.READY
        logger.info(f"Loaded {len(self._rates)} rates (provider date {snapshot.date})")
        return self._state

    def _fail(self, error: DataProviderError) -> LoadState:
        self._last_error = error
        self._state = LoadState.FAILED
        logger.error(
            f"Rate load failed: {error}",
            extra={"error": error.__class__.__name__, "state": self._state.value},
        )
        return self._state

    def get_rate(self, currency: str) -> float:
        """Rate for ``currency`` relative to the base, or UnknownCurrencyError."""
        return resolve_rate(self._rates, currency.upper(), self.base_currency)

    def has_currency(self, currency: str) -> bool:
        try:
            self.get_rate(currency)
        except UnknownCurrencyError:
            return False
        return True
