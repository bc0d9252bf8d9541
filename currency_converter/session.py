"""Per-session wiring of the rate store, conversion engine and history."""
from __future__ import annotations

from typing import Any, List, Optional

from currency_converter.config import Config
from currency_converter.engine import ConversionEngine, format_result
from currency_converter.history import ConversionHistory
from currency_converter.models import ConversionRecord, ConversionRequest, LoadState
from currency_converter.providers import BaseProvider, get_provider
from currency_converter.rate_store import RateStore
from currency_converter.utils.errors import DataProviderError, ValidationError
from currency_converter.utils.logging import get_logger
from currency_converter.utils.validation import parse_amount


logger = get_logger(__name__)


class ConverterSession:
    """Everything one user session needs, created at start and dropped at the end.

    The presentation layer talks only to this object:

        session = ConverterSession.from_config(config)
        await session.load_rates()
        record = session.convert("100", "USD", "PKR")
        session.get_history()
    """

    def __init__(
        self,
        provider: BaseProvider,
        base_currency: str = "USD",
        history: Optional[ConversionHistory] = None,
    ) -> None:
        self.store = RateStore(provider, base_currency=base_currency)
        self.history = history if history is not None else ConversionHistory()
        self.engine = ConversionEngine(self.history, base_currency=base_currency)

    @classmethod
    def from_config(cls, config: Config, provider: Optional[BaseProvider] = None) -> "ConverterSession":
        if provider is None:
            provider = get_provider(config.provider_name, config)
        return cls(provider, base_currency=config.base_currency)

    @property
    def state(self) -> LoadState:
        return self.store.state

    @property
    def last_error(self) -> Optional[DataProviderError]:
        return self.store.last_error

    @property
    def latest_result(self) -> str:
        """Most recent result string; "0.00" before the first conversion."""
        latest = self.history.latest
        return latest.result if latest is not None else format_result(0)

    async def load_rates(self) -> LoadState:
        return await self.store.load()

    def convert(self, amount: Any, source: Optional[str], target: Optional[str]) -> ConversionRecord:
        """Convert raw user input; raises ValidationError or UnknownCurrencyError."""
        try:
            parsed = parse_amount(amount)
        except ValidationError as e:
            logger.warning(
                f"Conversion rejected: {e}",
                extra={"source": source, "target": target},
            )
            raise
        request = ConversionRequest(
            amount=parsed,
            source_currency=source,
            target_currency=target,
        )
        return self.engine.convert(request, self.store.rates)

    def get_history(self) -> List[ConversionRecord]:
        return self.history.list()
