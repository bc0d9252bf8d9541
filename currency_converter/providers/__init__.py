"""Provider factory and exports."""
from typing import Optional

from currency_converter.config import Config
from .base import BaseProvider, RateSnapshot
from .exchange_rate_api import ExchangeRateApiClient


def get_provider(provider_name: str, config: Optional[Config] = None) -> BaseProvider:
    """Get provider by canonical name.

    Canonical names:
    - "exchange_rate_api"
    """
    if provider_name == ExchangeRateApiClient.NAME:
        return ExchangeRateApiClient(config)
    raise ValueError(f"Unknown provider: {provider_name}")


__all__ = [
    "BaseProvider",
    "RateSnapshot",
    "ExchangeRateApiClient",
    "get_provider",
]
