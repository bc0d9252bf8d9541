"""Live-rate currency conversion with a per-session history."""

from currency_converter.engine import ConversionEngine
from currency_converter.history import ConversionHistory
from currency_converter.models import (
    BASE_CURRENCY,
    SUPPORTED_CURRENCIES,
    ConversionRecord,
    ConversionRequest,
    Currency,
    LoadState,
)
from currency_converter.rate_store import RateStore
from currency_converter.session import ConverterSession

__version__ = "0.1.0"

__all__ = [
    "BASE_CURRENCY",
    "SUPPORTED_CURRENCIES",
    "ConversionEngine",
    "ConversionHistory",
    "ConversionRecord",
    "ConversionRequest",
    "ConverterSession",
    "Currency",
    "LoadState",
    "RateStore",
]
