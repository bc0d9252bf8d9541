"""Custom exception classes for the Currency Converter."""


class CurrencyConverterError(Exception):
    """Base exception for all Currency Converter errors."""
    pass


class ConfigurationError(CurrencyConverterError):
    """Raised when there's a configuration error."""
    pass


class ValidationError(CurrencyConverterError):
    """Raised when conversion input fails validation."""
    pass


class UnknownCurrencyError(CurrencyConverterError):
    """Raised when a currency code is not present in the current rate table."""

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"Unknown currency: {currency}")


class DataProviderError(CurrencyConverterError):
    """Base exception for rate provider errors."""
    pass


class FetchError(DataProviderError):
    """Raised on transport failure or a non-success HTTP status."""
    pass


class MalformedResponseError(DataProviderError):
    """Raised when the provider payload has an unexpected shape."""
    pass
