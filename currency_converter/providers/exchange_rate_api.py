"""ExchangeRate-API (v4 "latest" endpoint) provider implementation."""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from currency_converter.config import Config, get_config, load_config
from currency_converter.providers.base import BaseProvider, RateSnapshot
from currency_converter.utils.decorators import retry, log_execution
from currency_converter.utils.errors import (
    ConfigurationError,
    DataProviderError,
    FetchError,
    MalformedResponseError,
)
from currency_converter.utils.logging import get_logger


logger = get_logger(__name__)


def _is_retryable(exc: Exception) -> bool:
    """Transport problems and 5xx responses are worth another attempt; 4xx are not."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response is None or exc.response.status_code >= 500
    return True


class ExchangeRateApiClient(BaseProvider):
    NAME = "exchange_rate_api"

    def __init__(self, config: Optional[Config] = None) -> None:
        if config is None:
            try:
                config = get_config()
            except ConfigurationError:
                config = load_config()
        self.base_url: str = config.provider_base_url
        self.timeout: float = config.request_timeout

        # Bound per instance so the attempts/delay come from config
        self._get_payload = retry(
            max_attempts=config.retry_attempts,
            delay=config.retry_delay,
            backoff=config.retry_backoff,
            exceptions=(httpx.HTTPError,),
            retry_if=_is_retryable,
        )(self._request_payload)

    async def _request_payload(self, url: str) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            try:
                return resp.json()
            except ValueError as e:
                raise MalformedResponseError(f"Response is not valid JSON: {e}")

    @log_execution(log_args=False, log_result=False)
    async def fetch_rates(self, base: str = "USD") -> RateSnapshot:
        self.validate_currency_code(base)
        url = f"{self.base_url}/{base}"

        try:
            data = await self._get_payload(url)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            logger.error(f"ExchangeRate-API returned HTTP {status}")
            raise FetchError(f"HTTP {status} from {url}") from e
        except httpx.HTTPError as e:
            logger.error(f"ExchangeRate-API request failed: {e}")
            raise FetchError(str(e) or e.__class__.__name__) from e
        except httpx.InvalidURL as e:
            logger.error(f"ExchangeRate-API URL is invalid: {url}")
            raise FetchError(f"Invalid provider URL {url}: {e}") from e

        return self._parse(data, base)

    def _parse(self, data: Any, base: str) -> RateSnapshot:
        if not isinstance(data, dict):
            raise MalformedResponseError("Response body is not a JSON object")

        # Some mirrors of this API report failures in-band with a 200
        if data.get("result") == "error":
            raise FetchError(f"API error: {data.get('error-type', 'unknown')}")

        rates = data.get("rates")
        if not isinstance(rates, dict):
            logger.error(f"ExchangeRate-API response missing rates. Keys: {list(data.keys())}")
            raise MalformedResponseError("Response has no 'rates' object")

        payload_base = str(data.get("base", base)).upper()
        if payload_base != base:
            raise MalformedResponseError(
                f"Rates quoted against {payload_base}, expected {base}"
            )

        snapshot = RateSnapshot(
            base=base,
            rates=self._normalize(rates),
            date=data.get("date"),
            source=self.NAME,
        )
        snapshot.validate()
        return snapshot

    @staticmethod
    def _normalize(rates: Dict[Any, Any]) -> Dict[str, Any]:
        normalized: Dict[str, Any] = {}
        for code, value in rates.items():
            key = code.upper() if isinstance(code, str) else code
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                value = float(value)
            normalized[key] = value
        return normalized

    async def health_check(self) -> bool:
        try:
            await self.fetch_rates("USD")
            return True
        except DataProviderError:
            return False
