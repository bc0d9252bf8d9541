import httpx
import pytest

from currency_converter.providers import ExchangeRateApiClient, get_provider
from currency_converter.utils.errors import FetchError, MalformedResponseError, ValidationError


URL = "https://rates.test/v4/latest/USD"
PAYLOAD = {"base": "USD", "date": "2026-10-19", "rates": {"USD": 1, "EUR": 0.9, "PKR": 278.0}}


def response(status_code=200, json=None, content=None):
    request = httpx.Request("GET", URL)
    if json is not None:
        return httpx.Response(status_code, json=json, request=request)
    return httpx.Response(status_code, content=content or b"", request=request)


class DummyClient:
    """Stands in for httpx.AsyncClient; replays queued responses or errors."""

    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.urls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url, params=None):
        self.urls.append(url)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def patch_client(monkeypatch):
    def _patch(*outcomes):
        client = DummyClient(list(outcomes))
        monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: client)
        return client
    return _patch


@pytest.mark.asyncio
async def test_fetch_rates_success(config, patch_client):
    client = patch_client(response(json=PAYLOAD))

    snapshot = await ExchangeRateApiClient(config).fetch_rates("USD")

    assert client.urls == [URL]
    assert snapshot.base == "USD"
    assert snapshot.date == "2026-10-19"
    assert snapshot.source == "exchange_rate_api"
    assert snapshot.rates == {"USD": 1.0, "EUR": 0.9, "PKR": 278.0}
    assert snapshot.fetched_at.tzinfo is not None


@pytest.mark.asyncio
async def test_invalid_base_currency(config):
    with pytest.raises(ValidationError):
        await ExchangeRateApiClient(config).fetch_rates("usd")


@pytest.mark.asyncio
async def test_transport_error_is_retried_then_raised(config, patch_client):
    client = patch_client(*[httpx.ConnectError("network down") for _ in range(3)])

    with pytest.raises(FetchError):
        await ExchangeRateApiClient(config).fetch_rates("USD")
    assert len(client.urls) == 3


@pytest.mark.asyncio
async def test_transient_error_recovers(config, patch_client):
    client = patch_client(httpx.ReadTimeout("slow"), response(503), response(json=PAYLOAD))

    snapshot = await ExchangeRateApiClient(config).fetch_rates("USD")
    assert snapshot.rates["PKR"] == 278.0
    assert len(client.urls) == 3


@pytest.mark.asyncio
async def test_client_error_status_is_not_retried(config, patch_client):
    client = patch_client(response(404, json={"result": "error"}))

    with pytest.raises(FetchError, match="404"):
        await ExchangeRateApiClient(config).fetch_rates("USD")
    assert len(client.urls) == 1


@pytest.mark.asyncio
async def test_invalid_json_is_malformed(config, patch_client):
    patch_client(response(content=b"<html>oops</html>"))

    with pytest.raises(MalformedResponseError):
        await ExchangeRateApiClient(config).fetch_rates("USD")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        [1, 2, 3],
        {"base": "USD"},
        {"base": "USD", "rates": [0.9]},
        {"base": "USD", "rates": {}},
        {"base": "USD", "rates": {"EUR": "0.9"}},
        {"base": "USD", "rates": {"EUR": -0.9}},
        {"base": "USD", "rates": {"EUR": 0}},
        {"base": "EUR", "rates": {"EUR": 1, "USD": 1.1}},
        {"base": "USD", "rates": {"USD": 2, "EUR": 0.9}},
    ],
)
async def test_unexpected_shapes_are_malformed(config, patch_client, payload):
    patch_client(response(json=payload))

    with pytest.raises(MalformedResponseError):
        await ExchangeRateApiClient(config).fetch_rates("USD")


@pytest.mark.asyncio
async def test_in_band_error_is_fetch_error(config, patch_client):
    patch_client(response(json={"result": "error", "error-type": "unsupported-code"}))

    with pytest.raises(FetchError, match="unsupported-code"):
        await ExchangeRateApiClient(config).fetch_rates("USD")


@pytest.mark.asyncio
async def test_lowercase_rate_keys_are_normalized(config, patch_client):
    patch_client(response(json={"base": "USD", "rates": {"eur": 0.9}}))

    snapshot = await ExchangeRateApiClient(config).fetch_rates("USD")
    assert snapshot.rates == {"EUR": 0.9}


@pytest.mark.asyncio
async def test_health_check(config, patch_client):
    patch_client(response(json=PAYLOAD), httpx.ConnectError("a"), httpx.ConnectError("b"), httpx.ConnectError("c"))
    client = ExchangeRateApiClient(config)

    assert await client.health_check() is True
    assert await client.health_check() is False


def test_get_provider(config):
    assert isinstance(get_provider("exchange_rate_api", config), ExchangeRateApiClient)
    with pytest.raises(ValueError):
        get_provider("nope", config)


@pytest.mark.asyncio
async def test_invalid_url_is_fetch_error(config, patch_client):
    client = patch_client(httpx.InvalidURL("Invalid IPv6 address"))

    with pytest.raises(FetchError, match="Invalid provider URL"):
        await ExchangeRateApiClient(config).fetch_rates("USD")
    assert len(client.urls) == 1
