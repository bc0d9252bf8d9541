"""Pytest configuration and fixtures."""
import pytest
from pathlib import Path
import tempfile
import yaml

from currency_converter import config as config_module
from currency_converter.config import Config
from currency_converter.providers.base import BaseProvider, RateSnapshot


SAMPLE_RATES = {"USD": 1.0, "EUR": 0.9, "GBP": 0.8, "JPY": 150.0, "PKR": 278.0}


class StubProvider(BaseProvider):
    """In-memory provider: returns a fixed table or raises a fixed error."""

    NAME = "stub"

    def __init__(self, rates=None, error=None, base="USD"):
        self.rates = dict(SAMPLE_RATES if rates is None else rates)
        self.error = error
        self.base = base
        self.calls = 0

    async def fetch_rates(self, base):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return RateSnapshot(base=self.base, rates=dict(self.rates), date="2026-10-19", source=self.NAME)

    async def health_check(self):
        return self.error is None


def write_config(config_data) -> str:
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(config_data, f)
        return f.name


@pytest.fixture
def yaml_file():
    """Write a mapping to a temporary YAML file; removed after the test."""
    paths = []

    def _write(config_data):
        path = write_config(config_data)
        paths.append(path)
        return path

    yield _write
    for path in paths:
        Path(path).unlink(missing_ok=True)


@pytest.fixture
def config_data():
    return {
        'app': {
            'name': 'Test Converter',
            'version': '0.1.0',
            'debug': True
        },
        'currencies': {
            'base': 'USD',
            'supported': ['USD', 'EUR', 'GBP', 'JPY', 'AUD', 'CAD', 'PKR'],
            'default_source': 'USD',
            'default_target': 'PKR',
        },
        'provider': {
            'name': 'exchange_rate_api',
            'base_url': 'https://rates.test/v4/latest',
            'timeout': 5,
            'retry': {
                'max_attempts': 3,
                'delay': 0,
                'backoff': 1,
            },
        },
        'logging': {
            'level': 'DEBUG',
            'format': 'text'
        }
    }


@pytest.fixture
def temp_config_file(config_data):
    """Create a temporary config file for testing."""
    config_path = write_config(config_data)
    yield config_path
    Path(config_path).unlink()


@pytest.fixture
def config(temp_config_file):
    return Config(temp_config_file)


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch):
    """Each test starts without a cached global config or env overrides."""
    monkeypatch.delenv("EXCHANGE_RATE_API_URL", raising=False)
    monkeypatch.delenv("CURRENCY_CONVERTER_CONFIG", raising=False)
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def sample_rates():
    return dict(SAMPLE_RATES)


@pytest.fixture
def stub_provider():
    return StubProvider()


@pytest.fixture
def make_provider():
    return StubProvider
