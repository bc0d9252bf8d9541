"""Configuration management for Currency Converter."""
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import yaml
from dotenv import load_dotenv
from currency_converter.utils.errors import ConfigurationError
from currency_converter.utils.logging import setup_logging
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "config.yaml"
PACKAGED_CONFIG = Path(__file__).resolve().parent / DEFAULT_CONFIG_NAME


def resolve_config_path(config_path: Optional[Union[str, Path]] = None) -> Path:
    """
    Work out which YAML file to read.

    Explicit path first, then CURRENCY_CONVERTER_CONFIG, then config.yaml in
    the working directory, then the default config.yaml installed with the
    package.
    """
    if config_path is not None:
        return Path(config_path).expanduser()

    env_path = os.getenv("CURRENCY_CONVERTER_CONFIG")
    if env_path:
        return Path(env_path).expanduser()

    local = Path.cwd() / DEFAULT_CONFIG_NAME
    if local.exists():
        return local

    return PACKAGED_CONFIG


class Config:
    """Application configuration."""

    REQUIRED_SECTIONS = ('app', 'provider')

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = resolve_config_path(config_path)
        self._config: Dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load configuration from YAML and environment."""
        load_dotenv()

        if not self.config_path.exists():
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            try:
                self._config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}")

        if not self._config:
            raise ConfigurationError(f"Empty configuration file: {self.config_path}")

        self._validate()

        log_config = self._config.get('logging', {})
        setup_logging(
            level=os.getenv('LOG_LEVEL', log_config.get('level', 'INFO')),
            log_file=log_config.get('file'),
            format_type=log_config.get('format', 'json'),
            enabled=log_config.get('enabled', True)
        )

        logger.info(f"Configuration loaded from {self.config_path}")

    def _validate(self) -> None:
        """Validate required configuration sections."""
        if not isinstance(self._config, dict):
            raise ConfigurationError("Configuration root must be a mapping")

        for section in self.REQUIRED_SECTIONS:
            if section not in self._config:
                raise ConfigurationError(f"Missing required config section: {section}")

        base = self.get('currencies.base', 'USD')
        if not isinstance(base, str) or len(base) != 3 or not base.isalpha():
            raise ConfigurationError(f"Invalid base currency: {base}. Expect a 3-letter code.")

        if self.retry_attempts < 1:
            raise ConfigurationError("provider.retry.max_attempts must be >= 1")
        if self.request_timeout <= 0:
            raise ConfigurationError("provider.timeout must be positive")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated key.

        Args:
            key: Dot-separated key (e.g., "provider.timeout")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value = self._config
        for k in key.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(k)
            if value is None:
                return default
        return value

    def get_env(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get environment variable."""
        return os.getenv(key, default)

    def require_env(self, key: str) -> str:
        """Get required environment variable or raise error."""
        value = os.getenv(key)
        if value is None:
            raise ConfigurationError(f"Required environment variable not set: {key}")
        return value

    @property
    def app_name(self) -> str:
        return self.get('app.name', 'Currency Converter')

    @property
    def app_version(self) -> str:
        return self.get('app.version', '0.1.0')

    @property
    def debug(self) -> bool:
        return bool(self.get('app.debug', False))

    @property
    def base_currency(self) -> str:
        """Currency every fetched rate is quoted against."""
        return str(self.get('currencies.base', 'USD')).upper()

    @property
    def supported_currencies(self) -> List[str]:
        """Codes offered for selection in the UI."""
        codes = self.get('currencies.supported')
        if not codes:
            from currency_converter.models import SUPPORTED_CURRENCIES
            return list(SUPPORTED_CURRENCIES)
        return [str(c).upper() for c in codes]

    @property
    def default_source_currency(self) -> str:
        return str(self.get('currencies.default_source', self.base_currency)).upper()

    @property
    def default_target_currency(self) -> str:
        return str(self.get('currencies.default_target', 'PKR')).upper()

    @property
    def provider_name(self) -> str:
        return self.get('provider.name', 'exchange_rate_api')

    @property
    def provider_base_url(self) -> str:
        """Provider endpoint; the base currency is appended as the last path segment."""
        return self.get_env(
            'EXCHANGE_RATE_API_URL',
            self.get('provider.base_url', 'https://api.exchangerate-api.com/v4/latest'),
        ).rstrip('/')

    @property
    def request_timeout(self) -> float:
        return float(self.get('provider.timeout', 10))

    @property
    def retry_attempts(self) -> int:
        return int(self.get('provider.retry.max_attempts', 3))

    @property
    def retry_delay(self) -> float:
        return float(self.get('provider.retry.delay', 1.0))

    @property
    def retry_backoff(self) -> float:
        return float(self.get('provider.retry.backoff', 2.0))


# Global config instance
_config: Optional[Config] = None


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """Load and return global configuration instance."""
    global _config
    if _config is None:
        _config = Config(config_path)
    return _config


def get_config() -> Config:
    """Get global configuration instance."""
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config


def reset_config() -> None:
    """Forget the global instance so the next load_config() reads from disk."""
    global _config
    _config = None
