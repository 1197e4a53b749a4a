"""Configuration loading for exchange adapters.

Read ``key=value`` property files with environment variable substitution
and validate them into an immutable ``AdapterConfig``.
"""

import logging
import os
import re
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from dotenv import dotenv_values, load_dotenv

from okcoin_adapter.core.exceptions import IllegalConfigError
from okcoin_adapter.core.models import AdapterConfig
from okcoin_adapter.core.protocols import ConfigSource

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV_VAR = "OKCOIN_CONFIG_FILE"
DEFAULT_CONFIG_FILE = Path("config") / "okcoin-config.properties"

PUBLIC_KEY = "public-key"
SECRET_KEY = "secret-key"
CONNECTION_TIMEOUT = "connection-timeout"
BUY_FEE = "buy-fee"
SELL_FEE = "sell-fee"

_ONE_HUNDRED = Decimal(100)
_ENV_VALUE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}")
_ENV_REFERENCE = re.compile(r"\$\{[^}]+\}")


def default_config_file_location() -> Path:
    """Return the property file an adapter reads when given no configuration.

    ``$OKCOIN_CONFIG_FILE`` wins when set; otherwise
    ``config/okcoin-config.properties`` under the working directory.
    """
    override = os.getenv(CONFIG_FILE_ENV_VAR)
    if override:
        return Path(override)
    return DEFAULT_CONFIG_FILE


class PropertiesConfigLoader:
    """Load ``key=value`` configuration with environment variable substitution."""

    def __init__(self, config_file: Path | str) -> None:
        """Initialize the loader and read the file.

        Load environment variables from a ``.env`` file (if present) and
        then parse the property file with python-dotenv's parser.

        Args:
            config_file: Path to the property file.

        Raises:
            IllegalConfigError: If the file cannot be read, a line is not a
                key/value pair, or a referenced variable is unset.

        """
        load_dotenv()
        self.config_file = Path(config_file)
        self._config: dict[str, str] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Parse the property file into a flat dictionary."""
        # dotenv_values silently yields nothing for a missing path
        if not self.config_file.is_file():
            msg = f"Cannot read config file {self.config_file}: not a file"
            raise IllegalConfigError(msg)
        try:
            raw = dotenv_values(self.config_file, interpolate=False, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read config file {self.config_file}: {exc}"
            raise IllegalConfigError(msg) from exc

        for key, value in raw.items():
            if value is None:
                msg = f"{self.config_file}: expected key=value, got {key!r}"
                raise IllegalConfigError(msg)
            self._config[key] = self._substitute_env_vars(value)

    def _substitute_env_vars(self, value: str) -> str:
        """Resolve a whole-value ``${VAR}`` or ``${VAR:default}`` reference."""
        match = _ENV_VALUE.fullmatch(value)
        if match is None:
            if _ENV_REFERENCE.search(value):
                msg = f"Unresolved environment variable reference in: {value}"
                raise IllegalConfigError(msg)
            return value

        var_name = match["name"]
        resolved = os.getenv(var_name, match["default"])
        if resolved is None:
            msg = f"Required environment variable ${{{var_name}}} is not set and has no default"
            raise IllegalConfigError(msg)
        return resolved

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by key.

        Args:
            key: Property name, e.g. ``public-key``.
            default: Default value if key not found.

        Returns:
            Configuration value.

        """
        return self._config.get(key, default)


def load_adapter_config(source: ConfigSource) -> AdapterConfig:
    """Validate raw configuration into an ``AdapterConfig``.

    Fee percentages are divided by 100 so that ``buy-fee=0.2`` yields a
    fraction of ``0.002``.

    Args:
        source: Any object exposing ``get(key, default=None)``.

    Returns:
        A fully populated adapter configuration.

    Raises:
        IllegalConfigError: If a required key is missing, blank or invalid.

    """
    public_key = _require(source, PUBLIC_KEY)
    secret_key = _require(source, SECRET_KEY)

    raw_timeout = _require(source, CONNECTION_TIMEOUT)
    try:
        connection_timeout = int(raw_timeout)
    except ValueError as exc:
        msg = f"{CONNECTION_TIMEOUT} must be an integer number of seconds, got {raw_timeout!r}"
        raise IllegalConfigError(msg) from exc
    if connection_timeout <= 0:
        msg = f"{CONNECTION_TIMEOUT} must be positive, got {connection_timeout}"
        raise IllegalConfigError(msg)

    config = AdapterConfig(
        public_key=public_key,
        secret_key=secret_key,
        connection_timeout=connection_timeout,
        buy_fee=_require_fee(source, BUY_FEE),
        sell_fee=_require_fee(source, SELL_FEE),
    )
    logger.debug(
        "Loaded adapter config: timeout=%ss buy_fee=%s sell_fee=%s",
        config.connection_timeout,
        config.buy_fee,
        config.sell_fee,
    )
    return config


def _require(source: ConfigSource, key: str) -> str:
    """Return a non-blank value for ``key`` or fail."""
    value = source.get(key)
    if value is None or not str(value).strip():
        msg = f"{key} is not configured"
        raise IllegalConfigError(msg)
    return str(value).strip()


def _require_fee(source: ConfigSource, key: str) -> Decimal:
    """Return the fee percentage under ``key`` as a fraction."""
    raw = _require(source, key)
    try:
        percentage = Decimal(raw)
    except InvalidOperation as exc:
        msg = f"{key} must be a decimal percentage, got {raw!r}"
        raise IllegalConfigError(msg) from exc
    if not percentage.is_finite() or percentage < 0:
        msg = f"{key} must be a non-negative decimal percentage, got {raw!r}"
        raise IllegalConfigError(msg)
    return percentage / _ONE_HUNDRED
