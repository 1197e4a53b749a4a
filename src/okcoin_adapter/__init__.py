"""Exchange adapter for the OKCoin v1 REST spot-trading API."""

from okcoin_adapter.clients.okcoin import OkCoinExchangeAdapter
from okcoin_adapter.core.exceptions import (
    ExchangeTimeoutError,
    IllegalConfigError,
    TradingApiError,
)

__all__ = [
    "ExchangeTimeoutError",
    "IllegalConfigError",
    "OkCoinExchangeAdapter",
    "TradingApiError",
]
