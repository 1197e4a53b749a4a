"""OKCoin v1 REST spot-trading client."""

from okcoin_adapter.clients.okcoin.adapter import OkCoinExchangeAdapter
from okcoin_adapter.clients.okcoin.exceptions import (
    OkCoinDecodeError,
    OkCoinError,
    OkCoinVendorError,
)
from okcoin_adapter.clients.okcoin.transport import OkCoinTransport

__all__ = [
    "OkCoinDecodeError",
    "OkCoinError",
    "OkCoinExchangeAdapter",
    "OkCoinTransport",
    "OkCoinVendorError",
]
