"""Structural protocols for the Trading API and its collaborators.

``TradingApi`` is the surface consumed by the trading engine. ``Transport``
and ``ConfigSource`` are the capabilities an adapter depends on, so tests
and alternative deployments can supply their own without subclassing.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from okcoin_adapter.core.models import BalanceInfo, MarketId, MarketOrderBook, OpenOrder, OrderType


@runtime_checkable
class TradingApi(Protocol):
    """Synchronous exchange adapter used by the trading engine.

    Every call may raise ``ExchangeTimeoutError`` (retryable) or
    ``TradingApiError`` (not retryable) and nothing else.
    """

    def get_impl_name(self) -> str:
        """Return a human-readable name for the implementation."""
        ...

    def get_market_orders(self, market_id: MarketId) -> MarketOrderBook:
        """Return the current order book for a market."""
        ...

    def get_your_open_orders(self, market_id: MarketId) -> list[OpenOrder]:
        """Return the caller's unfilled orders for a market."""
        ...

    def create_order(
        self,
        market_id: MarketId,
        order_type: OrderType,
        quantity: Decimal,
        price: Decimal,
    ) -> str:
        """Place a limit order and return the exchange-issued order id."""
        ...

    def cancel_order(self, order_id: str, market_id: MarketId) -> bool:
        """Cancel an order; return False when the exchange refuses."""
        ...

    def get_latest_market_price(self, market_id: MarketId) -> Decimal:
        """Return the price of the last trade on a market."""
        ...

    def get_balance_info(self) -> BalanceInfo:
        """Return available and on-hold balances."""
        ...

    def get_percentage_of_buy_order_taken_for_exchange_fee(self, market_id: MarketId) -> Decimal:
        """Return the buy fee as a fraction."""
        ...

    def get_percentage_of_sell_order_taken_for_exchange_fee(self, market_id: MarketId) -> Decimal:
        """Return the sell fee as a fraction."""
        ...


@runtime_checkable
class Transport(Protocol):
    """Send requests to an exchange and return the raw response body."""

    def send_public_request(self, endpoint: str, params: Mapping[str, str] | None = None) -> str:
        """Issue an unauthenticated GET request."""
        ...

    def send_authenticated_request(self, endpoint: str, params: Mapping[str, str]) -> str:
        """Issue a POST request whose parameters are already signed."""
        ...


@runtime_checkable
class ConfigSource(Protocol):
    """Lookup of raw configuration values by key."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key`` or ``default`` when absent."""
        ...
