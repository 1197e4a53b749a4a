"""Trading API adapter for the OKCoin v1 REST spot-trading API.

Each operation builds the vendor parameters, signs them when the endpoint
requires authentication, makes exactly one request through the transport
and decodes the response. Failures reach the caller only as
``ExchangeTimeoutError`` or ``TradingApiError``; a refused cancellation is
reported as ``False``.
"""

import logging
from decimal import Decimal
from typing import Any

from okcoin_adapter.clients.okcoin._error_mapper import translate_errors
from okcoin_adapter.clients.okcoin.auth.signer import Md5Signer
from okcoin_adapter.clients.okcoin.decoder import (
    Accepted,
    Envelope,
    Rejected,
    decode_cancel,
    decode_depth,
    decode_envelope,
    decode_order_info,
    decode_ticker,
    decode_trade,
    decode_userinfo,
)
from okcoin_adapter.clients.okcoin.exceptions import OkCoinVendorError
from okcoin_adapter.clients.okcoin.transport import OkCoinTransport
from okcoin_adapter.core.config import (
    PropertiesConfigLoader,
    default_config_file_location,
    load_adapter_config,
)
from okcoin_adapter.core.models import (
    AdapterConfig,
    BalanceInfo,
    MarketId,
    MarketOrderBook,
    OpenOrder,
    OrderType,
)
from okcoin_adapter.core.protocols import ConfigSource, Transport

logger = logging.getLogger(__name__)

IMPL_NAME = "OKCoin REST Spot Trading API v1"

TICKER = "ticker.do"
DEPTH = "depth.do"
USERINFO = "userinfo.do"
ORDER_INFO = "order_info.do"
TRADE = "trade.do"
CANCEL_ORDER = "cancel_order.do"

# order_info.do treats order_id=-1 as "every unfilled order".
_ALL_UNFILLED_ORDERS = "-1"

_ORDER_TYPE_TOKENS: dict[OrderType, str] = {
    OrderType.BUY: "buy",
    OrderType.SELL: "sell",
}


class OkCoinExchangeAdapter:
    """Synchronous OKCoin implementation of the ``TradingApi`` protocol.

    Configuration is validated once at construction; afterwards the adapter
    holds no mutable state and can be shared between threads as far as the
    transport allows.
    """

    def __init__(
        self,
        config: AdapterConfig | ConfigSource | None = None,
        transport: Transport | None = None,
        *,
        sort_order_book: bool = False,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: A validated ``AdapterConfig``, any ``ConfigSource`` to
                validate, or ``None`` to read the property file returned by
                ``default_config_file_location()``.
            transport: Transport used for every request. Defaults to an
                ``OkCoinTransport`` bounded by the configured timeout.
            sort_order_book: Sort depth data by price instead of trusting
                the exchange's ordering.

        Raises:
            IllegalConfigError: If the configuration is missing or invalid.

        """
        if config is None:
            config = PropertiesConfigLoader(default_config_file_location())
        if not isinstance(config, AdapterConfig):
            config = load_adapter_config(config)

        self._config = config
        self._signer = Md5Signer(config.credentials)
        self._owns_transport = transport is None
        self._transport: Transport = transport or OkCoinTransport(timeout=config.connection_timeout)
        self._sort_order_book = sort_order_book
        logger.info(
            "%s initialised (timeout=%ss)",
            IMPL_NAME,
            config.connection_timeout,
        )

    def get_impl_name(self) -> str:
        """Return the implementation name."""
        return IMPL_NAME

    def get_market_orders(self, market_id: MarketId) -> MarketOrderBook:
        """Return the order book for a market.

        Args:
            market_id: Trading pair, e.g. ``btc_usd``.

        Returns:
            Bids best first and asks best first, each level with its total.

        """
        with translate_errors("get_market_orders"):
            payload = self._query_public(DEPTH, {"symbol": market_id})
            return decode_depth(payload, market_id, sort=self._sort_order_book)

    def get_latest_market_price(self, market_id: MarketId) -> Decimal:
        """Return the last traded price with the exchange's full precision."""
        with translate_errors("get_latest_market_price"):
            payload = self._query_public(TICKER, {"symbol": market_id})
            return decode_ticker(payload)

    def get_your_open_orders(self, market_id: MarketId) -> list[OpenOrder]:
        """Return every unfilled order the account has on a market.

        Args:
            market_id: Trading pair, e.g. ``btc_usd``.

        Returns:
            Possibly empty list of open orders.

        """
        with translate_errors("get_your_open_orders"):
            payload = self._query_authenticated(
                ORDER_INFO,
                {"symbol": market_id, "order_id": _ALL_UNFILLED_ORDERS},
            )
            return decode_order_info(payload, market_id)

    def create_order(
        self,
        market_id: MarketId,
        order_type: OrderType,
        quantity: Decimal,
        price: Decimal,
    ) -> str:
        """Place a limit order.

        Args:
            market_id: Trading pair, e.g. ``btc_usd``.
            order_type: BUY or SELL.
            quantity: Amount of the base asset.
            price: Limit price in the quote asset.

        Returns:
            The order id issued by the exchange.

        """
        with translate_errors("create_order"):
            params = {
                "symbol": market_id,
                "type": _ORDER_TYPE_TOKENS[order_type],
                "price": _plain(price),
                "amount": _plain(quantity),
            }
            payload = self._query_authenticated(TRADE, params)
            order_id = decode_trade(payload)
            logger.info(
                "Created %s order %s on %s: %s @ %s",
                order_type.value,
                order_id,
                market_id,
                params["amount"],
                params["price"],
            )
            return order_id

    def cancel_order(self, order_id: str, market_id: MarketId) -> bool:
        """Cancel an order.

        Returns:
            ``True`` if the exchange cancelled it, ``False`` if the exchange
            refused (for instance because the order no longer exists).

        """
        with translate_errors("cancel_order"):
            envelope = self._send_authenticated(
                CANCEL_ORDER,
                {"order_id": order_id, "symbol": market_id},
            )
            if isinstance(envelope, Rejected):
                logger.warning(
                    "Cancel of order %s on %s refused: %s",
                    order_id,
                    market_id,
                    OkCoinVendorError(CANCEL_ORDER, envelope.error_code),
                )
                return False
            return decode_cancel(envelope.payload)

    def get_balance_info(self) -> BalanceInfo:
        """Return available and on-hold balances keyed by uppercase asset code."""
        with translate_errors("get_balance_info"):
            payload = self._query_authenticated(USERINFO, {})
            return decode_userinfo(payload)

    def get_percentage_of_buy_order_taken_for_exchange_fee(
        self,
        market_id: MarketId,  # noqa: ARG002
    ) -> Decimal:
        """Return the buy fee as a fraction; the same for every market."""
        return self._config.buy_fee

    def get_percentage_of_sell_order_taken_for_exchange_fee(
        self,
        market_id: MarketId,  # noqa: ARG002
    ) -> Decimal:
        """Return the sell fee as a fraction; the same for every market."""
        return self._config.sell_fee

    def close(self) -> None:
        """Close the transport if this adapter created it."""
        if self._owns_transport and isinstance(self._transport, OkCoinTransport):
            self._transport.close()

    def __enter__(self) -> "OkCoinExchangeAdapter":
        """Enter context manager."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context manager."""
        self.close()

    def _query_public(self, endpoint: str, params: dict[str, str]) -> dict[str, Any]:
        """GET a public endpoint and return its success payload."""
        envelope = decode_envelope(self._transport.send_public_request(endpoint, params))
        return _accepted(endpoint, envelope)

    def _query_authenticated(self, endpoint: str, params: dict[str, str]) -> dict[str, Any]:
        """POST to an authenticated endpoint and return its success payload."""
        return _accepted(endpoint, self._send_authenticated(endpoint, params))

    def _send_authenticated(self, endpoint: str, params: dict[str, str]) -> Envelope:
        signed = self._signer.sign(params)
        return decode_envelope(self._transport.send_authenticated_request(endpoint, signed))


def _accepted(endpoint: str, envelope: Envelope) -> dict[str, Any]:
    """Return the payload of a success envelope or raise the vendor error."""
    if isinstance(envelope, Accepted):
        return envelope.payload
    raise OkCoinVendorError(endpoint, envelope.error_code)


def _plain(value: Decimal) -> str:
    """Format a decimal without exponent notation."""
    return format(value, "f")
