"""Domain value objects returned by the Trading API.

Define the immutable order, order book and balance records that flow from
exchange adapters to the trading engine, plus the adapter configuration.
All prices, quantities, balances and fees are ``Decimal`` so that values
such as ``0.002`` survive every round trip exactly.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, localcontext
from enum import Enum

MarketId = str
"""Opaque exchange token for a trading pair, e.g. ``btc_usd``."""


def exact_product(a: Decimal, b: Decimal) -> Decimal:
    """Multiply two decimals with enough precision that nothing is rounded."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(a.as_tuple().digits) + len(b.as_tuple().digits))
        return a * b


class OrderType(Enum):
    """Side of an order: BUY (bid) or SELL (ask)."""

    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class MarketOrder:
    """Single price level in a market order book.

    ``total`` is the exact product of ``price`` and ``quantity``; use
    ``MarketOrder.of`` to build one without computing it by hand.
    """

    type: OrderType
    price: Decimal
    quantity: Decimal
    total: Decimal

    @classmethod
    def of(cls, order_type: OrderType, price: Decimal, quantity: Decimal) -> "MarketOrder":
        """Build a level with its total computed from price and quantity."""
        return cls(
            type=order_type,
            price=price,
            quantity=quantity,
            total=exact_product(price, quantity),
        )


@dataclass(frozen=True)
class MarketOrderBook:
    """Bid and ask ladders for one market.

    Args:
        market_id: Market the book belongs to.
        buy_orders: Bids, best (highest price) first.
        sell_orders: Asks, best (lowest price) first.

    """

    market_id: MarketId
    buy_orders: tuple[MarketOrder, ...]
    sell_orders: tuple[MarketOrder, ...]


@dataclass(frozen=True)
class OpenOrder:
    """An order placed by the authenticated user that is still on the book.

    ``original_quantity`` is ``None`` when the exchange does not report it.
    """

    id: str
    market_id: MarketId
    type: OrderType
    creation_date: datetime
    price: Decimal
    quantity: Decimal
    total: Decimal
    original_quantity: Decimal | None = None


@dataclass(frozen=True)
class BalanceInfo:
    """Wallet balances keyed by uppercase asset code (``BTC``, ``USD``).

    Assets the exchange does not report are simply absent.
    """

    balances_available: dict[str, Decimal] = field(default_factory=dict)
    balances_on_hold: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class Credentials:
    """API key pair; the secret is excluded from ``repr``."""

    public_key: str
    secret_key: str = field(repr=False)


@dataclass(frozen=True)
class AdapterConfig:
    """Validated adapter settings.

    Fees are fractions (``0.002`` means 0.2%), not percentages.
    """

    public_key: str
    secret_key: str = field(repr=False)
    connection_timeout: int
    buy_fee: Decimal
    sell_fee: Decimal

    @property
    def credentials(self) -> Credentials:
        """Return the API key pair."""
        return Credentials(public_key=self.public_key, secret_key=self.secret_key)
