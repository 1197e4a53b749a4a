"""Translate OKCoin JSON responses into domain models.

Every response is first classified by ``decode_envelope`` into
``Accepted`` or ``Rejected``; only accepted payloads are projected. Numbers
are parsed straight into ``Decimal`` so no value ever passes through a
binary float.
"""

import json
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, cast

from okcoin_adapter.clients.okcoin.exceptions import OkCoinDecodeError
from okcoin_adapter.core.models import (
    BalanceInfo,
    MarketId,
    MarketOrder,
    MarketOrderBook,
    OpenOrder,
    OrderType,
    exact_product,
)

_MS_PER_SECOND = 1000
_PRICE_LEVEL_FIELDS = 2

_ORDER_TYPES: dict[str, OrderType] = {
    "buy": OrderType.BUY,
    "sell": OrderType.SELL,
}


@dataclass(frozen=True)
class Accepted:
    """Success envelope carrying the decoded JSON object."""

    payload: dict[str, Any]


@dataclass(frozen=True)
class Rejected:
    """Error envelope: the exchange refused the request."""

    error_code: int | None


Envelope = Accepted | Rejected


def decode_envelope(text: str) -> Envelope:
    """Parse a response body and classify it as success or error.

    An envelope is an error when it carries ``error_code`` or when
    ``result`` is explicitly ``false``.

    Args:
        text: Raw response body.

    Returns:
        ``Rejected`` for error envelopes, ``Accepted`` otherwise.

    Raises:
        OkCoinDecodeError: If the body is not a JSON object.

    """
    try:
        data = json.loads(text, parse_float=Decimal)
    except (TypeError, ValueError) as exc:
        msg = f"Response is not valid JSON: {_truncate(str(text))}"
        raise OkCoinDecodeError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Expected a JSON object, got {type(data).__name__}"
        raise OkCoinDecodeError(msg)

    payload = cast("dict[str, Any]", data)
    if "error_code" in payload or payload.get("result") is False:
        return Rejected(error_code=_to_error_code(payload.get("error_code")))
    return Accepted(payload)


def to_decimal(value: Any) -> Decimal:
    """Convert a JSON scalar to ``Decimal`` from its textual form.

    Raises:
        OkCoinDecodeError: For booleans, missing values and non-numeric text.

    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        msg = f"Expected a decimal value, got {value!r}"
        raise OkCoinDecodeError(msg)
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as exc:
        msg = f"Expected a decimal value, got {value!r}"
        raise OkCoinDecodeError(msg) from exc
    if not result.is_finite():
        msg = f"Expected a finite decimal value, got {value!r}"
        raise OkCoinDecodeError(msg)
    return result


def decode_ticker(payload: dict[str, Any]) -> Decimal:
    """Return the last traded price from a ``ticker.do`` payload."""
    ticker = _require_object(payload, "ticker")
    return to_decimal(_require(ticker, "last"))


def decode_depth(
    payload: dict[str, Any],
    market_id: MarketId,
    *,
    sort: bool = False,
) -> MarketOrderBook:
    """Build an order book from a ``depth.do`` payload.

    Vendor ordering is kept unless ``sort`` is set, in which case bids are
    ordered highest price first and asks lowest price first.
    """
    buy_orders = _decode_levels(_require_list(payload, "bids"), OrderType.BUY)
    sell_orders = _decode_levels(_require_list(payload, "asks"), OrderType.SELL)
    if sort:
        buy_orders.sort(key=lambda order: order.price, reverse=True)
        sell_orders.sort(key=lambda order: order.price)
    return MarketOrderBook(
        market_id=market_id,
        buy_orders=tuple(buy_orders),
        sell_orders=tuple(sell_orders),
    )


def decode_userinfo(payload: dict[str, Any]) -> BalanceInfo:
    """Build balances from a ``userinfo.do`` payload.

    ``free`` funds become available balances and ``freezed`` funds become
    balances on hold; asset codes are uppercased.
    """
    funds = _require_object(_require_object(payload, "info"), "funds")
    return BalanceInfo(
        balances_available=_decode_balances(_require_object(funds, "free")),
        balances_on_hold=_decode_balances(_require_object(funds, "freezed")),
    )


def decode_order_info(payload: dict[str, Any], market_id: MarketId) -> list[OpenOrder]:
    """Build open orders from an ``order_info.do`` payload."""
    return [
        _decode_open_order(_as_object(raw, "orders[]"), market_id)
        for raw in _require_list(payload, "orders")
    ]


def decode_trade(payload: dict[str, Any]) -> str:
    """Return the exchange-issued order id from a ``trade.do`` payload."""
    order_id = _require(payload, "order_id")
    if isinstance(order_id, bool) or not isinstance(order_id, (int, str)):
        msg = f"Unexpected order_id {order_id!r}"
        raise OkCoinDecodeError(msg)
    return str(order_id)


def decode_cancel(payload: dict[str, Any]) -> bool:
    """Confirm a ``cancel_order.do`` payload reports the cancellation.

    Only ``result: true`` counts; any other accepted body is a mismatch.
    """
    result = payload.get("result")
    if result is not True:
        msg = f"Cancellation not confirmed: result={result!r}"
        raise OkCoinDecodeError(msg)
    return True


def _decode_open_order(raw: dict[str, Any], market_id: MarketId) -> OpenOrder:
    """Parse one entry of the ``orders`` array."""
    raw_type = _require(raw, "type")
    order_type = _ORDER_TYPES.get(raw_type) if isinstance(raw_type, str) else None
    if order_type is None:
        msg = f"Unrecognised order type {raw_type!r}"
        raise OkCoinDecodeError(msg)

    price = to_decimal(_require(raw, "price"))
    quantity = to_decimal(_require(raw, "amount"))
    return OpenOrder(
        id=str(_require(raw, "order_id")),
        market_id=market_id,
        type=order_type,
        creation_date=_from_epoch_millis(_require(raw, "create_date")),
        price=price,
        quantity=quantity,
        total=exact_product(price, quantity),
    )


def _decode_levels(rows: list[Any], order_type: OrderType) -> list[MarketOrder]:
    """Parse ``[[price, quantity], ...]`` into market orders."""
    levels: list[MarketOrder] = []
    for row in rows:
        if not isinstance(row, list) or len(cast("list[Any]", row)) < _PRICE_LEVEL_FIELDS:
            msg = f"Expected [price, quantity], got {row!r}"
            raise OkCoinDecodeError(msg)
        price, quantity = cast("list[Any]", row)[:_PRICE_LEVEL_FIELDS]
        levels.append(MarketOrder.of(order_type, to_decimal(price), to_decimal(quantity)))
    return levels


def _decode_balances(raw: dict[str, Any]) -> dict[str, Decimal]:
    return {asset.upper(): to_decimal(amount) for asset, amount in raw.items()}


def _from_epoch_millis(value: Any) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime without float rounding."""
    millis = int(to_decimal(value))
    seconds, remainder = divmod(millis, _MS_PER_SECOND)
    return datetime.fromtimestamp(seconds, tz=UTC) + timedelta(milliseconds=remainder)


def _to_error_code(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        msg = f"Unexpected error_code {value!r}"
        raise OkCoinDecodeError(msg) from exc


def _require(obj: dict[str, Any], key: str) -> Any:
    if key not in obj:
        msg = f"Missing field {key!r}"
        raise OkCoinDecodeError(msg)
    return obj[key]


def _require_object(obj: dict[str, Any], key: str) -> dict[str, Any]:
    return _as_object(_require(obj, key), key)


def _require_list(obj: dict[str, Any], key: str) -> list[Any]:
    value = _require(obj, key)
    if not isinstance(value, list):
        msg = f"Field {key!r} must be a list, got {type(value).__name__}"
        raise OkCoinDecodeError(msg)
    return cast("list[Any]", value)


def _as_object(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        msg = f"Field {name!r} must be an object, got {type(value).__name__}"
        raise OkCoinDecodeError(msg)
    return cast("dict[str, Any]", value)


def _truncate(text: str, limit: int = 100) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."
