"""Tests for core data models."""

import dataclasses
from datetime import UTC, datetime
from decimal import Decimal, getcontext

import pytest

from okcoin_adapter.core.models import (
    AdapterConfig,
    BalanceInfo,
    Credentials,
    MarketOrder,
    MarketOrderBook,
    OpenOrder,
    OrderType,
    exact_product,
)


class TestOrderType:
    """Tests for OrderType enum."""

    def test_values(self) -> None:
        """Test OrderType enum values."""
        assert OrderType.BUY.value == "BUY"
        assert OrderType.SELL.value == "SELL"
        assert len(OrderType) == 2  # noqa: PLR2004


class TestMarketOrder:
    """Tests for MarketOrder model."""

    def test_of_computes_total(self) -> None:
        """Test the total is the exact product of price and quantity."""
        order = MarketOrder.of(OrderType.BUY, Decimal("228.3"), Decimal("52.995"))
        assert order.total == Decimal("12098.7585")

    def test_of_does_not_round_long_operands(self) -> None:
        """Test totals beyond the default 28-digit precision stay exact."""
        order = MarketOrder.of(
            OrderType.SELL,
            Decimal("123456789012345.123456789"),
            Decimal("1.00000000000000000001"),
        )
        assert order.total == Decimal("123456789012345.12345802356789012345123456789")

    def test_exact_product_leaves_context_untouched(self) -> None:
        """Test the widened precision does not leak into the caller's context."""
        before = getcontext().prec
        exact_product(Decimal("1.1111111111111111111111111111"), Decimal("3.3"))
        assert getcontext().prec == before

    def test_value_equality(self) -> None:
        """Test equality ignores decimal representation."""
        a = MarketOrder.of(OrderType.SELL, Decimal("0.002"), Decimal(1))
        b = MarketOrder.of(OrderType.SELL, Decimal("0.00200"), Decimal("1.0"))
        assert a == b

    def test_frozen(self) -> None:
        """Test MarketOrder is immutable."""
        order = MarketOrder.of(OrderType.BUY, Decimal(1), Decimal(1))
        with pytest.raises(dataclasses.FrozenInstanceError):
            order.price = Decimal(2)  # type: ignore[misc]


class TestMarketOrderBook:
    """Tests for MarketOrderBook model."""

    def test_structural_equality(self) -> None:
        """Test books with the same levels compare equal."""
        level = MarketOrder.of(OrderType.BUY, Decimal(1), Decimal(2))
        assert MarketOrderBook("btc_usd", (level,), ()) == MarketOrderBook(
            "btc_usd", (level,), ()
        )


class TestOpenOrder:
    """Tests for OpenOrder model."""

    def test_original_quantity_defaults_to_none(self) -> None:
        """Test original_quantity is optional."""
        order = OpenOrder(
            id="1",
            market_id="btc_usd",
            type=OrderType.SELL,
            creation_date=datetime(2015, 9, 22, tzinfo=UTC),
            price=Decimal(255),
            quantity=Decimal("0.015"),
            total=Decimal("3.825"),
        )
        assert order.original_quantity is None


class TestBalanceInfo:
    """Tests for BalanceInfo model."""

    def test_defaults_are_empty(self) -> None:
        """Test balances default to empty mappings."""
        info = BalanceInfo()
        assert info.balances_available == {}
        assert info.balances_on_hold == {}


class TestCredentials:
    """Tests for Credentials and AdapterConfig."""

    def test_repr_hides_secret(self) -> None:
        """Test the secret key is excluded from repr."""
        assert "s3cret" not in repr(Credentials(public_key="pub", secret_key="s3cret"))

    def test_config_exposes_credentials(self) -> None:
        """Test AdapterConfig hands out its key pair."""
        config = AdapterConfig(
            public_key="pub",
            secret_key="s3cret",
            connection_timeout=30,
            buy_fee=Decimal("0.002"),
            sell_fee=Decimal("0.002"),
        )
        assert config.credentials == Credentials(public_key="pub", secret_key="s3cret")
        assert "s3cret" not in repr(config)
