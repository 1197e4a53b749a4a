"""Tests for the OKCoin exception hierarchy."""

from okcoin_adapter.clients.okcoin.exceptions import (
    ERROR_CODE_DESCRIPTIONS,
    OkCoinDecodeError,
    OkCoinError,
    OkCoinVendorError,
    describe_error_code,
)

_ERROR_CODE_ORDER_NOT_FOUND = 10009
_ERROR_CODE_UNLISTED = 99999


class TestDescribeErrorCode:
    """Tests for the error-code catalogue."""

    def test_known_code(self) -> None:
        """Test a documented code maps to its description."""
        assert describe_error_code(_ERROR_CODE_ORDER_NOT_FOUND) == "Order does not exist"

    def test_unknown_code(self) -> None:
        """Test an undocumented code is reported as unknown."""
        assert _ERROR_CODE_UNLISTED not in ERROR_CODE_DESCRIPTIONS
        assert describe_error_code(_ERROR_CODE_UNLISTED) == "Unknown error code"

    def test_missing_code(self) -> None:
        """Test a rejection without a code has its own description."""
        assert "without an error code" in describe_error_code(None)


class TestOkCoinVendorError:
    """Tests for OkCoinVendorError."""

    def test_inherits_from_base(self) -> None:
        """Test vendor and decode errors share the OkCoinError base."""
        assert issubclass(OkCoinVendorError, OkCoinError)
        assert issubclass(OkCoinDecodeError, OkCoinError)

    def test_attributes(self) -> None:
        """Test the endpoint, code and description are kept."""
        error = OkCoinVendorError("cancel_order.do", _ERROR_CODE_ORDER_NOT_FOUND)
        assert error.endpoint == "cancel_order.do"
        assert error.error_code == _ERROR_CODE_ORDER_NOT_FOUND
        assert error.description == "Order does not exist"

    def test_string_representation(self) -> None:
        """Test the message names the endpoint, code and description."""
        error = OkCoinVendorError("trade.do", _ERROR_CODE_ORDER_NOT_FOUND)
        assert str(error) == "trade.do rejected: [10009] Order does not exist"
