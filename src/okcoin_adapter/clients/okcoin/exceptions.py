"""Exceptions for the OKCoin REST client.

These never reach callers of the Trading API; the adapter translates them
into ``TradingApiError`` or, for order cancellation, a ``False`` result.
"""

ERROR_CODE_DESCRIPTIONS: dict[int, str] = {
    10000: "Required field, can not be null",
    10001: "Request frequency too high",
    10002: "System error",
    10003: "Not in request list, please try again later",
    10004: "IP not allowed to access the resource",
    10005: "'secret_key' does not exist",
    10006: "'api_key' does not exist",
    10007: "Signature does not match",
    10008: "Illegal parameter",
    10009: "Order does not exist",
    10010: "Insufficient funds",
    10011: "Amount too low",
    10012: "Only btc_usd ltc_usd supported",
    10013: "Only support https request",
    10014: "Order price must be between 0 and 1,000,000",
    10015: "Order price differs from current market price too much",
    10016: "Insufficient coins balance",
    10017: "API authorization error",
    10024: "Balance not sufficient",
    10025: "Quota is full, cannot borrow temporarily",
    10026: "Loan (including reserved loan) and margin cannot be withdrawn",
    10027: "Cannot withdraw within 24 hrs of authentication information modification",
    10028: "Withdrawal amount exceeds daily limit",
    10029: "Account has unpaid loan, please cancel/pay off the loan before withdraw",
    10031: "Deposits can only be withdrawn after 6 confirmations",
    10032: "Please enabled phone/google authenticator",
    10033: "Fee higher than maximum network transaction fee",
    10034: "Fee lower than minimum network transaction fee",
    10035: "Insufficient BTC/LTC",
    10036: "Withdrawal amount too low",
    10037: "Trade password not set",
    10040: "Withdrawal cancellation fails",
    10041: "Withdrawal address not approved",
    10042: "Admin password error",
    10100: "User account frozen",
    10216: "Non-available API",
}


def describe_error_code(error_code: int | None) -> str:
    """Return the documented meaning of an OKCoin error code."""
    if error_code is None:
        return "Request rejected without an error code"
    return ERROR_CODE_DESCRIPTIONS.get(error_code, "Unknown error code")


class OkCoinError(Exception):
    """Base exception for OKCoin client errors."""


class OkCoinVendorError(OkCoinError):
    """The exchange answered with an error envelope.

    OKCoin returns errors as ``{"result": false, "error_code": 10009}``.
    """

    def __init__(self, endpoint: str, error_code: int | None) -> None:
        """Initialize vendor error.

        Args:
            endpoint: API endpoint that rejected the request, e.g. ``trade.do``.
            error_code: OKCoin error code, if the envelope carried one.

        """
        self.endpoint = endpoint
        self.error_code = error_code
        self.description = describe_error_code(error_code)
        super().__init__(f"{endpoint} rejected: [{error_code}] {self.description}")


class OkCoinDecodeError(OkCoinError):
    """A response body could not be mapped to the expected shape."""
