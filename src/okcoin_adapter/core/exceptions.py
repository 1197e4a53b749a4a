"""Public failure kinds surfaced by every Trading API implementation.

Callers catch exactly two kinds at runtime: ``ExchangeTimeoutError`` is
retryable, ``TradingApiError`` is not. ``IllegalConfigError`` is only ever
raised while an adapter is being constructed.
"""


class TradingApiError(Exception):
    """Non-retryable failure of a Trading API call.

    Raised for malformed responses, unexpected schemas, vendor error
    envelopes, rejected signatures, I/O errors and programming faults.
    """

    def __init__(self, message: str, error_code: int | None = None) -> None:
        """Initialize Trading API error.

        Args:
            message: Human-readable description of the failure.
            error_code: Vendor error code when the exchange supplied one.

        """
        super().__init__(message)
        self.error_code = error_code


class ExchangeTimeoutError(Exception):
    """Retryable failure: the exchange did not answer in time.

    Also raised when the exchange answers with a transient HTTP status.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize timeout error.

        Args:
            message: Human-readable description of the failure.
            status_code: HTTP status code if the exchange responded at all.

        """
        super().__init__(message)
        self.status_code = status_code


class IllegalConfigError(ValueError):
    """Raise when adapter configuration is missing or invalid."""
