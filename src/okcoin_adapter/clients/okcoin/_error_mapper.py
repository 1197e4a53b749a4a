"""Translate internal failures into the public Trading API failure kinds.

Every public adapter operation runs inside ``translate_errors`` so that
callers only ever see ``ExchangeTimeoutError`` or ``TradingApiError``.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from okcoin_adapter.clients.okcoin.exceptions import OkCoinVendorError
from okcoin_adapter.core.exceptions import ExchangeTimeoutError, TradingApiError

logger = logging.getLogger(__name__)


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """Map anything raised inside the block onto a public failure kind.

    Public failures propagate unchanged. Vendor error envelopes become a
    ``TradingApiError`` carrying the vendor code. Any other exception,
    programming faults included, becomes a ``TradingApiError`` chained
    from the original.

    Args:
        operation: Name of the Trading API operation, used in messages.

    Raises:
        ExchangeTimeoutError: When the exchange timed out.
        TradingApiError: For every other failure.

    """
    try:
        yield
    except (ExchangeTimeoutError, TradingApiError) as exc:
        logger.warning("%s failed: %s", operation, exc)
        raise
    except OkCoinVendorError as exc:
        logger.error("%s failed: %s", operation, exc)
        raise TradingApiError(f"{operation} failed: {exc}", error_code=exc.error_code) from exc
    except Exception as exc:
        logger.exception("Unexpected error during %s", operation)
        raise TradingApiError(f"{operation} failed: {exc}") from exc
