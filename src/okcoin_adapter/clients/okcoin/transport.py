"""HTTP transport for the OKCoin REST API."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from okcoin_adapter.core.exceptions import ExchangeTimeoutError, TradingApiError

logger = logging.getLogger(__name__)

_HTTP_OK = 200
_HTTP_MULTIPLE_CHOICES = 300


class OkCoinTransport:
    """Send GET and POST requests to the OKCoin v1 API.

    Public endpoints are queried with GET; authenticated endpoints take a
    form-encoded POST body whose parameters the caller has already signed.
    Timeouts and non-2xx statuses raise ``ExchangeTimeoutError``; any other
    transport failure raises ``TradingApiError``.
    """

    BASE_URL = "https://www.okcoin.com/api/v1"

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Base URL for the OKCoin API.
            timeout: Connect and read timeout in seconds.

        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = httpx.Client(timeout=timeout)

    def send_public_request(self, endpoint: str, params: Mapping[str, str] | None = None) -> str:
        """Make an unauthenticated GET request.

        Args:
            endpoint: API endpoint, e.g. ``ticker.do``.
            params: Query parameters.

        Returns:
            Response body as text.

        """
        logger.debug("GET %s params=%s", endpoint, dict(params or {}))
        return self._request("GET", endpoint, params=dict(params or {}))

    def send_authenticated_request(self, endpoint: str, params: Mapping[str, str]) -> str:
        """Make a form-encoded POST request with pre-signed parameters.

        Args:
            endpoint: API endpoint, e.g. ``trade.do``.
            params: Signed request parameters, including ``api_key`` and ``sign``.

        Returns:
            Response body as text.

        """
        logger.debug("POST %s", endpoint)
        return self._request(
            "POST",
            endpoint,
            data=dict(params),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

    def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """Send a request and classify failures.

        Raises:
            ExchangeTimeoutError: On connect/read timeouts and non-2xx statuses.
            TradingApiError: For any other transport failure.

        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            response = self._http_client.request(
                method,
                url,
                params=params,
                data=data,
                headers=headers,
            )
        except httpx.TimeoutException as exc:
            msg = f"Timed out calling {endpoint} after {self.timeout}s"
            raise ExchangeTimeoutError(msg) from exc
        except httpx.HTTPError as exc:
            msg = f"Failed to call {endpoint}: {exc}"
            raise TradingApiError(msg) from exc

        if not _HTTP_OK <= response.status_code < _HTTP_MULTIPLE_CHOICES:
            logger.warning("%s returned HTTP %d", endpoint, response.status_code)
            msg = f"{endpoint} returned HTTP {response.status_code}"
            raise ExchangeTimeoutError(msg, status_code=response.status_code)

        return response.text

    def close(self) -> None:
        """Close the HTTP client."""
        self._http_client.close()

    def __enter__(self) -> "OkCoinTransport":
        """Enter context manager."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context manager."""
        self.close()
