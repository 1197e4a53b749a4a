"""Fixtures for OKCoin adapter tests."""

from collections.abc import Callable, Mapping
from decimal import Decimal
from pathlib import Path

import pytest

from okcoin_adapter.clients.okcoin.adapter import OkCoinExchangeAdapter
from okcoin_adapter.core.models import AdapterConfig

EXCHANGE_DATA_DIR = Path(__file__).parent / "exchange_data"
CONFIG_DIR = Path(__file__).parent / "config"


class FakeTransport:
    """In-memory transport returning canned bodies or raising canned errors.

    Record every call as ``(method, endpoint, params)`` so tests can check
    what would have gone down the wire.
    """

    def __init__(self) -> None:
        """Initialize with no canned responses."""
        self.responses: dict[str, str | Exception] = {}
        self.calls: list[tuple[str, str, dict[str, str]]] = []

    def respond(self, endpoint: str, outcome: str | Exception) -> None:
        """Return ``outcome`` (or raise it) for every call to ``endpoint``."""
        self.responses[endpoint] = outcome

    def send_public_request(self, endpoint: str, params: Mapping[str, str] | None = None) -> str:
        """Serve a canned GET response."""
        self.calls.append(("GET", endpoint, dict(params or {})))
        return self._outcome(endpoint)

    def send_authenticated_request(self, endpoint: str, params: Mapping[str, str]) -> str:
        """Serve a canned POST response."""
        self.calls.append(("POST", endpoint, dict(params)))
        return self._outcome(endpoint)

    def _outcome(self, endpoint: str) -> str:
        outcome = self.responses[endpoint]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def load_response() -> Callable[[str], str]:
    """Return a loader for canned exchange responses."""

    def _load(name: str) -> str:
        return (EXCHANGE_DATA_DIR / name).read_text(encoding="utf-8")

    return _load


@pytest.fixture
def adapter_config() -> AdapterConfig:
    """Return a valid adapter configuration."""
    return AdapterConfig(
        public_key="key123",
        secret_key="notGonnaTellYa",
        connection_timeout=30,
        buy_fee=Decimal("0.002"),
        sell_fee=Decimal("0.002"),
    )


@pytest.fixture
def transport() -> FakeTransport:
    """Return an empty fake transport."""
    return FakeTransport()


@pytest.fixture
def adapter(adapter_config: AdapterConfig, transport: FakeTransport) -> OkCoinExchangeAdapter:
    """Return an adapter wired to the fake transport."""
    return OkCoinExchangeAdapter(adapter_config, transport)
