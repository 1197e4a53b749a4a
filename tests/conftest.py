"""Shared test configuration and fixtures."""

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

_ISOLATED_ENV_VARS = ("OKCOIN_CONFIG_FILE",)


@pytest.fixture(autouse=True)
def _isolate_config_env_vars() -> Iterator[None]:  # pyright: ignore[reportUnusedFunction]
    """Hide config-location overrides set in the developer's shell.

    ``default_config_file_location()`` honours ``$OKCOIN_CONFIG_FILE``; a
    value exported locally would otherwise leak into every test that builds
    an adapter without explicit configuration.
    """
    leaked = [name for name in _ISOLATED_ENV_VARS if name in os.environ]
    if not leaked:
        yield
        return
    with patch.dict(os.environ):
        for name in leaked:
            del os.environ[name]
        yield
