"""Authentication module for the OKCoin API."""

from okcoin_adapter.clients.okcoin.auth.signer import Md5Signer

__all__ = ["Md5Signer"]
