"""MD5 signature generation for OKCoin API authentication."""

from collections.abc import Mapping

from cryptography.hazmat.primitives import hashes

from okcoin_adapter.core.models import Credentials

API_KEY_PARAM = "api_key"
SIGN_PARAM = "sign"
SECRET_KEY_PARAM = "secret_key"


class Md5Signer:
    """Handles MD5 signature generation for authenticated API requests.

    OKCoin authenticates a request by a digest over its parameters:
    the ``name=value`` pairs (including ``api_key``) sorted by name and
    joined with ``&``, followed by ``&secret_key=<secret>``. The digest is
    sent as the uppercase hex ``sign`` parameter; the secret itself is
    never sent.
    """

    def __init__(self, credentials: Credentials) -> None:
        """Initialize the signer with the account's key pair.

        Args:
            credentials: Public and secret API keys.
        """
        self._credentials = credentials

    def build_payload(self, params: Mapping[str, str]) -> str:
        """Return the sorted, ``&``-joined parameter string without the secret.

        Args:
            params: Request parameters; any ``sign`` entry is ignored.

        Returns:
            The canonical parameter string including ``api_key``.
        """
        return "&".join(f"{name}={value}" for name, value in self._with_api_key(params).items())

    def generate_signature(self, params: Mapping[str, str]) -> str:
        """Generate the MD5 signature for a set of request parameters.

        Args:
            params: Request parameters; any ``sign`` entry is ignored.

        Returns:
            Uppercase hexadecimal MD5 digest (32 characters).
        """
        message = f"{self.build_payload(params)}&{SECRET_KEY_PARAM}={self._credentials.secret_key}"

        digest = hashes.Hash(hashes.MD5())
        digest.update(message.encode("utf-8"))
        return digest.finalize().hex().upper()

    def sign(self, params: Mapping[str, str]) -> dict[str, str]:
        """Return the parameters to send: sorted, with ``api_key`` and ``sign`` added.

        Args:
            params: Request parameters for an authenticated endpoint.

        Returns:
            A new dictionary; the input is left untouched.
        """
        signed = self._with_api_key(params)
        signed[SIGN_PARAM] = self.generate_signature(params)
        return signed

    def _with_api_key(self, params: Mapping[str, str]) -> dict[str, str]:
        """Return ``params`` plus ``api_key``, minus ``sign``, sorted by name."""
        merged = {name: str(value) for name, value in params.items() if name != SIGN_PARAM}
        merged[API_KEY_PARAM] = self._credentials.public_key
        return dict(sorted(merged.items(), key=lambda item: item[0].encode("utf-8")))
