"""Request signing with HMAC-SHA256."""
from Crypto.Hash import HMAC, SHA256


class Signer:
    """
    Computes the request digest.

    The API key is used as its raw UTF-8 bytes; the digest is the
    lowercase hex HMAC-SHA256 of the canonical field string.
    """

    def __init__(self, api_key: str | bytes):
        """Initializes signer."""
        if isinstance(api_key, str):
            api_key = api_key.encode('utf-8')
        self._key = api_key

    def sign(self, canonical: str) -> str:
        """Signs a canonical field string."""
        mac = HMAC.new(self._key, digestmod=SHA256)
        mac.update(canonical.encode('utf-8'))
        return mac.hexdigest()


def sign(canonical: str, api_key: str | bytes) -> str:
    """Computes the hex digest of ``canonical`` keyed by ``api_key``."""
    return Signer(api_key).sign(canonical)
