"""Request builder for signed API calls."""
from dataclasses import dataclass
from typing import Dict, Optional

from ..config import APIConfig
from .fields import FieldCollection, encode
from .signer import Signer
from ...logging import redact_pairs

CONTENT_TYPE = 'application/x-www-form-urlencoded'

DIGEST_FIELD = 'digest'
TOKEN_FIELD = 'token'


@dataclass(frozen=True)
class SignedRequest:
    """
    A fully encoded request.

    ``body`` is ``canonical`` followed by the digest field; the digest was
    computed over ``canonical`` exactly as it appears here.
    """
    endpoint: str
    url: str
    canonical: str
    digest: str
    headers: Dict[str, str]

    @property
    def body(self) -> str:
        digest = f"{DIGEST_FIELD}={encode(self.digest)}"
        if not self.canonical:
            return digest
        return f"{self.canonical}&{digest}"


class RequestBuilder:
    """Builds signed API requests."""

    def __init__(self, config: APIConfig, signer: Optional[Signer] = None):
        """Initializes request builder."""
        self.config = config
        self.signer = signer or Signer(config.api_key)

    def prepare_fields(self, fields: FieldCollection, token: Optional[str] = None) -> FieldCollection:
        """
        Returns the fields to send, with the token appended when present.

        The caller's collection is never modified.
        """
        prepared = fields.copy()
        if token is not None:
            prepared.append(TOKEN_FIELD, token)
        return prepared

    def build_headers(self) -> Dict[str, str]:
        """Builds request headers."""
        headers = self.config.get_headers()
        headers['Content-Type'] = CONTENT_TYPE
        return headers

    def build(self, endpoint: str, fields: FieldCollection, token: Optional[str] = None) -> SignedRequest:
        """Builds a signed request for ``endpoint``."""
        prepared = self.prepare_fields(fields, token)
        canonical = prepared.to_canonical_form()
        return SignedRequest(
            endpoint=endpoint,
            url=self.config.endpoint_url(endpoint),
            canonical=canonical,
            digest=self.signer.sign(canonical),
            headers=self.build_headers(),
        )

    @staticmethod
    def describe(fields: FieldCollection) -> str:
        """Loggable rendering of ``fields`` with secrets masked."""
        return redact_pairs(fields.sorted_pairs())
