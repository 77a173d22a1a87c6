"""Request handler performing the HTTP round trip."""
from dataclasses import dataclass

import requests

from ..config import APIConfig
from .request_builder import SignedRequest
from ...exceptions import TransportError
from ...logging import get_logger


@dataclass(frozen=True)
class RawResponse:
    """Status code and full body text of one HTTP response."""
    status_code: int
    body: str


class RequestHandler:
    """
    Sends signed requests.

    Exactly one POST per request and no retries: a transport failure is
    raised to the caller immediately.
    """

    def __init__(self, http, config: APIConfig):
        """
        Initializes request handler.

        Args:
            http: ``requests.Session`` or any object with a compatible ``post``
            config: API configuration supplying per-request settings
        """
        self.http = http
        self.config = config
        self.logger = get_logger('request')

    def execute(self, request: SignedRequest) -> RawResponse:
        """Posts ``request`` and reads the whole response body."""
        try:
            response = self.http.post(
                request.url,
                data=request.body.encode('utf-8'),
                headers=request.headers,
                **self.config.get_request_kwargs()
            )
            body = response.text
        except requests.RequestException as e:
            self.logger.warning(f"error calling tinycert endpoint {request.endpoint}: {e}")
            raise TransportError(
                f"Request to {request.endpoint} failed: {e}", request.endpoint
            ) from e

        self.logger.debug(f"{request.endpoint} responded with status {response.status_code}")
        return RawResponse(status_code=response.status_code, body=body)
