"""
Custom exceptions for TinyCert API operations.

Every failure raised by the library derives from TinyCertError so callers
can catch the whole family with a single except clause.
"""
import json
from typing import Optional


class TinyCertError(Exception):
    """Base exception for all TinyCert-related errors."""


class TransportError(TinyCertError):
    """Raised when the HTTP request failed before a response was received."""

    def __init__(self, message: str, endpoint: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            endpoint: API endpoint that was being called
        """
        self.endpoint = endpoint
        super().__init__(message)


class ServerError(TinyCertError):
    """
    Raised for any non-200 HTTP response.

    The raw body is always kept. When it carries TinyCert's JSON error
    envelope (``{"code": ..., "text": ...}``) the parts are exposed as
    ``error_code`` and ``error_text``.
    """

    def __init__(self, status_code: int, body: str, endpoint: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            status_code: HTTP status code
            body: Raw response body text
            endpoint: API endpoint that was being called
        """
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        self.error_code: Optional[str] = None
        self.error_text: Optional[str] = None
        self._parse_envelope()
        super().__init__(
            f"error from server code = {status_code}, response = {body}"
        )

    def _parse_envelope(self) -> None:
        try:
            data = json.loads(self.body)
        except ValueError:
            return
        if isinstance(data, dict):
            if data.get('code') is not None:
                self.error_code = str(data['code'])
            if data.get('text') is not None:
                self.error_text = str(data['text'])


class DecodeError(TinyCertError):
    """Raised when a response body is not JSON or does not match the expected shape."""

    def __init__(self, message: str, body: Optional[str] = None) -> None:
        self.body = body
        super().__init__(message)


class AuthenticationError(TinyCertError):
    """Raised when connecting to the API fails."""


class NotConnectedError(TinyCertError):
    """Raised when an authenticated operation is attempted without a session token."""
