"""TinyCert API module."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .request import (
    FieldCollection,
    Signer,
    RequestBuilder,
    SignedRequest,
    RequestHandler,
    ResponseHandler,
)
from .session import Session, SessionFactory, Connected, Unconnected

__all__ = [
    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',

    # Requests
    'FieldCollection',
    'Signer',
    'RequestBuilder',
    'SignedRequest',
    'RequestHandler',
    'ResponseHandler',

    # Session
    'Session',
    'SessionFactory',
    'Connected',
    'Unconnected',
]
