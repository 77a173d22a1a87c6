"""
tinycert - Python client for the TinyCert certificate authority API.

Usage:
    >>> from tinycert import APIConfig, SAN, Session
    >>>
    >>> with Session(APIConfig.from_env()) as session:
    ...     ca_id = session.ca.create("Acme", "Berlin", "BE", "DE")
    ...     cert_id = session.certificates.create(ca_id, "www.example.com",
    ...                                           alt=[SAN(dns="example.com")])
"""
import logging

from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    FieldCollection,
    Signer,
    Session,
)
from .core.resources import (
    CA,
    CAResource,
    Certificate,
    CertificateResource,
    CertificateFormat,
    CertificateStatus,
    SAN,
    CAListItem,
    CAInfo,
    CertificateInfo,
    CertificateListItem,
)
from .core.crypto import CertificateSummary, load_certificate
from .core.exceptions import (
    TinyCertError,
    TransportError,
    ServerError,
    DecodeError,
    AuthenticationError,
    NotConnectedError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for tinycert modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'tinycert',
        'tinycert.session',
        'tinycert.request',
        'tinycert.core.resources.ca',
        'tinycert.core.resources.certificate',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'FieldCollection',
    'Signer',
    'Session',
    'CA',
    'CAResource',
    'Certificate',
    'CertificateResource',
    'CertificateFormat',
    'CertificateStatus',
    'SAN',
    'CAListItem',
    'CAInfo',
    'CertificateInfo',
    'CertificateListItem',
    'CertificateSummary',
    'load_certificate',
    'TinyCertError',
    'TransportError',
    'ServerError',
    'DecodeError',
    'AuthenticationError',
    'NotConnectedError',
    'setup_logging',
]
