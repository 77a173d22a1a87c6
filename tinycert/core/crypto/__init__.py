"""Certificate helpers."""
from .pem import CertificateSummary, load_certificate

__all__ = [
    'CertificateSummary',
    'load_certificate',
]
