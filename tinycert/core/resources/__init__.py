"""CA and certificate operations."""
from .models import (
    CertificateStatus,
    SAN,
    CAListItem,
    CAInfo,
    CertificateInfo,
    CertificateListItem,
)
from .ca import CAResource, CA
from .certificate import (
    CertificateResource,
    Certificate,
    CertificateFormat,
    build_san_fields,
)

__all__ = [
    'CertificateStatus',
    'SAN',
    'CAListItem',
    'CAInfo',
    'CertificateInfo',
    'CertificateListItem',
    'CAResource',
    'CA',
    'CertificateResource',
    'Certificate',
    'CertificateFormat',
    'build_san_fields',
]
