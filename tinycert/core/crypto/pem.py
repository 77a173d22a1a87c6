"""
PEM certificate inspection.

Summarizes certificates returned by the API using ``cryptography``.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from cryptography import x509
from cryptography.x509.oid import ExtensionOID

from ..exceptions import DecodeError


@dataclass
class CertificateSummary:
    """
    Human readable facts about one certificate.

    Attributes:
        subject: RFC 4514 subject string
        issuer: RFC 4514 issuer string
        serial_number: Certificate serial
        not_before: Start of validity (timezone-aware UTC)
        not_after: End of validity (timezone-aware UTC)
        dns_names: DNS subject alternative names
        is_ca: Basic constraints CA flag
    """
    subject: str
    issuer: str
    serial_number: int
    not_before: datetime
    not_after: datetime
    dns_names: List[str] = field(default_factory=list)
    is_ca: bool = False

    @property
    def is_self_signed(self) -> bool:
        return self.subject == self.issuer

    def is_valid_at(self, moment: datetime) -> bool:
        """Check ``moment`` against the validity window; naive values are taken as UTC."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return self.not_before <= moment <= self.not_after


def _validity(cert: x509.Certificate):
    # *_utc accessors only exist on cryptography >= 42
    if hasattr(cert, 'not_valid_before_utc'):
        return cert.not_valid_before_utc, cert.not_valid_after_utc
    return (
        cert.not_valid_before.replace(tzinfo=timezone.utc),
        cert.not_valid_after.replace(tzinfo=timezone.utc),
    )


def load_certificate(pem_text: str) -> CertificateSummary:
    """
    Parse the first certificate of ``pem_text``.

    Raises:
        DecodeError: If the text holds no valid PEM certificate
    """
    try:
        cert = x509.load_pem_x509_certificate(pem_text.encode('ascii'))
    except (ValueError, UnicodeEncodeError) as e:
        raise DecodeError(f"Invalid PEM certificate: {e}", pem_text) from e

    try:
        san = cert.extensions.get_extension_for_oid(ExtensionOID.SUBJECT_ALTERNATIVE_NAME)
        dns_names = san.value.get_values_for_type(x509.DNSName)
    except x509.ExtensionNotFound:
        dns_names = []

    try:
        constraints = cert.extensions.get_extension_for_oid(ExtensionOID.BASIC_CONSTRAINTS)
        is_ca = constraints.value.ca
    except x509.ExtensionNotFound:
        is_ca = False

    not_before, not_after = _validity(cert)
    return CertificateSummary(
        subject=cert.subject.rfc4514_string(),
        issuer=cert.issuer.rfc4514_string(),
        serial_number=cert.serial_number,
        not_before=not_before,
        not_after=not_after,
        dns_names=list(dns_names),
        is_ca=is_ca,
    )
