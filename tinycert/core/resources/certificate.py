"""Certificate operations."""
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Sequence, Union

from ..api.request import FieldCollection
from ..crypto.pem import CertificateSummary, load_certificate
from ..logging import get_logger
from .models import (
    CertIdResponse,
    CertificateInfo,
    CertificateListItem,
    CertificateStatus,
    PemResponse,
    SAN,
)

if TYPE_CHECKING:
    from ..api.session import Session

logger = get_logger(__name__)


class CertificateFormat(str, Enum):
    """Values accepted for ``what`` by ``cert/details``."""
    CERT = 'cert'
    CHAIN = 'chain'
    CSR = 'csr'
    KEY_DECRYPTED = 'key.dec'
    KEY_ENCRYPTED = 'key.enc'
    PKCS12 = 'pkcs12'


def build_san_fields(alt: Iterable[SAN]) -> List[tuple]:
    """
    Build indexed subject alternative name fields.

    Each SAN is indexed by its position in ``alt``; only non-empty
    attributes produce a field.

    Example:
        >>> build_san_fields([SAN(dns='a'), SAN(email='b')])
        [('SANs[0][DNS]', 'a'), ('SANs[1][email]', 'b')]
    """
    fields = []
    for index, san in enumerate(alt):
        prefix = f"SANs[{index}]"
        if san.email:
            fields.append((f"{prefix}[email]", san.email))
        if san.dns:
            fields.append((f"{prefix}[DNS]", san.dns))
        if san.ip:
            fields.append((f"{prefix}[IP]", san.ip))
        if san.uri:
            fields.append((f"{prefix}[URI]", san.uri))
    return fields


class CertificateResource:
    """
    Operations on certificates.

    Every operation requires a connected session.
    """

    def __init__(self, session: 'Session'):
        self._session = session

    def create(
        self,
        ca_id: int,
        common_name: str,
        org_unit: str = '',
        org_name: str = '',
        locality: str = '',
        state_code: str = '',
        country_code: str = '',
        alt: Sequence[SAN] = (),
    ) -> int:
        """
        Issue a new certificate signed by ``ca_id``.

        Args:
            ca_id: Signing CA
            common_name: Common name (CN)
            org_unit: Organizational unit (OU)
            org_name: Organization (O)
            locality: City (L)
            state_code: State or province (ST)
            country_code: Two letter country code (C)
            alt: Subject alternative names

        Returns:
            ID of the new certificate
        """
        self._session.require_connected()
        fields = FieldCollection([
            ('C', country_code),
            ('CN', common_name),
            ('L', locality),
            ('O', org_name),
            ('OU', org_unit),
            ('ST', state_code),
            ('ca_id', ca_id),
        ])
        for name, value in build_san_fields(alt):
            fields.append(name, value)

        response = self._session.call('cert/new', fields, CertIdResponse)
        logger.info(f"Issued certificate {response.cert_id} for {common_name}")
        return response.cert_id

    def get(self, cert_id: int, what: Union[CertificateFormat, str] = CertificateFormat.CERT) -> str:
        """
        Fetch certificate material.

        Returns the PEM text when the response carries one, otherwise the
        base64 PKCS12 blob.
        """
        self._session.require_connected()
        response = self._session.call(
            'cert/details', [('cert_id', cert_id), ('what', CertificateFormat(what))], PemResponse
        )
        if response.pem:
            return response.pem
        return response.pkcs12

    def inspect(self, cert_id: int) -> CertificateSummary:
        """Fetch the certificate and summarize it."""
        return load_certificate(self.get(cert_id, CertificateFormat.CERT))

    def details(self, cert_id: int) -> CertificateInfo:
        self._session.require_connected()
        return self._session.call('cert/details', [('cert_id', cert_id)], CertificateInfo)

    def list(
        self,
        ca_id: int,
        status: CertificateStatus = CertificateStatus.GOOD,
    ) -> List[CertificateListItem]:
        """
        List the certificates of a CA.

        Args:
            ca_id: CA to list
            status: Status or combination of statuses to include
        """
        self._session.require_connected()
        return self._session.call(
            'cert/list',
            [('ca_id', ca_id), ('what', CertificateStatus(status))],
            List[CertificateListItem],
        )

    def reissue(self, cert_id: int) -> int:
        """Reissue a certificate, returning the ID of the replacement."""
        self._session.require_connected()
        response = self._session.call('cert/reissue', [('cert_id', cert_id)], CertIdResponse)
        logger.info(f"Reissued certificate {cert_id} as {response.cert_id}")
        return response.cert_id

    def set_status(self, cert_id: int, status: Union[CertificateStatus, str]) -> None:
        """
        Change the status of a certificate, e.g. revoke it.

        Args:
            cert_id: Certificate to update
            status: A single status member or its wire name
        """
        if isinstance(status, str):
            status = CertificateStatus.from_wire(status)
        wire_name = CertificateStatus(status).wire_name

        self._session.require_connected()
        self._session.call('cert/status', [('cert_id', cert_id), ('status', wire_name)])
        logger.info(f"Set certificate {cert_id} status to {wire_name}")

    # Same name as the endpoint
    status = set_status


# Short alias
Certificate = CertificateResource
