"""Certificate authority operations."""
from typing import TYPE_CHECKING, List

from ..api.request import FieldCollection
from ..crypto.pem import CertificateSummary, load_certificate
from ..logging import get_logger
from .models import CAIdResponse, CAInfo, CAListItem, PemResponse

if TYPE_CHECKING:
    from ..api.session import Session

logger = get_logger(__name__)


class CAResource:
    """
    Operations on certificate authorities.

    Every operation requires a connected session.
    """

    def __init__(self, session: 'Session'):
        self._session = session

    def create(
        self,
        org_name: str,
        locality: str,
        state_code: str,
        country_code: str,
        hash_method: str = 'sha256',
    ) -> int:
        """
        Create a new certificate authority.

        Args:
            org_name: Organization name (O)
            locality: City (L)
            state_code: State or province (ST)
            country_code: Two letter country code (C)
            hash_method: Signature hash, e.g. ``sha256``

        Returns:
            ID of the new CA
        """
        self._session.require_connected()
        fields = FieldCollection([
            ('C', country_code),
            ('L', locality),
            ('O', org_name),
            ('ST', state_code),
            ('hash_method', hash_method),
        ])
        response = self._session.call('ca/new', fields, CAIdResponse)
        logger.info(f"Created CA {response.ca_id} for {org_name}")
        return response.ca_id

    def list(self) -> List[CAListItem]:
        """List all certificate authorities of the account."""
        self._session.require_connected()
        return self._session.call('ca/list', FieldCollection(), List[CAListItem])

    def details(self, ca_id: int) -> CAInfo:
        self._session.require_connected()
        return self._session.call('ca/details', [('ca_id', ca_id)], CAInfo)

    def get(self, ca_id: int) -> str:
        """Fetch the CA certificate as PEM text."""
        self._session.require_connected()
        response = self._session.call(
            'ca/details', [('ca_id', ca_id), ('what', 'cert')], PemResponse
        )
        return response.pem

    def inspect(self, ca_id: int) -> CertificateSummary:
        """Fetch the CA certificate and summarize it."""
        return load_certificate(self.get(ca_id))

    def delete(self, ca_id: int) -> None:
        """Delete a certificate authority and every certificate it signed."""
        self._session.require_connected()
        self._session.call('ca/delete', [('ca_id', ca_id)])
        logger.info(f"Deleted CA {ca_id}")


# Short alias
CA = CAResource
