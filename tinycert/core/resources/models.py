"""
TinyCert data models.

Contains the typed response shapes decoded from API payloads and the
values sent with requests. Every response model exposes a ``from_dict``
classmethod; it raises ``KeyError``, ``TypeError`` or ``ValueError`` when
the payload does not fit, which the response handler turns into a
``DecodeError``.
"""
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, Dict, List, Mapping, Optional


class CertificateStatus(IntFlag):
    """
    Certificate status.

    Members combine into a bitmask when listing certificates. A single
    member maps to the lowercase wire name used by ``cert/status``.
    """
    EXPIRED = 1
    GOOD = 2
    REVOKED = 4
    HOLD = 8

    @property
    def wire_name(self) -> str:
        """Wire form of a single status, e.g. ``"revoked"``."""
        try:
            return _STATUS_NAMES[self]
        except KeyError:
            raise ValueError(f"{self!r} is not a single certificate status") from None

    @classmethod
    def from_wire(cls, value: str) -> 'CertificateStatus':
        """Map a wire name (case-insensitive) back to its member."""
        for member, name in _STATUS_NAMES.items():
            if name == value.strip().lower():
                return member
        raise ValueError(f"Unknown certificate status: {value!r}")

    @classmethod
    def all(cls) -> 'CertificateStatus':
        return cls.EXPIRED | cls.GOOD | cls.REVOKED | cls.HOLD


_STATUS_NAMES = {
    CertificateStatus.EXPIRED: 'expired',
    CertificateStatus.GOOD: 'good',
    CertificateStatus.REVOKED: 'revoked',
    CertificateStatus.HOLD: 'hold',
}


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Find ``key`` exactly, then case-insensitively."""
    if key in data:
        return data[key]
    lowered = key.lower()
    for name, value in data.items():
        if name.lower() == lowered:
            return value
    raise KeyError(key)


def _int(data: Mapping[str, Any], key: str, required: bool = True) -> int:
    try:
        value = _lookup(data, key)
    except KeyError:
        if required:
            raise
        return 0
    if value is None and not required:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"field {key!r} is not an integer: {value!r}")
    if isinstance(value, str) and not (value.isascii() and value.removeprefix('-').isdigit()):
        raise ValueError(f"field {key!r} is not a decimal integer: {value!r}")
    return int(value)


def _str(data: Mapping[str, Any], key: str, required: bool = False) -> str:
    try:
        value = _lookup(data, key)
    except KeyError:
        if required:
            raise
        return ''
    if value is None:
        return ''
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} is not a string: {value!r}")
    return value


@dataclass
class SAN:
    """
    Subject alternative name entry.

    Only the non-empty attributes are sent when creating a certificate.
    """
    dns: str = ''
    email: str = ''
    ip: str = ''
    uri: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'SAN':
        data = _require_mapping(data)
        return cls(
            dns=_str(data, 'DNS'),
            email=_str(data, 'email'),
            ip=_str(data, 'IP'),
            uri=_str(data, 'URI'),
        )

    def is_empty(self) -> bool:
        return not (self.dns or self.email or self.ip or self.uri)


@dataclass
class TokenResponse:
    """Response of ``connect``."""
    token: str

    @classmethod
    def from_dict(cls, data: Any) -> 'TokenResponse':
        return cls(token=_str(_require_mapping(data), 'token', required=True))


@dataclass
class CAIdResponse:
    ca_id: int

    @classmethod
    def from_dict(cls, data: Any) -> 'CAIdResponse':
        return cls(ca_id=_int(_require_mapping(data), 'ca_id'))


@dataclass
class CertIdResponse:
    cert_id: int

    @classmethod
    def from_dict(cls, data: Any) -> 'CertIdResponse':
        return cls(cert_id=_int(_require_mapping(data), 'cert_id'))


@dataclass
class PemResponse:
    """PEM or PKCS12 payload returned by the details endpoints."""
    pem: str = ''
    pkcs12: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'PemResponse':
        data = _require_mapping(data)
        return cls(pem=_str(data, 'pem'), pkcs12=_str(data, 'pkcs12'))


@dataclass
class CAListItem:
    """Entry of ``ca/list``."""
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Any) -> 'CAListItem':
        data = _require_mapping(data)
        return cls(id=_int(data, 'id'), name=_str(data, 'name'))


@dataclass
class CAInfo:
    """
    Certificate authority details.

    Attributes:
        id: CA identifier
        country_code: Two letter country code (C)
        state_code: State or province (ST)
        locality: City (L)
        org_name: Organization (O)
        org_unit: Organizational unit (OU)
        common_name: Common name (CN)
        email: Contact email (E)
        hash_algorithm: Signature hash algorithm
    """
    id: int
    country_code: str = ''
    state_code: str = ''
    locality: str = ''
    org_name: str = ''
    org_unit: str = ''
    common_name: str = ''
    email: str = ''
    hash_algorithm: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'CAInfo':
        data = _require_mapping(data)
        return cls(
            id=_int(data, 'id'),
            country_code=_str(data, 'C'),
            state_code=_str(data, 'ST'),
            locality=_str(data, 'L'),
            org_name=_str(data, 'O'),
            org_unit=_str(data, 'OU'),
            common_name=_str(data, 'CN'),
            email=_str(data, 'E'),
            hash_algorithm=_str(data, 'hash_alg'),
        )


@dataclass
class CertificateInfo:
    """Certificate details as returned by ``cert/details``."""
    id: int
    status: str = ''
    country_code: str = ''
    state_code: str = ''
    locality: str = ''
    org_name: str = ''
    org_unit: str = ''
    common_name: str = ''
    alt: List[SAN] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'CertificateInfo':
        data = _require_mapping(data)
        try:
            raw_alt = _lookup(data, 'alt')
        except KeyError:
            raw_alt = None
        if raw_alt is None:
            raw_alt = []
        if not isinstance(raw_alt, list):
            raise TypeError(f"field 'alt' is not a list: {raw_alt!r}")

        return cls(
            id=_int(data, 'id'),
            status=_str(data, 'status'),
            country_code=_str(data, 'C'),
            state_code=_str(data, 'ST'),
            locality=_str(data, 'L'),
            org_name=_str(data, 'O'),
            org_unit=_str(data, 'OU'),
            common_name=_str(data, 'CN'),
            alt=[SAN.from_dict(item) for item in raw_alt],
        )

    @property
    def certificate_status(self) -> Optional[CertificateStatus]:
        return CertificateStatus.from_wire(self.status) if self.status else None


@dataclass
class CertificateListItem:
    """Entry of ``cert/list``. ``expires`` is a unix timestamp."""
    id: int
    name: str = ''
    status: str = ''
    expires: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> 'CertificateListItem':
        data = _require_mapping(data)
        return cls(
            id=_int(data, 'id'),
            name=_str(data, 'name'),
            status=_str(data, 'status'),
            expires=_int(data, 'expires', required=False),
        )

    @property
    def certificate_status(self) -> Optional[CertificateStatus]:
        return CertificateStatus.from_wire(self.status) if self.status else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'status': self.status,
            'expires': self.expires,
        }
