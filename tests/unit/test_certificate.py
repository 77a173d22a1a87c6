"""Tests for certificate operations."""
import pytest

from tinycert.core.exceptions import DecodeError, NotConnectedError, ServerError
from tinycert.core.resources import (
    SAN,
    Certificate,
    CertificateFormat,
    CertificateInfo,
    CertificateListItem,
    CertificateStatus,
    build_san_fields,
)


class TestBuildSanFields:
    """Test suite for subject alternative name fields."""

    def test_one_group_per_san(self):
        fields = build_san_fields([SAN(dns='a'), SAN(email='b')])

        assert fields == [('SANs[0][DNS]', 'a'), ('SANs[1][email]', 'b')]

    def test_all_attributes(self):
        fields = build_san_fields([SAN(dns='d', email='e', ip='10.0.0.1', uri='https://u')])

        assert fields == [
            ('SANs[0][email]', 'e'),
            ('SANs[0][DNS]', 'd'),
            ('SANs[0][IP]', '10.0.0.1'),
            ('SANs[0][URI]', 'https://u'),
        ]

    def test_empty_san_keeps_position(self):
        fields = build_san_fields([SAN(), SAN(ip='::1')])

        assert fields == [('SANs[1][IP]', '::1')]

    def test_no_sans(self):
        assert build_san_fields([]) == []


class TestCertificateResource:
    """Test suite for CertificateResource."""

    @pytest.fixture
    def certs(self, connected_session):
        return Certificate(connected_session)

    def test_create(self, certs, routes, reply, sent):
        routes['cert/new'] = reply(200, {'cert_id': 101})

        cert_id = certs.create(
            5, 'www.example.com', 'Web', 'Acme', 'Berlin', 'BE', 'DE',
            alt=[SAN(dns='example.com'), SAN(email='admin@example.com')],
        )

        assert cert_id == 101
        fields = dict(sent('cert/new'))
        assert fields['ca_id'] == '5'
        assert fields['CN'] == 'www.example.com'
        assert fields['OU'] == 'Web'
        assert fields['SANs[0][DNS]'] == 'example.com'
        assert fields['SANs[1][email]'] == 'admin@example.com'
        assert 'SANs[0][email]' not in fields
        assert 'SANs[1][DNS]' not in fields

    def test_create_fields_sorted(self, certs, routes, reply, sent):
        routes['cert/new'] = reply(200, {'cert_id': 1})

        certs.create(5, 'cn', alt=[SAN(dns='a')])

        names = [name for name, _ in sent('cert/new')]
        assert names == ['C', 'CN', 'L', 'O', 'OU', 'SANs[0][DNS]', 'ST', 'ca_id', 'token', 'digest']

    def test_get_prefers_pem(self, certs, routes, reply):
        routes['cert/details'] = reply(200, {'pem': 'PEM-TEXT', 'pkcs12': 'P12-BLOB'})

        assert certs.get(1, 'cert') == 'PEM-TEXT'

    def test_get_falls_back_to_pkcs12(self, certs, routes, reply, sent):
        routes['cert/details'] = reply(200, {'pem': '', 'pkcs12': 'P12-BLOB'})

        assert certs.get(1, CertificateFormat.PKCS12) == 'P12-BLOB'
        assert dict(sent('cert/details'))['what'] == 'pkcs12'

    def test_get_rejects_unknown_format(self, certs):
        with pytest.raises(ValueError):
            certs.get(1, 'tarball')

    def test_details(self, certs, routes, reply):
        routes['cert/details'] = reply(200, {
            'id': 3, 'status': 'good', 'C': 'DE', 'ST': 'BE', 'L': 'Berlin',
            'O': 'Acme', 'OU': 'Web', 'CN': 'www.example.com',
            'alt': [{'DNS': 'example.com'}, {'email': 'a@example.com'}],
        })

        info = certs.details(3)

        assert isinstance(info, CertificateInfo)
        assert info.common_name == 'www.example.com'
        assert info.certificate_status is CertificateStatus.GOOD
        assert info.alt == [SAN(dns='example.com'), SAN(email='a@example.com')]

    def test_list_sends_status_bitmask(self, certs, routes, reply, sent):
        routes['cert/list'] = reply(200, [
            {'id': 1, 'name': 'www', 'status': 'good', 'expires': 1700000000},
            {'id': 2, 'name': 'old', 'status': 'revoked', 'expires': 1600000000},
        ])

        items = certs.list(5, CertificateStatus.GOOD | CertificateStatus.REVOKED)

        assert items == [
            CertificateListItem(1, 'www', 'good', 1700000000),
            CertificateListItem(2, 'old', 'revoked', 1600000000),
        ]
        assert items[1].certificate_status is CertificateStatus.REVOKED
        fields = dict(sent('cert/list'))
        assert fields['ca_id'] == '5'
        assert fields['what'] == '6'

    def test_list_defaults_to_good(self, certs, routes, reply, sent):
        routes['cert/list'] = reply(200, [])

        assert certs.list(5) == []
        assert dict(sent('cert/list'))['what'] == '2'

    def test_reissue(self, certs, routes, reply, sent):
        routes['cert/reissue'] = reply(200, {'cert_id': 202})

        assert certs.reissue(101) == 202
        assert dict(sent('cert/reissue'))['cert_id'] == '101'

    @pytest.mark.parametrize('status, wire', [
        (CertificateStatus.REVOKED, 'revoked'),
        (CertificateStatus.HOLD, 'hold'),
        (CertificateStatus.GOOD, 'good'),
        ('Revoked', 'revoked'),
    ])
    def test_set_status_sends_wire_name(self, certs, routes, reply, sent, status, wire):
        routes['cert/status'] = reply(200, {})

        certs.set_status(7, status)

        fields = dict(sent('cert/status'))
        assert fields['status'] == wire
        assert fields['cert_id'] == '7'

    def test_set_status_rejects_combination(self, certs, http):
        calls_before = http.post.call_count

        with pytest.raises(ValueError):
            certs.set_status(7, CertificateStatus.GOOD | CertificateStatus.HOLD)

        assert http.post.call_count == calls_before

    def test_status_alias(self, certs):
        assert Certificate.status is Certificate.set_status

    def test_server_error(self, certs, routes, reply):
        routes['cert/reissue'] = reply(403, 'forbidden')

        with pytest.raises(ServerError) as info:
            certs.reissue(1)

        assert (info.value.status_code, info.value.body) == (403, 'forbidden')

    def test_shape_mismatch(self, certs, routes, reply):
        routes['cert/new'] = reply(200, {'ca_id': 1})

        with pytest.raises(DecodeError):
            certs.create(5, 'cn')

    def test_requires_connection(self, session):
        with pytest.raises(NotConnectedError):
            Certificate(session).reissue(1)
