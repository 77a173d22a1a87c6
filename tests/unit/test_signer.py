"""Tests for request signing."""
import hashlib
import hmac

from tinycert.core.api.request import Signer, sign


class TestSigner:
    """Test suite for Signer."""

    def test_rfc4231_vector(self):
        digest = sign('what do ya want for nothing?', 'Jefe')

        assert digest == '5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843'

    def test_matches_hmac_sha256(self):
        canonical = 'C=DE&ca_id=1&token=abc'
        expected = hmac.new(b'secret', canonical.encode(), hashlib.sha256).hexdigest()

        assert Signer('secret').sign(canonical) == expected

    def test_deterministic(self):
        signer = Signer('key')

        assert signer.sign('a=1&b=2') == signer.sign('a=1&b=2')

    def test_lowercase_hex(self):
        digest = sign('a=1', 'key')

        assert len(digest) == 64
        assert digest == digest.lower()
        int(digest, 16)

    def test_key_used_as_raw_bytes(self):
        # A percent sequence in the key must not be decoded
        assert sign('a=1', 'k%41y') != sign('a=1', 'kAy')
        assert sign('a=1', 'k%41y') == sign('a=1', b'k%41y')

    def test_different_keys_differ(self):
        assert sign('a=1', 'one') != sign('a=1', 'two')
