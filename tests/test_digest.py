"""
Unit tests for the digest/HMAC primitives.
"""

import hashlib
import hmac

import pytest

from signer.src.errors import UnsupportedAlgorithm
from signer.src.utils import digest


class TestHexDigest:
    """Test plain digests."""

    @pytest.mark.parametrize("algo", ["sha256", "sha512", "sha1", "SHA512"])
    def test_matches_hashlib(self, algo):
        assert digest.hexdigest(algo, "scope") == hashlib.new(algo, b"scope").hexdigest()

    def test_str_encoded_utf8(self):
        assert digest.hexdigest("sha256", "é") == hashlib.sha256("é".encode("utf-8")).hexdigest()

    def test_unknown_algorithm(self):
        with pytest.raises(UnsupportedAlgorithm) as exc:
            digest.hexdigest("sha999", "x")
        assert exc.value.hash_algo == "sha999"
        assert isinstance(exc.value, ValueError)

    @pytest.mark.parametrize("algo", ["shake_128", "shake_256"])
    def test_variable_length_rejected(self, algo):
        with pytest.raises(UnsupportedAlgorithm):
            digest.hexdigest(algo, "x")


class TestHMAC:
    """Test keyed digests."""

    def test_raw_digest(self):
        expected = hmac.new(b"key", b"msg", hashlib.sha512).digest()
        assert digest.hmac_digest("sha512", "key", "msg") == expected

    def test_bytes_key(self):
        key = b"\x00\xffraw"
        expected = hmac.new(key, b"msg", hashlib.sha256).digest()
        assert digest.hmac_digest("sha256", key, "msg") == expected

    def test_hexdigest(self):
        expected = hmac.new(b"key", b"msg", hashlib.sha256).hexdigest()
        assert digest.hmac_hexdigest("sha256", "key", "msg") == expected

    def test_unknown_algorithm(self):
        with pytest.raises(UnsupportedAlgorithm):
            digest.hmac_digest("nope", "key", "msg")
