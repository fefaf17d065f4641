"""
Digest and HMAC primitives parameterized by algorithm name.

Thin wrappers over hashlib/hmac. Every function accepts the algorithm as a
string (e.g. "sha256", "sha512") and raises UnsupportedAlgorithm when the
name cannot be used, so callers never see hashlib's own ValueError.
"""

import hashlib
import hmac
from typing import Union

from ..errors import UnsupportedAlgorithm

BytesLike = Union[str, bytes, bytearray]


def _to_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def new_hash(hash_algo: str, data: BytesLike = b""):
    """
    Create a hashlib object for hash_algo, fed with data.

    Variable-length digests (shake_128, shake_256) have no fixed output
    size and cannot key an HMAC, so they are rejected as well.

    Raises:
        UnsupportedAlgorithm: If hashlib does not know the algorithm
    """
    try:
        h = hashlib.new(hash_algo, _to_bytes(data))
    except (ValueError, TypeError) as e:
        raise UnsupportedAlgorithm(hash_algo) from e

    if h.digest_size == 0:
        raise UnsupportedAlgorithm(hash_algo, "variable-length digest not supported")

    return h


def hexdigest(hash_algo: str, data: BytesLike) -> str:
    """Plain (non-keyed) digest of data as lowercase hex."""
    return new_hash(hash_algo, data).hexdigest()


def _new_hmac(hash_algo: str, key: BytesLike, msg: BytesLike):
    # Validate first so hmac never falls back to a different digest
    new_hash(hash_algo)
    try:
        return hmac.new(_to_bytes(key), _to_bytes(msg), hash_algo)
    except (ValueError, TypeError) as e:
        raise UnsupportedAlgorithm(hash_algo) from e


def hmac_digest(hash_algo: str, key: BytesLike, msg: BytesLike) -> bytes:
    """HMAC of msg under key, raw bytes."""
    return _new_hmac(hash_algo, key, msg).digest()


def hmac_hexdigest(hash_algo: str, key: BytesLike, msg: BytesLike) -> str:
    """HMAC of msg under key, lowercase hex."""
    return _new_hmac(hash_algo, key, msg).hexdigest()
