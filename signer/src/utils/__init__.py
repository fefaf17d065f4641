"""Utilities for canonicalization and hashing."""

from .canonical import to_scalar_str, create_scope, create_context, join_query_string
from .digest import hexdigest, hmac_digest, hmac_hexdigest

__all__ = [
    "to_scalar_str",
    "create_scope",
    "create_context",
    "join_query_string",
    "hexdigest",
    "hmac_digest",
    "hmac_hexdigest",
]
