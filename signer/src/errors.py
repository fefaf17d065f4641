"""
Exceptions raised by the request signer.
"""


class SignerError(Exception):
    """Base exception for request signer errors"""
    pass


class UnsupportedAlgorithm(SignerError, ValueError):
    """Raised when hash_algo does not name a usable digest/HMAC algorithm"""

    def __init__(self, hash_algo: str, reason: str = "unsupported hash algorithm"):
        super().__init__(f"{reason}: {hash_algo!r}")
        self.hash_algo = hash_algo


class TypeConversionError(SignerError, TypeError):
    """Raised when a payload key or value cannot be coerced to a scalar string"""

    def __init__(self, value, role: str = "value"):
        super().__init__(
            f"Cannot convert payload {role} of type {type(value).__name__} to string"
        )
        self.value = value
        self.role = role
