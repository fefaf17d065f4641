"""WePay-style request signer"""

from .signer import Signer, EXPECTED_PAYLOAD_KEYS
from .config import SignerOptions, DEFAULT_SELF_KEY, DEFAULT_HASH_ALGO
from .errors import SignerError, UnsupportedAlgorithm, TypeConversionError

__version__ = "0.1.0"

__all__ = [
    "Signer",
    "EXPECTED_PAYLOAD_KEYS",
    "SignerOptions",
    "DEFAULT_SELF_KEY",
    "DEFAULT_HASH_ALGO",
    "SignerError",
    "UnsupportedAlgorithm",
    "TypeConversionError",
]
