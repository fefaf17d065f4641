"""
Signer options and their defaults.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

DEFAULT_SELF_KEY = "WePay"
DEFAULT_HASH_ALGO = "sha512"

ENV_PREFIX = "SIGNER_"


@dataclass(frozen=True)
class SignerOptions:
    """
    Tunable parts of a Signer.

    Attributes:
        self_key: Identifier of the signing party, mixed into every signature
        hash_algo: hashlib algorithm name used for digests and HMACs
    """
    self_key: str = DEFAULT_SELF_KEY
    hash_algo: str = DEFAULT_HASH_ALGO

    def merge(self, overrides: Optional[Mapping[str, Any]]) -> "SignerOptions":
        """
        Return a copy with each recognized field taken from overrides.

        Merge is per field: keys missing from overrides (or set to None) keep
        the current value, and unrecognized keys are ignored.
        """
        if not overrides:
            return self
        if isinstance(overrides, SignerOptions):
            overrides = {f.name: getattr(overrides, f.name) for f in fields(overrides)}

        changes = {}
        for f in fields(self):
            value = overrides.get(f.name)
            if value is not None:
                changes[f.name] = str(value)
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SignerOptions":
        """Build options from SIGNER_SELF_KEY / SIGNER_HASH_ALGO, falling back to defaults."""
        environ = os.environ if environ is None else environ
        return cls().merge({
            f.name: environ.get(ENV_PREFIX + f.name.upper()) or None
            for f in fields(cls)
        })
