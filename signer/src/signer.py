"""
Request signer for redirect-style handoffs between a client party and a
signing party.

The client party owns a keypair: client_id (public) and client_secret
(private), known only to itself and the signing party. The signing party
is identified by self_key, which adds entropy and keeps signatures from one
signing party useless to another that shares the same client keypair.

The scheme is a stripped-down AWS Signature v4:

    scope          = "{self_key}/{client_id}/signer"
    context        = canonical lines of the payload + sorted key list
    string_to_sign = "SIGNER-HMAC-{ALGO}", self_key, client_id,
                     H(scope), H(context)   (newline-joined)
    signing_key    = HMAC(HMAC(HMAC(client_secret, self_key), client_id), "signer")
    signature      = hex(HMAC(signing_key, string_to_sign))
"""

import hmac
from collections import abc
import logging
from typing import Any, Dict, Mapping, MutableMapping, Optional

from .config import SignerOptions
from .utils import canonical, digest

logger = logging.getLogger(__name__)

# Conventionally supplied by callers; not enforced here
EXPECTED_PAYLOAD_KEYS = ("token", "page", "redirect_uri")

# Always signed with the instance values
IDENTITY_KEYS = ("client_id", "client_secret")


class Signer:
    """Signs payloads on behalf of a client_id/client_secret keypair."""

    __slots__ = ("_client_id", "_client_secret", "_self_key", "_hash_algo")

    def __init__(
        self,
        client_id: Any,
        client_secret: Any,
        options: Optional[Mapping[str, Any]] = None,
        *,
        self_key: Optional[str] = None,
        hash_algo: Optional[str] = None
    ):
        """
        Initialize signer.

        Args:
            client_id: Public half of the client keypair
            client_secret: Private half of the client keypair
            options: SignerOptions or mapping with "self_key" / "hash_algo";
                unknown keys are ignored
            self_key: Overrides options["self_key"] (default "WePay")
            hash_algo: Overrides options["hash_algo"] (default "sha512")

        A None option value counts as not supplied and keeps the default;
        it is never rendered as an empty string.

        The algorithm name is not checked here; an unusable one raises
        UnsupportedAlgorithm on the first sign() call.
        """
        opts = SignerOptions().merge(options).merge({"self_key": self_key, "hash_algo": hash_algo})

        self._client_id = str(client_id)
        self._client_secret = str(client_secret)
        self._self_key = opts.self_key
        self._hash_algo = opts.hash_algo

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def client_secret(self) -> str:
        return self._client_secret

    @property
    def self_key(self) -> str:
        return self._self_key

    @property
    def hash_algo(self) -> str:
        return self._hash_algo

    def __repr__(self) -> str:
        return (
            f"Signer(client_id={self._client_id!r}, self_key={self._self_key!r}, "
            f"hash_algo={self._hash_algo!r})"
        )

    def sign(self, payload: Mapping[Any, Any]) -> str:
        """
        Sign the payload to produce a signature for its contents.

        client_id and client_secret are always signed with this signer's own
        values, whatever the payload holds for them. The payload itself is
        not modified.

        Args:
            payload: Data to sign, conventionally token, page and redirect_uri

        Returns:
            Lowercase hex signature

        Raises:
            UnsupportedAlgorithm: If hash_algo is not usable
            TypeConversionError: If a payload key or value is not a scalar
        """
        missing = canonical.missing_keys(payload, EXPECTED_PAYLOAD_KEYS)
        if missing:
            logger.debug(f"Signing payload for {self._client_id} without {', '.join(missing)}")

        signed: Dict[Any, Any] = dict(payload)
        canonical.drop_keys(signed, IDENTITY_KEYS)
        signed["client_id"] = self._client_id
        signed["client_secret"] = self._client_secret

        scope = self.create_scope()
        context = self.create_context(signed)
        s2s = self.create_string_to_sign(scope, context)
        signing_key = self.get_signing_salt()

        signature = digest.hmac_hexdigest(self._hash_algo, signing_key, s2s)
        logger.debug(f"Signed {len(signed)} fields for {self._client_id} ({self._hash_algo})")
        return signature

    def generate_query_string_params(self, payload: MutableMapping[Any, Any]) -> str:
        """
        Sign payload and render it as query string parameters.

        The payload is an in/out parameter: client_secret is removed from it
        and client_id and stoken are added, so the caller's mapping ends up
        holding exactly what went into the query string. A read-only mapping
        is left untouched and a private copy is used instead.

        Values are not percent-encoded.

        Args:
            payload: Data to sign, conventionally token, page and redirect_uri

        Returns:
            "key=value" pairs sorted by key and joined with "&", no leading "?"
        """
        if not isinstance(payload, abc.MutableMapping):
            payload = dict(payload)

        canonical.drop_keys(payload, ("client_secret",))

        signed_token = self.sign(payload)
        canonical.drop_keys(payload, ("client_id", "stoken"))
        payload["client_id"] = self._client_id
        payload["stoken"] = signed_token

        return canonical.join_query_string(payload)

    def verify(self, payload: Mapping[Any, Any], signature: Any) -> bool:
        """
        Check a signature produced by sign() for the same payload.

        Args:
            payload: Data the signature claims to cover
            signature: Hex signature (case-insensitive)

        Returns:
            True if signature matches, False otherwise

        Raises:
            UnsupportedAlgorithm: If hash_algo is not usable
            TypeConversionError: If a payload key or value is not a scalar
        """
        if not isinstance(signature, str) or not signature:
            return False

        expected = self.sign(payload)
        # Constant-time comparison
        return hmac.compare_digest(expected.encode("utf-8"), signature.lower().encode("utf-8"))

    def create_scope(self) -> str:
        """Scope in which the signature is valid."""
        return canonical.create_scope(self._self_key, self._client_id)

    def create_context(self, payload: Mapping[Any, Any]) -> str:
        """Canonical string representation of the data to sign."""
        return canonical.create_context(payload)

    def create_string_to_sign(self, scope: str, context: str) -> str:
        """
        Build the final string to be signed.

        Args:
            scope: Result of create_scope()
            context: Result of create_context()
        """
        scope_hash = digest.hexdigest(self._hash_algo, scope)
        context_hash = digest.hexdigest(self._hash_algo, context)
        return "\n".join([
            f"SIGNER-HMAC-{self._hash_algo.upper()}",
            self._self_key,
            self._client_id,
            scope_hash,
            context_hash,
        ])

    def get_signing_salt(self) -> bytes:
        """Derive the signing key from client_secret, self_key and client_id."""
        self_key_sign = digest.hmac_digest(self._hash_algo, self._client_secret, self._self_key)
        client_id_sign = digest.hmac_digest(self._hash_algo, self_key_sign, self._client_id)
        return digest.hmac_digest(self._hash_algo, client_id_sign, canonical.SCOPE_SUFFIX)
