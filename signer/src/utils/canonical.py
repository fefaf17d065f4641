"""
Canonical string forms of signer inputs.

The signature has to be reproducible by a verifying party in any language,
so every payload key and value is reduced to a plain string with a fixed
rule before it reaches the hash:

    str                 -> unchanged
    bool                -> "true" / "false"
    int, float, Decimal -> str(value)
    bytes, bytearray    -> UTF-8 decoded
    Enum member         -> canonical form of its value

Anything else is rejected with TypeConversionError.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, MutableMapping

from ..errors import TypeConversionError

SCOPE_SUFFIX = "signer"


def to_scalar_str(value: Any, role: str = "value") -> str:
    """
    Coerce a payload key or value to its canonical string form.

    Args:
        value: Scalar to convert
        role: "key" or "value", used in the error message

    Returns:
        String form of value (case preserved)

    Raises:
        TypeConversionError: If value is not a supported scalar
    """
    if isinstance(value, Enum):
        return to_scalar_str(value.value, role)
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise TypeConversionError(value, role) from e
    raise TypeConversionError(value, role)


def create_scope(self_key: str, client_id: str) -> str:
    """
    Build the scope a signature is valid in.

    Neither component is escaped; a "/" inside self_key or client_id simply
    adds segments.
    """
    return f"{self_key}/{client_id}/{SCOPE_SUFFIX}"


def create_context(payload: Mapping[Any, Any]) -> str:
    """
    Build the canonical string representation of a payload.

    Process:
    1. Render each pair as "key=value\\n", both sides lowercased
    2. Sort the rendered lines as whole strings (values can break key ties)
    3. Concatenate the lines
    4. Append "\\n" and the ";"-joined, sorted string forms of the keys

    Args:
        payload: Mapping of scalar keys to scalar values

    Returns:
        Canonical context string

    Raises:
        TypeConversionError: If a key or value is not a supported scalar
    """
    lines = []
    key_names = []

    for key, value in payload.items():
        key_str = to_scalar_str(key, "key")
        val_str = to_scalar_str(value, "value")
        lines.append(f"{key_str.lower()}={val_str.lower()}\n")
        key_names.append(key_str)

    lines.sort()

    return "".join(lines) + "\n" + ";".join(sorted(key_names))


def join_query_string(params: Mapping[Any, Any]) -> str:
    """
    Join params into "key=value" segments separated by "&", sorted by key.

    Values are inserted verbatim; no percent-encoding is applied. Callers
    that build real URLs must escape the result themselves.
    """
    pairs = [(to_scalar_str(k, "key"), to_scalar_str(v, "value")) for k, v in params.items()]
    return "&".join(f"{k}={v}" for k, v in sorted(pairs, key=lambda p: p[0]))


def missing_keys(payload: Mapping[Any, Any], required: Iterable[str]) -> list:
    """Return the names in required that payload has no key for."""
    present = {to_scalar_str(k, "key") for k in payload}
    return [name for name in required if name not in present]


def drop_keys(payload: MutableMapping[Any, Any], names: Iterable[str]) -> None:
    """
    Delete, in place, every key whose canonical string form is in names.

    Keys such as b"client_secret" or an Enum with that value render the same
    as the plain string, so they are removed too.
    """
    names = set(names)
    for key in [k for k in payload if to_scalar_str(k, "key") in names]:
        del payload[key]
