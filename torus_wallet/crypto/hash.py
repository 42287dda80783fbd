"""
Torus Wallet Hash Utilities

Text-in, hex-out wrappers around SHA-256, HMAC-SHA256 and Keccak-256.
Every derivation in the pipeline hashes UTF-8 text and chains lowercase
hex digests, so these helpers keep that convention in one place.
"""

import hashlib
import hmac
import math
from typing import Union

from Crypto.Hash import keccak

BytesLike = Union[str, bytes]


def _to_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def sha256_hex(data: BytesLike) -> str:
    """Compute SHA-256, return lowercase hex."""
    return hashlib.sha256(_to_bytes(data)).hexdigest()


def hmac_sha256_hex(key: BytesLike, message: BytesLike) -> str:
    """Compute HMAC-SHA256 of message keyed by key, return lowercase hex."""
    return hmac.new(_to_bytes(key), _to_bytes(message), hashlib.sha256).hexdigest()


def keccak256_bytes(data: BytesLike) -> bytes:
    """Compute Keccak-256 (pre-standard SHA-3 padding, as used by Ethereum)."""
    return keccak.new(digest_bits=256, data=_to_bytes(data)).digest()


def keccak256(data: BytesLike) -> str:
    """Compute Keccak-256, return 0x-prefixed lowercase hex."""
    return "0x" + keccak256_bytes(data).hex()


def format_number(value: Union[int, float]) -> str:
    """
    Render a number the way JavaScript's Number#toString does for the
    values used in this package.

    Integer-valued floats lose their trailing ".0"; everything else uses
    the shortest round-trip representation.
    """
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def constant_time_compare(a: str, b: str) -> bool:
    """
    Compare two strings without an early exit on the first mismatch.

    Unequal lengths fail immediately; equal-length inputs are XOR-accumulated
    over every code point.
    """
    if not isinstance(a, str) or not isinstance(b, str):
        return False
    if len(a) != len(b):
        return False

    result = 0
    for x, y in zip(a, b):
        result |= ord(x) ^ ord(y)
    return result == 0
