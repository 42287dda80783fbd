"""
Torus Wallet Cryptographic Primitives
"""

from torus_wallet.crypto.hash import (
    sha256_hex,
    hmac_sha256_hex,
    keccak256,
    keccak256_bytes,
    constant_time_compare,
)
from torus_wallet.crypto.cipher import encrypt_text, decrypt_text, seal, unseal, SealedBox
from torus_wallet.crypto.harmonic import HarmonicTransform
from torus_wallet.crypto.quantum import QuantumEnhancer

__all__ = [
    # Hash functions
    "sha256_hex",
    "hmac_sha256_hex",
    "keccak256",
    "keccak256_bytes",
    "constant_time_compare",
    # Ciphers
    "encrypt_text",
    "decrypt_text",
    "seal",
    "unseal",
    "SealedBox",
    # Layers
    "HarmonicTransform",
    "QuantumEnhancer",
]
