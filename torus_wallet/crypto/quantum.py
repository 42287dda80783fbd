"""
Torus Wallet - Quantum Enhancer

Derives deterministic "quantum" material from an existing key pair and
operates on it:
- Lattice salt: golden-ratio-weighted re-hashing of the key pair
- Entanglement hash: 12 mixing rounds binding public and private key
- Superposition states: 3 independently salted lattice hashes
- Quantum fingerprint: interference transform over public key and HMAC

Sign, verify, encrypt and decrypt are built from that material. Despite
the naming, none of this is post-quantum cryptography; it is a fixed,
reproducible hashing pipeline.

SECURITY REVIEW: verify() accepts a signature matching ANY superposition
state, which widens the valid signature space threefold compared to a
single-state scheme.
"""

import math
from typing import List

from torus_wallet.constants import (
    ENTANGLEMENT_ROUNDS,
    FIBONACCI_12,
    FIBONACCI_13,
    LATTICE_SALT_ROUNDS,
    PHI,
    PHI_CONJUGATE,
    PI,
    SACRED_RATIOS,
    SUPERPOSITION_SALT_LENGTH,
    SUPERPOSITION_STATES,
    ratio_at,
)
from torus_wallet.core.types import QuantumKeyPair
from torus_wallet.crypto.cipher import decrypt_text, encrypt_text
from torus_wallet.crypto.harmonic import HarmonicTransform
from torus_wallet.crypto.hash import (
    constant_time_compare,
    format_number,
    hmac_sha256_hex,
    sha256_hex,
)


# ============================================================================
# DERIVATION PRIMITIVES
# ============================================================================

def lattice_hash(data: str, salt: str = "") -> str:
    """
    Salted hash with a golden-ratio byte transform between rounds.

    SHA-256(data || salt), every byte scaled by PHI (even index) or its
    conjugate (odd index) modulo 256, then hashed twice more.
    """
    digest = bytes.fromhex(sha256_hex(data + salt))

    transformed = bytes(
        math.floor((byte * (PHI if i % 2 == 0 else PHI_CONJUGATE)) % 256)
        for i, byte in enumerate(digest)
    )

    result = sha256_hex(transformed.hex())
    return sha256_hex(result)


def _mix(round_index: int, a: int, b: int) -> int:
    """Combine two bytes with the rule selected by the round."""
    rule = round_index % 4
    if rule == 0:
        return a ^ b
    if rule == 1:
        return (a + b) % 256
    if rule == 2:
        return math.floor((a * b * PHI) % 256)
    return (a * FIBONACCI_12 + b * FIBONACCI_13) % 256


def entangle(key_a: str, key_b: str) -> str:
    """
    Bind two strings into one digest over ENTANGLEMENT_ROUNDS mixing rounds.

    Each round mixes the UTF-8 bytes of both inputs position by position
    (shorter input padded with zeros), hashes the result with the round
    index and chains it into the accumulator.
    """
    bytes_a = key_a.encode("utf-8")
    bytes_b = key_b.encode("utf-8")
    width = max(len(bytes_a), len(bytes_b))

    accumulator = ""
    for i in range(ENTANGLEMENT_ROUNDS):
        mixed = bytes(
            _mix(
                i,
                bytes_a[j] if j < len(bytes_a) else 0,
                bytes_b[j] if j < len(bytes_b) else 0,
            )
            for j in range(width)
        )

        round_hash = sha256_hex(mixed.hex() + str(i))
        accumulator = round_hash if i == 0 else sha256_hex(accumulator + round_hash)

    return accumulator


def superposition_states(key: str) -> List[str]:
    """Derive SUPERPOSITION_STATES lattice hashes of key, one per sacred ratio."""
    states = []
    for i in range(SUPERPOSITION_STATES):
        ratio = ratio_at(i)
        salt = sha256_hex(key + format_number(ratio))[:SUPERPOSITION_SALT_LENGTH]
        states.append(lattice_hash(key, salt))
    return states


def quantum_fingerprint(public_key: str, private_signature: str) -> str:
    """
    Fingerprint a public key against a private signature.

    For every byte of the public key, a sine interference weight of the
    byte product scales the XOR of both bytes, tunneled through PHI.
    """
    public_bytes = public_key.encode("utf-8")
    private_bytes = private_signature.encode("utf-8")

    out = bytearray(len(public_bytes))
    for i, p in enumerate(public_bytes):
        q = private_bytes[i] if i < len(private_bytes) else 0
        interference = math.sin(p * q * PI / 256) * 128 + 128
        out[i] = math.floor((p ^ q) * (interference / 256) * PHI) % 256

    return sha256_hex(bytes(out).hex())


def lattice_salt(seed: str) -> str:
    """Derive a salt by re-hashing seed with successive powers of PHI."""
    salt = sha256_hex(seed)
    for i in range(LATTICE_SALT_ROUNDS):
        salt = sha256_hex(salt + format_number(PHI ** (i + 1)))
    return salt


def _encryption_key(qkp: QuantumKeyPair) -> str:
    return sha256_hex(
        qkp.entanglement_hash + "".join(qkp.superposition_states) + qkp.lattice_salt
    )


# ============================================================================
# QUANTUM ENHANCER
# ============================================================================

class QuantumEnhancer:
    """Derive and operate on QuantumKeyPairs. All methods are pure."""

    @staticmethod
    def enhance(public_key: str, private_key: str) -> QuantumKeyPair:
        """
        Transform a key pair into a QuantumKeyPair.

        Args:
            public_key: Public key string
            private_key: Private key string

        Returns:
            QuantumKeyPair whose derived fields depend only on the inputs
        """
        salt = lattice_salt(public_key + private_key)
        entanglement_hash = entangle(public_key, private_key)
        states = superposition_states(private_key)
        fingerprint = quantum_fingerprint(
            public_key,
            hmac_sha256_hex(entanglement_hash, private_key),
        )

        return QuantumKeyPair(
            public_key=public_key,
            private_key=private_key,
            quantum_fingerprint=fingerprint,
            entanglement_hash=entanglement_hash,
            superposition_states=tuple(states),
            lattice_salt=salt,
        )

    @staticmethod
    def _entangled_message(message: str, qkp: QuantumKeyPair) -> str:
        return entangle(sha256_hex(message), qkp.entanglement_hash)

    @staticmethod
    def sign(message: str, qkp: QuantumKeyPair) -> str:
        """
        Sign message with the primary superposition state.

        HMAC(key = states[0] || lattice_salt, msg = entangle(H(message), entanglement_hash))
        """
        entangled = QuantumEnhancer._entangled_message(message, qkp)
        primary_state = qkp.superposition_states[0]
        return hmac_sha256_hex(primary_state + qkp.lattice_salt, entangled)

    @staticmethod
    def verify(message: str, signature: str, qkp: QuantumKeyPair) -> bool:
        """
        Verify a signature against every superposition state.

        Succeeds if the signature matches any state. All candidates are
        compared in constant time without early exit.
        """
        if not isinstance(signature, str) or not signature:
            return False
        if not qkp.superposition_states:
            return False

        entangled = QuantumEnhancer._entangled_message(message, qkp)

        valid = False
        for state in qkp.superposition_states:
            candidate = hmac_sha256_hex(state + qkp.lattice_salt, entangled)
            valid |= constant_time_compare(signature, candidate)

        return valid

    @staticmethod
    def encrypt(data: str, qkp: QuantumKeyPair) -> str:
        """Encrypt text under key material of qkp. Returns base64."""
        return encrypt_text(data, _encryption_key(qkp))

    @staticmethod
    def decrypt(ciphertext: str, qkp: QuantumKeyPair) -> str:
        """Decrypt text from encrypt(). Returns "" on failure; callers must check."""
        return decrypt_text(ciphertext, _encryption_key(qkp))

    @staticmethod
    def derive_seed(user_entropy: str) -> str:
        """
        Derive a seed from arbitrary user entropy.

        Lattice hash, then the 12-round harmonic key, then one folding round
        per sacred ratio.
        """
        seed = HarmonicTransform.derive_key(lattice_hash(user_entropy))

        for ratio in SACRED_RATIOS:
            transform = sha256_hex(seed + format_number(ratio))
            seed = sha256_hex(seed[:32] + transform[:32])

        return seed

    @staticmethod
    def verify_key_pair(qkp: QuantumKeyPair) -> bool:
        """Check that entanglement hash and fingerprint match the key pair."""
        expected_entanglement = entangle(qkp.public_key, qkp.private_key)
        expected_fingerprint = quantum_fingerprint(
            qkp.public_key,
            hmac_sha256_hex(qkp.entanglement_hash, qkp.private_key),
        )

        entanglement_ok = constant_time_compare(qkp.entanglement_hash, expected_entanglement)
        fingerprint_ok = constant_time_compare(qkp.quantum_fingerprint, expected_fingerprint)
        return entanglement_ok and fingerprint_ok
