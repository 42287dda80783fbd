"""
Torus Wallet - Harmonic Transform

Passphrase-keyed symmetric primitives with no external state:
- Harmonic key derivation (12 octave rounds)
- AES-CBC text encryption keyed by the harmonic key
- Hash-chain message signatures
- 12-word harmonic mnemonic encode/decode

These are deterministic hash constructions, not asymmetric cryptography.
"""

import hashlib
import math
import re
from typing import List, Sequence, Union

from torus_wallet.constants import (
    HARMONIC_VOCABULARY,
    MNEMONIC_BITS_PER_WORD,
    MNEMONIC_DOMAIN,
    MNEMONIC_WORD_COUNT,
    OCTAVES,
    TORUS_CONSTANT,
    octave_at,
    phase_at,
)
from torus_wallet.crypto.cipher import decrypt_text, encrypt_text
from torus_wallet.crypto.hash import constant_time_compare, sha256_hex
from torus_wallet.errors import InvalidMnemonicError

_SEED_BITS = 256
_PREFIX_BITS = MNEMONIC_WORD_COUNT * MNEMONIC_BITS_PER_WORD
_WORD_MASK = (1 << MNEMONIC_BITS_PER_WORD) - 1
_HEX_SEED = re.compile(r"^[0-9a-fA-F]{64}$")
_WORD_INDEX = {word: i for i, word in enumerate(HARMONIC_VOCABULARY)}


class HarmonicTransform:
    """Harmonic key derivation and the primitives keyed by it."""

    @staticmethod
    def derive_key(passphrase: str) -> str:
        """
        Derive the harmonic key of a passphrase.

        The accumulator starts as SHA-256(passphrase || TORUS_CONSTANT). Each
        octave round folds in one resonance byte taken cyclically from the
        passphrase, scaled by the octave and phase-shifted, together with the
        round index.

        Args:
            passphrase: Any text, including empty

        Returns:
            64-char lowercase hex key
        """
        data = passphrase.encode("utf-8")
        key = sha256_hex(passphrase + TORUS_CONSTANT)

        for i, octave in enumerate(OCTAVES):
            resonance = data[i % len(data)] if data else 0
            transformed = math.floor((resonance + 1) * octave * (1 + phase_at(i)))
            key = sha256_hex(key + str(transformed) + str(i))

        return key

    # =========================================================================
    # ENCRYPTION
    # =========================================================================

    @staticmethod
    def encrypt(plaintext: str, passphrase: str) -> str:
        """Encrypt text under the harmonic key of passphrase. Returns base64."""
        return encrypt_text(plaintext, HarmonicTransform.derive_key(passphrase))

    @staticmethod
    def decrypt(ciphertext: str, passphrase: str) -> str:
        """Decrypt text from encrypt(). Returns "" on wrong passphrase or corruption."""
        return decrypt_text(ciphertext, HarmonicTransform.derive_key(passphrase))

    # =========================================================================
    # SIGNATURES
    # =========================================================================

    @staticmethod
    def public_material(private_material: str) -> str:
        """Public verification material for a private signing secret."""
        return HarmonicTransform.derive_key(private_material)

    @staticmethod
    def sign(message: str, private_material: str) -> str:
        """
        Sign message with a private secret.

        signature = derive_key(message || public_material(private_material))
        """
        public = HarmonicTransform.public_material(private_material)
        return HarmonicTransform.derive_key(message + public)

    @staticmethod
    def verify(message: str, signature: str, public_material: str) -> bool:
        """Verify a signature from sign() against public material, in constant time."""
        if not isinstance(signature, str) or not signature:
            return False
        expected = HarmonicTransform.derive_key(message + public_material)
        return constant_time_compare(signature, expected)

    # =========================================================================
    # MNEMONIC
    # =========================================================================

    @staticmethod
    def _material(secret: Union[str, bytes]) -> bytes:
        """32 bytes of mnemonic material: raw seeds pass through, anything else is derived."""
        if isinstance(secret, (bytes, bytearray)):
            if len(secret) == _SEED_BITS // 8:
                return bytes(secret)
            return bytes.fromhex(HarmonicTransform.derive_key(bytes(secret).hex()))
        if _HEX_SEED.match(secret):
            return bytes.fromhex(secret)
        return bytes.fromhex(HarmonicTransform.derive_key(secret))

    @staticmethod
    def encode_mnemonic(secret: Union[str, bytes]) -> List[str]:
        """
        Encode secret material as 12 harmonic words.

        Word k is chosen by the k-th 6-bit slice of the material, offset by
        the k-th octave modulo the vocabulary size.

        Args:
            secret: 32 raw bytes, a 64-char hex seed, or any other text

        Returns:
            List of 12 words
        """
        value = int.from_bytes(HarmonicTransform._material(secret), "big")
        vocab_size = len(HARMONIC_VOCABULARY)

        words = []
        for k in range(MNEMONIC_WORD_COUNT):
            shift = _SEED_BITS - MNEMONIC_BITS_PER_WORD * (k + 1)
            chunk = (value >> shift) & _WORD_MASK
            words.append(HARMONIC_VOCABULARY[(chunk + octave_at(k)) % vocab_size])

        return words

    @staticmethod
    def decode_mnemonic(words: Union[str, Sequence[str]]) -> str:
        """
        Decode 12 harmonic words into a deterministic seed.

        Lossy: only 72 bits survive encoding, so the result is a usable seed
        (re-hashed from those bits), not the original secret. Encoding the
        returned seed reproduces the same 12 words.

        Args:
            words: List of words or a whitespace-separated phrase

        Returns:
            64-char lowercase hex seed

        Raises:
            InvalidMnemonicError: On wrong word count or an unknown word
        """
        if isinstance(words, str):
            words = words.split()
        normalized = [w.strip().lower() for w in words]

        if len(normalized) != MNEMONIC_WORD_COUNT:
            raise InvalidMnemonicError(
                f"Mnemonic must have {MNEMONIC_WORD_COUNT} words, got {len(normalized)}"
            )

        vocab_size = len(HARMONIC_VOCABULARY)
        prefix = 0
        for k, word in enumerate(normalized):
            index = _WORD_INDEX.get(word)
            if index is None:
                raise InvalidMnemonicError(f"Word {k + 1} is not in the vocabulary")
            chunk = (index - octave_at(k)) % vocab_size
            prefix = (prefix << MNEMONIC_BITS_PER_WORD) | chunk

        prefix_bytes = prefix.to_bytes(_PREFIX_BITS // 8, "big")
        fill = int.from_bytes(hashlib.sha256(prefix_bytes + MNEMONIC_DOMAIN).digest(), "big")
        fill_bits = _SEED_BITS - _PREFIX_BITS

        seed = (prefix << fill_bits) | (fill >> (_SEED_BITS - fill_bits))
        return seed.to_bytes(_SEED_BITS // 8, "big").hex()
