"""
Torus Wallet Symmetric Ciphers

Two constructions:
- Text cipher: AES-CBC with PKCS7 padding, keyed and IV'd by slices of a
  hex digest. Used by the harmonic and quantum layers. Decryption degrades
  to an empty string instead of raising.
- Sealed box: AES-256-GCM under a scrypt-derived key with random salt and
  nonce. Used to seal base wallet secrets for storage.
"""

import base64
import binascii
import logging
import secrets
from dataclasses import dataclass
from typing import Tuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from torus_wallet.config import KdfConfig
from torus_wallet.constants import (
    AES_BLOCK_SIZE,
    AES_IV_HEX_CHARS,
    AES_KEY_HEX_CHARS,
)

logger = logging.getLogger("torus_wallet.crypto")


# ============================================================================
# TEXT CIPHER (AES-CBC / PKCS7)
# ============================================================================

def split_key(key_hex: str) -> Tuple[bytes, bytes]:
    """
    Split a hex digest into an AES-128 key and a CBC IV.

    The first 32 hex chars give the 16-byte key. The next 16 hex chars give
    8 bytes, zero-extended to the 16-byte block size.
    """
    if len(key_hex) < AES_KEY_HEX_CHARS + AES_IV_HEX_CHARS:
        raise ValueError("key material too short")

    key = bytes.fromhex(key_hex[:AES_KEY_HEX_CHARS])
    iv_head = bytes.fromhex(key_hex[AES_KEY_HEX_CHARS:AES_KEY_HEX_CHARS + AES_IV_HEX_CHARS])
    iv = iv_head.ljust(AES_BLOCK_SIZE, b"\x00")
    return key, iv


def encrypt_text(plaintext: str, key_hex: str) -> str:
    """
    Encrypt UTF-8 text with AES-CBC/PKCS7.

    Args:
        plaintext: Text to encrypt (may be empty)
        key_hex: Hex digest supplying key and IV

    Returns:
        Base64 ciphertext
    """
    key, iv = split_key(key_hex)

    padder = padding.PKCS7(AES_BLOCK_SIZE * 8).padder()
    padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    return base64.b64encode(ciphertext).decode("ascii")


def decrypt_text(ciphertext: str, key_hex: str) -> str:
    """
    Decrypt text produced by encrypt_text().

    Returns:
        Plaintext, or "" if the ciphertext is corrupted or the key is wrong
    """
    try:
        key, iv = split_key(key_hex)
        raw = base64.b64decode(ciphertext, validate=True)

        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(raw) + decryptor.finalize()

        unpadder = padding.PKCS7(AES_BLOCK_SIZE * 8).unpadder()
        data = unpadder.update(padded) + unpadder.finalize()

        return data.decode("utf-8")
    except (ValueError, TypeError, binascii.Error, UnicodeDecodeError) as e:
        logger.warning(f"Text decryption failed: {type(e).__name__}")
        return ""


# ============================================================================
# SEALED BOX (AES-256-GCM / scrypt)
# ============================================================================

@dataclass(frozen=True)
class SealedBox:
    """Salt, nonce and authenticated ciphertext of a sealed secret."""
    salt: bytes
    nonce: bytes
    ciphertext: bytes

    def to_dict(self) -> dict:
        return {
            "salt": base64.b64encode(self.salt).decode("ascii"),
            "nonce": base64.b64encode(self.nonce).decode("ascii"),
            "ciphertext": base64.b64encode(self.ciphertext).decode("ascii"),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SealedBox":
        return cls(
            salt=base64.b64decode(data["salt"], validate=True),
            nonce=base64.b64decode(data["nonce"], validate=True),
            ciphertext=base64.b64decode(data["ciphertext"], validate=True),
        )


def derive_storage_key(passphrase: str, salt: bytes, kdf: KdfConfig) -> bytes:
    """Derive a 32-byte storage key from passphrase with scrypt."""
    scrypt = Scrypt(salt=salt, length=kdf.length, n=kdf.n, r=kdf.r, p=kdf.p)
    return scrypt.derive(passphrase.encode("utf-8"))


def seal(plaintext: bytes, passphrase: str, kdf: KdfConfig) -> SealedBox:
    """
    Encrypt plaintext with AES-256-GCM under a passphrase.

    A fresh random salt and nonce are drawn for every call.
    """
    salt = secrets.token_bytes(kdf.salt_size)
    nonce = secrets.token_bytes(kdf.nonce_size)
    key = derive_storage_key(passphrase, salt, kdf)

    ciphertext = AESGCM(key).encrypt(nonce, plaintext, associated_data=None)
    return SealedBox(salt=salt, nonce=nonce, ciphertext=ciphertext)


def unseal(box: SealedBox, passphrase: str, kdf: KdfConfig) -> bytes:
    """
    Decrypt a SealedBox.

    Raises:
        ValueError: If the passphrase is wrong or the box was tampered with
    """
    key = derive_storage_key(passphrase, box.salt, kdf)
    try:
        return AESGCM(key).decrypt(box.nonce, box.ciphertext, associated_data=None)
    except InvalidTag as e:
        raise ValueError("Authentication failed") from e
