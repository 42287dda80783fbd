"""
Torus Wallet - Base Wallet Provider

The quantum layer wraps a base wallet it does not implement itself. This
module defines the seams it consumes and a default implementation:

- BaseWalletProvider: create / recover / storage-encrypt base wallets
- TransactionSigner: standard transaction signing and address derivation

Default implementation:
- BIP-39 mnemonics (english, 128-bit by default)
- Ed25519 keys (PyNaCl) from HMAC-SHA512("ed25519 seed", BIP-39 seed)
- Keccak-256 addresses with EIP-55 checksum
- Mnemonic sealed with AES-256-GCM under a scrypt key for storage
"""

from __future__ import annotations
import hashlib
import hmac
import json
import logging
from typing import Any, Optional, Protocol, Union

import nacl.exceptions
import nacl.signing
from mnemonic import Mnemonic

from torus_wallet.config import WalletConfig
from torus_wallet.constants import (
    ADDRESS_SIZE,
    ED25519_SEED_KEY,
    ED25519_SIGNATURE_SIZE,
    STORAGE_KDF,
    STORAGE_VERSION,
)
from torus_wallet.core.types import BaseWallet
from torus_wallet.crypto.cipher import SealedBox, seal, unseal
from torus_wallet.crypto.hash import keccak256_bytes
from torus_wallet.errors import (
    InvalidMnemonicError,
    WalletDecryptionError,
    WalletError,
)

logger = logging.getLogger("torus_wallet.provider")

Transaction = Union[dict, str, bytes]


# ============================================================================
# SEAMS
# ============================================================================

class TransactionSigner(Protocol):
    """Standard signing and address library."""

    def sign_transaction(self, private_key: str, transaction: Transaction) -> str: ...

    def derive_address(self, private_key: str) -> str: ...


class BaseWalletProvider(Protocol):
    """Source of base wallets."""

    def create_wallet(self, passphrase: str) -> BaseWallet: ...

    def recover_from_mnemonic(self, mnemonic: str, passphrase: str) -> BaseWallet: ...

    def encrypt_for_storage(self, wallet: BaseWallet, passphrase: str) -> str: ...

    def decrypt_from_storage(self, blob: str, passphrase: str) -> BaseWallet: ...


# ============================================================================
# KEY HELPERS
# ============================================================================

def private_key_bytes(private_key: str) -> bytes:
    """
    Parse a hex private key (optional 0x prefix).

    Raises:
        ValueError: If the key is not 32 bytes of hex
    """
    text = private_key[2:] if private_key.startswith("0x") else private_key
    data = bytes.fromhex(text)
    if len(data) != 32:
        raise ValueError(f"Private key must be 32 bytes, got {len(data)}")
    return data


def to_checksum_address(address: bytes) -> str:
    """EIP-55 mixed-case checksum encoding of a 20-byte address."""
    lower = address.hex()
    digest = keccak256_bytes(lower).hex()

    return "0x" + "".join(
        c.upper() if c.isalpha() and int(digest[i], 16) >= 8 else c
        for i, c in enumerate(lower)
    )


# ============================================================================
# ED25519 SIGNER
# ============================================================================

class Ed25519Signer:
    """
    Standard signer backed by Ed25519.

    Signed transaction format: "0x" || hex(payload || signature), where
    payload is the canonical JSON of the transaction. Hex output never
    contains the ":" delimiter used by quantum-signed transactions.
    """

    @staticmethod
    def _signing_key(private_key: str) -> nacl.signing.SigningKey:
        return nacl.signing.SigningKey(private_key_bytes(private_key))

    @staticmethod
    def public_key(private_key: str) -> str:
        """Hex public key of a hex private key."""
        return Ed25519Signer._signing_key(private_key).verify_key.encode().hex()

    @staticmethod
    def encode_transaction(transaction: Transaction) -> bytes:
        """Canonical byte payload of a transaction."""
        if isinstance(transaction, (bytes, bytearray)):
            return bytes(transaction)
        if isinstance(transaction, str):
            return transaction.encode("utf-8")
        return json.dumps(transaction, sort_keys=True, separators=(",", ":")).encode("utf-8")

    @staticmethod
    def sign_transaction(private_key: str, transaction: Transaction) -> str:
        """Sign a transaction payload. Returns 0x-prefixed hex."""
        payload = Ed25519Signer.encode_transaction(transaction)
        signature = Ed25519Signer._signing_key(private_key).sign(payload).signature
        return "0x" + (payload + signature).hex()

    @staticmethod
    def _split(signed: str) -> tuple[bytes, bytes]:
        if not signed.startswith("0x"):
            raise ValueError("Signed transaction must be 0x-prefixed")
        raw = bytes.fromhex(signed[2:])
        if len(raw) < ED25519_SIGNATURE_SIZE:
            raise ValueError("Signed transaction too short")
        return raw[:-ED25519_SIGNATURE_SIZE], raw[-ED25519_SIGNATURE_SIZE:]

    @staticmethod
    def decode_transaction(signed: str) -> Any:
        """
        Recover the payload of a signed transaction.

        Returns the parsed JSON object when the payload is JSON, raw bytes
        otherwise.

        Raises:
            ValueError: If the signed transaction is malformed
        """
        payload, _ = Ed25519Signer._split(signed)
        try:
            return json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return payload

    @staticmethod
    def verify_transaction(public_key: str, signed: str) -> bool:
        """Verify a signed transaction against a hex public key."""
        try:
            payload, signature = Ed25519Signer._split(signed)
            verify_key = nacl.signing.VerifyKey(bytes.fromhex(public_key))
            verify_key.verify(payload, signature)
            return True
        except (ValueError, TypeError, nacl.exceptions.BadSignatureError):
            return False

    @staticmethod
    def derive_address(private_key: str) -> str:
        """Address of a private key: last 20 bytes of Keccak-256(public key), checksummed."""
        public = Ed25519Signer._signing_key(private_key).verify_key.encode()
        return to_checksum_address(keccak256_bytes(public)[-ADDRESS_SIZE:])


# ============================================================================
# ED25519 WALLET PROVIDER
# ============================================================================

class Ed25519WalletProvider:
    """
    BIP-39 / Ed25519 base wallet provider.

    The private key is never persisted; storage keeps the sealed mnemonic
    and re-derives keys from mnemonic + passphrase.
    """

    def __init__(self, config: Optional[WalletConfig] = None):
        self.config = config or WalletConfig.default()
        self._mnemo = Mnemonic(self.config.language)

    @staticmethod
    def _normalize(mnemonic: str) -> str:
        return " ".join(mnemonic.split()).lower()

    def _from_seed(self, seed: bytes, mnemonic: str) -> BaseWallet:
        private = hmac.new(ED25519_SEED_KEY, seed, hashlib.sha512).digest()[:32]
        private_hex = private.hex()

        return BaseWallet(
            public_key=Ed25519Signer.public_key(private_hex),
            private_key=private_hex,
            address=Ed25519Signer.derive_address(private_hex),
            mnemonic=mnemonic,
        )

    # =========================================================================
    # WALLET LIFECYCLE
    # =========================================================================

    def create_wallet(self, passphrase: str) -> BaseWallet:
        """Create a wallet from a fresh random mnemonic."""
        mnemonic = self._mnemo.generate(strength=self.config.mnemonic_strength)
        wallet = self.recover_from_mnemonic(mnemonic, passphrase)
        logger.info(f"Base wallet created: {wallet.address}")
        return wallet

    def recover_from_mnemonic(self, mnemonic: str, passphrase: str) -> BaseWallet:
        """
        Recover a wallet from its BIP-39 mnemonic.

        Raises:
            InvalidMnemonicError: If the phrase fails BIP-39 validation
        """
        if not isinstance(mnemonic, str):
            raise InvalidMnemonicError("Mnemonic must be a string")

        phrase = self._normalize(mnemonic)
        if not self._mnemo.check(phrase):
            raise InvalidMnemonicError("Mnemonic failed BIP-39 validation")

        seed = Mnemonic.to_seed(phrase, passphrase)
        return self._from_seed(seed, phrase)

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def encrypt_for_storage(self, wallet: BaseWallet, passphrase: str) -> str:
        """
        Seal the wallet mnemonic for storage.

        Format: JSON {version, kdf, address, salt, nonce, ciphertext}

        Raises:
            WalletError: If the wallet carries no mnemonic
        """
        if not wallet.mnemonic:
            raise WalletError("Base wallet has no mnemonic to store")

        secret = json.dumps({"mnemonic": wallet.mnemonic}).encode("utf-8")
        box = seal(secret, passphrase, self.config.kdf)

        record = {
            "version": STORAGE_VERSION,
            "kdf": STORAGE_KDF,
            "address": wallet.address,
        }
        record.update(box.to_dict())
        return json.dumps(record)

    def decrypt_from_storage(self, blob: str, passphrase: str) -> BaseWallet:
        """
        Open a blob from encrypt_for_storage().

        Raises:
            WalletDecryptionError: On malformed blob, wrong passphrase or
                address mismatch
        """
        try:
            data = json.loads(blob)
            if not isinstance(data, dict):
                raise ValueError("Base wallet blob must be a JSON object")

            version = data.get("version", STORAGE_VERSION)
            if version > STORAGE_VERSION:
                logger.warning(f"Wallet version {version} is newer than supported {STORAGE_VERSION}")
            if data.get("kdf", STORAGE_KDF) != STORAGE_KDF:
                raise ValueError(f"Unsupported KDF: {data.get('kdf')}")

            box = SealedBox.from_dict(data)
            secret = json.loads(unseal(box, passphrase, self.config.kdf).decode("utf-8"))
            mnemonic = secret["mnemonic"]
            wallet = self.recover_from_mnemonic(mnemonic, passphrase)
        except (ValueError, KeyError, TypeError, InvalidMnemonicError) as e:
            raise WalletDecryptionError("Base wallet decryption failed") from e

        expected = data.get("address")
        if expected and expected != wallet.address:
            raise WalletDecryptionError("Decrypted wallet does not match stored address")

        return wallet
