"""
Torus Wallet - Quantum Wallet Manager

Composes a base wallet with its quantum-enhanced material and provides
the wallet-level operations:
- Creation and mnemonic recovery
- Encrypted storage serialization
- Transaction signing and verification
- Deterministic derived addresses
- Identity hashing

Creation mixes a time nonce into the quantum seed, recovery does not, so a
created wallet's quantum_seed is not reproduced by recover(). The key pair,
entropy signature and entanglement proof of a recovered wallet are derived
from its recomputed seed.
"""

import json
import logging
import time
from typing import Callable, List, Optional

from torus_wallet.config import WalletConfig
from torus_wallet.constants import SIGNED_TX_DELIMITER
from torus_wallet.core.types import (
    BaseWallet,
    EncryptedWalletRecord,
    QuantumKeyPair,
    QuantumWallet,
)
from torus_wallet.crypto.harmonic import HarmonicTransform
from torus_wallet.crypto.hash import constant_time_compare, keccak256
from torus_wallet.crypto.quantum import QuantumEnhancer
from torus_wallet.errors import (
    InvalidMnemonicError,
    QuantumIntegrityError,
    WalletDecryptionError,
    WalletError,
    WalletRecoveryError,
)
from torus_wallet.wallet.provider import (
    BaseWalletProvider,
    Ed25519Signer,
    Ed25519WalletProvider,
    Transaction,
    TransactionSigner,
)

logger = logging.getLogger("torus_wallet.manager")


class QuantumWalletManager:
    """
    Quantum wallet orchestration.

    Stateless apart from its collaborators; safe to share across threads.
    """

    def __init__(
        self,
        provider: Optional[BaseWalletProvider] = None,
        signer: Optional[TransactionSigner] = None,
        config: Optional[WalletConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or WalletConfig.default()
        self.provider = provider or Ed25519WalletProvider(self.config)
        self.signer = signer or Ed25519Signer()
        self._clock = clock

    # =========================================================================
    # COMPOSITION
    # =========================================================================

    @staticmethod
    def _entanglement_proof(qkp: QuantumKeyPair, entropy_signature: str) -> str:
        return keccak256(qkp.entanglement_hash + entropy_signature)

    def _compose(self, base_wallet: BaseWallet, quantum_seed: str) -> QuantumWallet:
        qkp = QuantumEnhancer.enhance(base_wallet.public_key, base_wallet.private_key)
        entropy_signature = QuantumEnhancer.sign(quantum_seed, qkp)

        return QuantumWallet(
            base_wallet=base_wallet,
            quantum_key_pair=qkp,
            quantum_seed=quantum_seed,
            entropy_signature=entropy_signature,
            entanglement_proof=self._entanglement_proof(qkp, entropy_signature),
        )

    def _time_nonce(self) -> str:
        # Millisecond resolution
        return str(int(self._clock() * 1000))

    # =========================================================================
    # WALLET LIFECYCLE
    # =========================================================================

    def create(self, passphrase: str, additional_entropy: str = "") -> QuantumWallet:
        """
        Create a new quantum wallet.

        Not deterministic across calls: a time nonce is mixed into the
        quantum seed so identical inputs yield distinct wallets.

        Args:
            passphrase: User passphrase for the base wallet
            additional_entropy: Optional extra entropy for the quantum seed

        Returns:
            Newly composed QuantumWallet
        """
        quantum_seed = QuantumEnhancer.derive_seed(
            passphrase + additional_entropy + self._time_nonce()
        )
        base_wallet = self.provider.create_wallet(passphrase)
        wallet = self._compose(base_wallet, quantum_seed)

        logger.info(f"Quantum wallet created: {wallet.address}")
        return wallet

    def recover(self, mnemonic: str, passphrase: str) -> QuantumWallet:
        """
        Recover a quantum wallet from its base wallet mnemonic.

        The quantum seed is recomputed deterministically from
        (passphrase || private key).

        Raises:
            InvalidMnemonicError: If the provider rejects the mnemonic format
            WalletRecoveryError: If the provider fails to recover the wallet
        """
        try:
            base_wallet = self.provider.recover_from_mnemonic(mnemonic, passphrase)
        except InvalidMnemonicError:
            logger.warning("Wallet recovery rejected: invalid mnemonic")
            raise
        except (WalletError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Wallet recovery failed: {type(e).__name__}")
            raise WalletRecoveryError("Base wallet recovery failed") from e

        quantum_seed = QuantumEnhancer.derive_seed(passphrase + base_wallet.private_key)
        wallet = self._compose(base_wallet, quantum_seed)

        logger.info(f"Quantum wallet recovered: {wallet.address}")
        return wallet

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def encrypt_for_storage(self, wallet: QuantumWallet, passphrase: str) -> EncryptedWalletRecord:
        """
        Encrypt a wallet for storage.

        The base wallet is sealed by the provider. The quantum components are
        serialized without the private key and encrypted under the wallet's
        own quantum key pair.
        """
        encrypted_base = self.provider.encrypt_for_storage(wallet.base_wallet, passphrase)

        components = {
            "quantum_key_pair": wallet.quantum_key_pair.public_components(),
            "entropy_signature": wallet.entropy_signature,
            "entanglement_proof": wallet.entanglement_proof,
        }
        encrypted_components = QuantumEnhancer.encrypt(
            json.dumps(components), wallet.quantum_key_pair
        )

        return EncryptedWalletRecord(
            base_wallet=encrypted_base,
            quantum_components=encrypted_components,
        )

    def decrypt_from_storage(self, record: EncryptedWalletRecord, passphrase: str) -> QuantumWallet:
        """
        Decrypt a wallet from storage.

        A temporary key pair is rebuilt from the recovered base wallet only
        to obtain decryption material; the stored components are then
        re-attached to the private key and verified.

        Raises:
            WalletDecryptionError: On malformed record, wrong passphrase or
                undecryptable components
            QuantumIntegrityError: If the decrypted key pair fails verification
        """
        try:
            base_wallet = self.provider.decrypt_from_storage(record.base_wallet, passphrase)

            temp_qkp = QuantumEnhancer.enhance(base_wallet.public_key, base_wallet.private_key)
            components_json = QuantumEnhancer.decrypt(record.quantum_components, temp_qkp)
            if not components_json:
                raise ValueError("Failed to decrypt quantum components")

            components = json.loads(components_json)
            qkp = QuantumKeyPair.from_public_components(
                components["quantum_key_pair"], base_wallet.private_key
            )
            entropy_signature = components["entropy_signature"]
            entanglement_proof = components["entanglement_proof"]
        except WalletDecryptionError:
            logger.error("Wallet decryption failed: base wallet")
            raise
        except (WalletError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Wallet decryption failed: {type(e).__name__}")
            raise WalletDecryptionError(
                "Wallet decryption failed. Invalid passphrase or corrupted data."
            ) from e

        if not QuantumEnhancer.verify_key_pair(qkp):
            logger.error("Quantum key pair verification failed")
            raise QuantumIntegrityError("Quantum key pair verification failed")

        quantum_seed = QuantumEnhancer.derive_seed(passphrase + base_wallet.private_key)

        logger.info(f"Quantum wallet decrypted: {base_wallet.address}")
        return QuantumWallet(
            base_wallet=base_wallet,
            quantum_key_pair=qkp,
            quantum_seed=quantum_seed,
            entropy_signature=entropy_signature,
            entanglement_proof=entanglement_proof,
        )

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def sign_transaction(self, wallet: QuantumWallet, transaction: Transaction) -> str:
        """
        Sign a transaction with both the standard and the quantum signature.

        Returns:
            "<standard signed tx>:<quantum signature>"
        """
        standard = self.signer.sign_transaction(wallet.base_wallet.private_key, transaction)
        if SIGNED_TX_DELIMITER in standard:
            raise ValueError("Standard signature must not contain the delimiter")

        quantum_signature = QuantumEnhancer.sign(standard, wallet.quantum_key_pair)
        return standard + SIGNED_TX_DELIMITER + quantum_signature

    def verify_signed_transaction(self, signed_transaction: str, wallet: QuantumWallet) -> bool:
        """Verify the quantum half of a signed transaction. Never raises."""
        if not isinstance(signed_transaction, str):
            return False

        standard, delimiter, quantum_signature = signed_transaction.partition(SIGNED_TX_DELIMITER)
        if not delimiter or not standard or not quantum_signature:
            return False

        return QuantumEnhancer.verify(standard, quantum_signature, wallet.quantum_key_pair)

    # =========================================================================
    # ADDRESSES AND IDENTITY
    # =========================================================================

    def derive_addresses(self, wallet: QuantumWallet, count: Optional[int] = None) -> List[str]:
        """
        Derive additional addresses from the quantum seed.

        Address i comes from the harmonic key of
        (quantum_seed || entanglement_hash || i), hashed with Keccak-256 into
        a private key. Deterministic and order-preserving. A count of zero or
        less yields an empty list.
        """
        if count is None:
            count = self.config.default_address_count

        base_entropy = wallet.quantum_seed + wallet.quantum_key_pair.entanglement_hash

        addresses = []
        for i in range(count):
            pattern_seed = HarmonicTransform.derive_key(base_entropy + str(i))
            address_key = keccak256(pattern_seed)
            addresses.append(self.signer.derive_address(address_key))

        return addresses

    @staticmethod
    def identity(wallet: QuantumWallet) -> str:
        """Keccak-256 of fingerprint, entanglement proof and entropy signature."""
        return keccak256(
            wallet.quantum_key_pair.quantum_fingerprint
            + wallet.entanglement_proof
            + wallet.entropy_signature
        )

    # =========================================================================
    # INTEGRITY
    # =========================================================================

    def verify_wallet(self, wallet: QuantumWallet) -> bool:
        """Check key pair integrity and the entanglement proof."""
        if not QuantumEnhancer.verify_key_pair(wallet.quantum_key_pair):
            return False
        expected = self._entanglement_proof(wallet.quantum_key_pair, wallet.entropy_signature)
        return constant_time_compare(wallet.entanglement_proof, expected)

    @staticmethod
    def verify_entropy_signature(wallet: QuantumWallet) -> bool:
        """Check that the entropy signature signs the wallet's current quantum seed."""
        return QuantumEnhancer.verify(
            wallet.quantum_seed, wallet.entropy_signature, wallet.quantum_key_pair
        )
