"""
Torus Wallet
Deterministic harmonic key derivation, quantum-enhanced key pairs and
encrypted storage for a base wallet.

Harmonic Transform -> Quantum Enhancer -> Quantum Wallet Manager
"""

__version__ = "1.0.0"
__author__ = "Torus Wallet"

from torus_wallet.core.types import (
    KeyPair,
    QuantumKeyPair,
    BaseWallet,
    QuantumWallet,
    EncryptedWalletRecord,
)
from torus_wallet.crypto.harmonic import HarmonicTransform
from torus_wallet.crypto.quantum import QuantumEnhancer
from torus_wallet.errors import (
    WalletError,
    InvalidMnemonicError,
    WalletRecoveryError,
    WalletDecryptionError,
    QuantumIntegrityError,
)
from torus_wallet.wallet.manager import QuantumWalletManager
from torus_wallet.api import (
    create_wallet,
    recover_wallet,
    encrypt_wallet_for_storage,
    decrypt_wallet_from_storage,
    sign_transaction,
    verify_signed_transaction,
    derive_addresses,
    wallet_identity,
)

__all__ = [
    # Types
    "KeyPair",
    "QuantumKeyPair",
    "BaseWallet",
    "QuantumWallet",
    "EncryptedWalletRecord",
    # Layers
    "HarmonicTransform",
    "QuantumEnhancer",
    "QuantumWalletManager",
    # Exceptions
    "WalletError",
    "InvalidMnemonicError",
    "WalletRecoveryError",
    "WalletDecryptionError",
    "QuantumIntegrityError",
    # API
    "create_wallet",
    "recover_wallet",
    "encrypt_wallet_for_storage",
    "decrypt_wallet_from_storage",
    "sign_transaction",
    "verify_signed_transaction",
    "derive_addresses",
    "wallet_identity",
    "__version__",
]
