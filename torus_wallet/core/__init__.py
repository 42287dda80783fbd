"""
Torus Wallet Core Data Structures
"""

from torus_wallet.core.types import (
    KeyPair,
    QuantumKeyPair,
    BaseWallet,
    QuantumWallet,
    EncryptedWalletRecord,
)

__all__ = [
    "KeyPair",
    "QuantumKeyPair",
    "BaseWallet",
    "QuantumWallet",
    "EncryptedWalletRecord",
]
