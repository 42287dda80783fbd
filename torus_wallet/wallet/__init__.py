"""
Torus Wallet Orchestration
"""

from torus_wallet.wallet.provider import (
    BaseWalletProvider,
    TransactionSigner,
    Ed25519Signer,
    Ed25519WalletProvider,
)
from torus_wallet.wallet.manager import QuantumWalletManager

__all__ = [
    "BaseWalletProvider",
    "TransactionSigner",
    "Ed25519Signer",
    "Ed25519WalletProvider",
    "QuantumWalletManager",
]
