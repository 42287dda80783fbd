"""
Torus Wallet Public API

Module-level entry points bound to a default QuantumWalletManager. Use
configure() to swap in a different provider, signer or configuration.
Storage functions work on the serialized JSON form of the record.
"""

from typing import List, Optional

from torus_wallet.config import WalletConfig, setup_logging
from torus_wallet.core.types import EncryptedWalletRecord, QuantumWallet
from torus_wallet.errors import WalletDecryptionError
from torus_wallet.wallet.manager import QuantumWalletManager
from torus_wallet.wallet.provider import BaseWalletProvider, Transaction, TransactionSigner

_manager = QuantumWalletManager()


def configure(
    config: Optional[WalletConfig] = None,
    provider: Optional[BaseWalletProvider] = None,
    signer: Optional[TransactionSigner] = None,
    install_logging: bool = False,
) -> QuantumWalletManager:
    """
    Replace the default manager. Returns the new manager.

    With install_logging, the package logger is also configured from the
    manager's LogConfig.
    """
    global _manager
    _manager = QuantumWalletManager(provider=provider, signer=signer, config=config)
    if install_logging:
        setup_logging(_manager.config.log)
    return _manager


def get_manager() -> QuantumWalletManager:
    """Current default manager."""
    return _manager


def create_wallet(passphrase: str, additional_entropy: str = "") -> QuantumWallet:
    return _manager.create(passphrase, additional_entropy)


def recover_wallet(mnemonic: str, passphrase: str) -> QuantumWallet:
    return _manager.recover(mnemonic, passphrase)


def encrypt_wallet_for_storage(wallet: QuantumWallet, passphrase: str) -> str:
    return _manager.encrypt_for_storage(wallet, passphrase).to_json()


def decrypt_wallet_from_storage(serialized: str, passphrase: str) -> QuantumWallet:
    """
    Decrypt a serialized EncryptedWalletRecord.

    Raises:
        WalletDecryptionError: If the record is malformed or cannot be decrypted
        QuantumIntegrityError: If the decrypted key pair fails verification
    """
    try:
        record = EncryptedWalletRecord.from_json(serialized)
    except (ValueError, TypeError) as e:
        raise WalletDecryptionError("Encrypted wallet record is malformed") from e

    return _manager.decrypt_from_storage(record, passphrase)


def sign_transaction(wallet: QuantumWallet, transaction: Transaction) -> str:
    return _manager.sign_transaction(wallet, transaction)


def verify_signed_transaction(signed_transaction: str, wallet: QuantumWallet) -> bool:
    return _manager.verify_signed_transaction(signed_transaction, wallet)


def derive_addresses(wallet: QuantumWallet, count: Optional[int] = None) -> List[str]:
    return _manager.derive_addresses(wallet, count)


def wallet_identity(wallet: QuantumWallet) -> str:
    return _manager.identity(wallet)
