"""
Torus Wallet Exceptions

Low-level primitives signal failure through return values (empty string,
False). Orchestration-level operations raise the typed errors below.
Messages never carry passphrases, mnemonics or key material.
"""


class WalletError(Exception):
    """Base wallet error."""
    pass


class InvalidMnemonicError(WalletError):
    """Mnemonic has the wrong word count or contains an unknown word."""
    pass


class WalletRecoveryError(WalletError):
    """Base wallet provider rejected the mnemonic or passphrase."""
    pass


class WalletDecryptionError(WalletError):
    """Stored wallet blob is malformed or the passphrase is wrong."""
    pass


class QuantumIntegrityError(WalletError):
    """Decrypted quantum key pair failed integrity verification."""
    pass
