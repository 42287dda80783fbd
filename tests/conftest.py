"""
Torus Wallet Test Fixtures
"""

import pytest

from torus_wallet.config import WalletConfig
from torus_wallet.core.types import QuantumKeyPair, QuantumWallet
from torus_wallet.crypto.quantum import QuantumEnhancer
from torus_wallet.wallet.manager import QuantumWalletManager
from torus_wallet.wallet.provider import Ed25519WalletProvider

# Valid BIP-39 test vector (all-zero entropy)
TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)
TEST_PASSPHRASE = "torus field passphrase"


class FixedClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: float = 1700000000.0):
        self.now = start

    def __call__(self) -> float:
        current = self.now
        self.now += 1.0
        return current


@pytest.fixture
def config() -> WalletConfig:
    """Configuration with a cheap KDF."""
    return WalletConfig.fast_testing()


@pytest.fixture
def provider(config) -> Ed25519WalletProvider:
    """Base wallet provider using the test configuration."""
    return Ed25519WalletProvider(config)


@pytest.fixture
def manager(config, provider) -> QuantumWalletManager:
    """Wallet manager with a deterministic clock."""
    return QuantumWalletManager(provider=provider, config=config, clock=FixedClock())


@pytest.fixture
def mock_key_pair() -> tuple:
    """Deterministic (public, private) hex strings."""
    public_key = bytes([(i + 100) % 256 for i in range(32)]).hex()
    private_key = bytes([i % 256 for i in range(32)]).hex()
    return public_key, private_key


@pytest.fixture
def quantum_key_pair(mock_key_pair) -> QuantumKeyPair:
    """Quantum key pair derived from the mock key pair."""
    return QuantumEnhancer.enhance(*mock_key_pair)


@pytest.fixture
def recovered_wallet(manager) -> QuantumWallet:
    """Wallet recovered from the BIP-39 test vector."""
    return manager.recover(TEST_MNEMONIC, TEST_PASSPHRASE)


@pytest.fixture
def created_wallet(manager) -> QuantumWallet:
    """Freshly created wallet."""
    return manager.create(TEST_PASSPHRASE, "extra entropy")
