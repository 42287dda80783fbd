"""
Public API Tests
"""

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

import torus_wallet
from torus_wallet import api
from torus_wallet.config import LOGGER_NAMESPACE, WalletConfig
from torus_wallet.errors import InvalidMnemonicError, WalletDecryptionError

from tests.conftest import TEST_MNEMONIC, TEST_PASSPHRASE


@pytest.fixture(autouse=True)
def fast_manager():
    """Bind the module-level API to a cheap KDF for the duration of a test."""
    previous = api.get_manager()
    api.configure(WalletConfig.fast_testing())
    yield api.get_manager()
    api._manager = previous


@pytest.mark.timeout(60)
class TestApi:
    """End-to-end tests through the module-level functions."""

    def test_exports(self):
        for name in ("create_wallet", "recover_wallet", "sign_transaction", "wallet_identity"):
            assert hasattr(torus_wallet, name)

    def test_storage_round_trip(self):
        """Serialized storage decrypts to the same wallet."""
        wallet = torus_wallet.recover_wallet(TEST_MNEMONIC, TEST_PASSPHRASE)
        serialized = torus_wallet.encrypt_wallet_for_storage(wallet, TEST_PASSPHRASE)

        assert set(json.loads(serialized)) == {"base_wallet", "quantum_components"}
        assert torus_wallet.decrypt_wallet_from_storage(serialized, TEST_PASSPHRASE) == wallet

    @pytest.mark.parametrize("serialized", ["", "[]", "{}", '{"base_wallet": 1, "quantum_components": "x"}'])
    def test_malformed_record(self, serialized):
        with pytest.raises(WalletDecryptionError):
            torus_wallet.decrypt_wallet_from_storage(serialized, TEST_PASSPHRASE)

    def test_sign_and_verify(self):
        wallet = torus_wallet.create_wallet(TEST_PASSPHRASE)
        signed = torus_wallet.sign_transaction(wallet, {"to": "0x01", "value": 1})
        assert torus_wallet.verify_signed_transaction(signed, wallet)

    def test_addresses_and_identity(self):
        wallet = torus_wallet.recover_wallet(TEST_MNEMONIC, TEST_PASSPHRASE)
        assert len(torus_wallet.derive_addresses(wallet, 2)) == 2
        assert torus_wallet.wallet_identity(wallet) == torus_wallet.wallet_identity(wallet)

    def test_invalid_mnemonic(self):
        with pytest.raises(InvalidMnemonicError):
            torus_wallet.recover_wallet("abandon " * 12, TEST_PASSPHRASE)

    def test_configure_returns_manager(self):
        manager = api.configure(WalletConfig.fast_testing())
        assert api.get_manager() is manager

    def test_configure_installs_logging(self, tmp_path):
        """install_logging configures the package logger from the LogConfig."""
        config = WalletConfig.fast_testing()
        config.log.file = str(tmp_path / "wallet.log")
        package_logger = logging.getLogger(LOGGER_NAMESPACE)
        before = list(package_logger.handlers)
        level = package_logger.level
        try:
            api.configure(config, install_logging=True)
            assert package_logger.level == logging.DEBUG
            assert any(isinstance(h, RotatingFileHandler) for h in package_logger.handlers)
        finally:
            for handler in list(package_logger.handlers):
                if handler not in before:
                    package_logger.removeHandler(handler)
                    handler.close()
            package_logger.setLevel(level)
