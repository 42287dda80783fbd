"""
Quantum Wallet Manager Tests
"""

import dataclasses
import json

import pytest

from torus_wallet.core.types import BaseWallet, EncryptedWalletRecord
from torus_wallet.crypto.quantum import QuantumEnhancer
from torus_wallet.errors import (
    InvalidMnemonicError,
    QuantumIntegrityError,
    WalletDecryptionError,
    WalletRecoveryError,
)
from torus_wallet.wallet.manager import QuantumWalletManager
from torus_wallet.wallet.provider import Ed25519Signer

from tests.conftest import FixedClock, TEST_MNEMONIC, TEST_PASSPHRASE

FIXED_PRIVATE_KEY = "07" * 32


class StaticProvider:
    """Provider that always returns the same base wallet."""

    def __init__(self):
        self.wallet = BaseWallet(
            public_key=Ed25519Signer.public_key(FIXED_PRIVATE_KEY),
            private_key=FIXED_PRIVATE_KEY,
            address=Ed25519Signer.derive_address(FIXED_PRIVATE_KEY),
        )

    def create_wallet(self, passphrase):
        return self.wallet

    def recover_from_mnemonic(self, mnemonic, passphrase):
        return self.wallet

    def encrypt_for_storage(self, wallet, passphrase):
        return "unused"

    def decrypt_from_storage(self, blob, passphrase):
        return self.wallet


class FailingProvider(StaticProvider):
    """Provider whose recovery fails with a generic error."""

    def recover_from_mnemonic(self, mnemonic, passphrase):
        raise ValueError("backend unavailable")


class TestCreate:
    """Tests for wallet creation."""

    def test_not_deterministic(self, config):
        """Identical inputs at different times give different seeds."""
        manager = QuantumWalletManager(provider=StaticProvider(), config=config, clock=FixedClock())
        first = manager.create(TEST_PASSPHRASE, "entropy")
        second = manager.create(TEST_PASSPHRASE, "entropy")
        assert first.quantum_seed != second.quantum_seed
        assert first.entropy_signature != second.entropy_signature
        assert first.quantum_key_pair == second.quantum_key_pair

    def test_same_instant_same_seed(self, config):
        """Seed depends only on inputs and the time nonce."""
        first = QuantumWalletManager(provider=StaticProvider(), config=config, clock=lambda: 1.5)
        second = QuantumWalletManager(provider=StaticProvider(), config=config, clock=lambda: 1.5)
        assert first.create("pass").quantum_seed == second.create("pass").quantum_seed

    def test_created_wallet_is_consistent(self, manager, created_wallet):
        """Created wallet passes its own integrity checks."""
        assert manager.verify_wallet(created_wallet)
        assert manager.verify_entropy_signature(created_wallet)
        assert created_wallet.address == created_wallet.base_wallet.address
        assert created_wallet.base_wallet.mnemonic


class TestRecover:
    """Tests for mnemonic recovery."""

    def test_deterministic(self, config):
        """Same mnemonic and passphrase give identical wallets."""
        first = QuantumWalletManager(config=config).recover(TEST_MNEMONIC, TEST_PASSPHRASE)
        second = QuantumWalletManager(config=config).recover(TEST_MNEMONIC, TEST_PASSPHRASE)
        assert first == second

    def test_seed_from_passphrase_and_key(self, recovered_wallet):
        """Recovered seed is derived from passphrase and private key."""
        expected = QuantumEnhancer.derive_seed(TEST_PASSPHRASE + recovered_wallet.base_wallet.private_key)
        assert recovered_wallet.quantum_seed == expected

    def test_created_then_recovered(self, manager, created_wallet):
        """Recovery reproduces the key material but not the creation seed."""
        recovered = manager.recover(created_wallet.base_wallet.mnemonic, TEST_PASSPHRASE)
        assert recovered.base_wallet == created_wallet.base_wallet
        assert recovered.quantum_key_pair == created_wallet.quantum_key_pair
        assert recovered.quantum_seed != created_wallet.quantum_seed

    def test_invalid_mnemonic(self, manager):
        """Invalid mnemonic propagates InvalidMnemonicError."""
        with pytest.raises(InvalidMnemonicError):
            manager.recover("not a real mnemonic phrase", TEST_PASSPHRASE)

    def test_provider_failure(self, config):
        """Generic provider failures become WalletRecoveryError."""
        manager = QuantumWalletManager(provider=FailingProvider(), config=config)
        with pytest.raises(WalletRecoveryError) as exc_info:
            manager.recover(TEST_MNEMONIC, TEST_PASSPHRASE)
        assert isinstance(exc_info.value.__cause__, ValueError)


@pytest.mark.timeout(60)
class TestStorage:
    """Tests for encrypted storage."""

    def test_round_trip(self, manager, recovered_wallet):
        """Decrypting a stored recovered wallet gives the same wallet."""
        record = manager.encrypt_for_storage(recovered_wallet, TEST_PASSPHRASE)
        restored = manager.decrypt_from_storage(record, TEST_PASSPHRASE)
        assert restored == recovered_wallet

    def test_round_trip_created(self, manager, created_wallet):
        """Stored created wallet keeps its key material; the seed is recomputed."""
        record = manager.encrypt_for_storage(created_wallet, TEST_PASSPHRASE)
        restored = manager.decrypt_from_storage(record, TEST_PASSPHRASE)

        assert restored.quantum_key_pair.quantum_fingerprint == created_wallet.quantum_key_pair.quantum_fingerprint
        assert restored.quantum_key_pair.entanglement_hash == created_wallet.quantum_key_pair.entanglement_hash
        assert restored.address == created_wallet.address
        assert restored.entanglement_proof == created_wallet.entanglement_proof
        assert restored.quantum_seed != created_wallet.quantum_seed
        assert manager.verify_wallet(restored)
        assert not manager.verify_entropy_signature(restored)

    def test_record_hides_private_key(self, manager, recovered_wallet):
        """Serialized record contains neither private key nor mnemonic."""
        serialized = manager.encrypt_for_storage(recovered_wallet, TEST_PASSPHRASE).to_json()
        assert recovered_wallet.base_wallet.private_key not in serialized
        assert "abandon" not in serialized
        assert set(json.loads(serialized)) == {"base_wallet", "quantum_components"}

    def test_json_round_trip(self, manager, recovered_wallet):
        """Record survives JSON serialization."""
        record = manager.encrypt_for_storage(recovered_wallet, TEST_PASSPHRASE)
        parsed = EncryptedWalletRecord.from_json(record.to_json())
        assert manager.decrypt_from_storage(parsed, TEST_PASSPHRASE) == recovered_wallet

    def test_wrong_passphrase(self, manager, recovered_wallet):
        """Wrong passphrase raises WalletDecryptionError."""
        record = manager.encrypt_for_storage(recovered_wallet, TEST_PASSPHRASE)
        with pytest.raises(WalletDecryptionError):
            manager.decrypt_from_storage(record, "wrong passphrase")

    def test_malformed_base(self, manager):
        """Garbage base wallet blob raises WalletDecryptionError."""
        record = EncryptedWalletRecord(base_wallet="garbage", quantum_components="garbage")
        with pytest.raises(WalletDecryptionError):
            manager.decrypt_from_storage(record, TEST_PASSPHRASE)

    def test_corrupted_components(self, manager, recovered_wallet):
        """Undecryptable quantum components raise WalletDecryptionError."""
        record = manager.encrypt_for_storage(recovered_wallet, TEST_PASSPHRASE)
        corrupted = dataclasses.replace(record, quantum_components="AAAA" + record.quantum_components)
        with pytest.raises(WalletDecryptionError):
            manager.decrypt_from_storage(corrupted, TEST_PASSPHRASE)

    def test_missing_component(self, manager, recovered_wallet):
        """Components without a required field raise WalletDecryptionError."""
        record = manager.encrypt_for_storage(recovered_wallet, TEST_PASSPHRASE)
        components = json.dumps({"entropy_signature": recovered_wallet.entropy_signature})
        broken = dataclasses.replace(
            record,
            quantum_components=QuantumEnhancer.encrypt(components, recovered_wallet.quantum_key_pair),
        )
        with pytest.raises(WalletDecryptionError):
            manager.decrypt_from_storage(broken, TEST_PASSPHRASE)

    def test_tampered_fingerprint(self, manager, recovered_wallet):
        """Decrypted key pair failing verification raises QuantumIntegrityError."""
        record = manager.encrypt_for_storage(recovered_wallet, TEST_PASSPHRASE)
        qkp = recovered_wallet.quantum_key_pair.public_components()
        qkp["quantum_fingerprint"] = "0" * 64
        components = json.dumps({
            "quantum_key_pair": qkp,
            "entropy_signature": recovered_wallet.entropy_signature,
            "entanglement_proof": recovered_wallet.entanglement_proof,
        })
        tampered = dataclasses.replace(
            record,
            quantum_components=QuantumEnhancer.encrypt(components, recovered_wallet.quantum_key_pair),
        )
        with pytest.raises(QuantumIntegrityError):
            manager.decrypt_from_storage(tampered, TEST_PASSPHRASE)


class TestTransactions:
    """Tests for dual transaction signatures."""

    TX = {"to": "0x" + "ab" * 20, "value": 1000, "nonce": 3}

    def test_sign_verify(self, manager, recovered_wallet):
        """Signed transaction verifies."""
        signed = manager.sign_transaction(recovered_wallet, self.TX)
        assert signed.count(":") == 1
        assert manager.verify_signed_transaction(signed, recovered_wallet)

    def test_standard_half_verifies(self, manager, recovered_wallet):
        """Standard half is a valid Ed25519 signed transaction."""
        standard, _, _ = manager.sign_transaction(recovered_wallet, self.TX).partition(":")
        assert Ed25519Signer.verify_transaction(recovered_wallet.base_wallet.public_key, standard)
        assert Ed25519Signer.decode_transaction(standard) == self.TX

    def test_tampered_standard(self, manager, recovered_wallet):
        """Changed standard half fails."""
        standard, _, quantum = manager.sign_transaction(recovered_wallet, self.TX).partition(":")
        altered = standard[:-1] + ("0" if standard[-1] != "0" else "1")
        assert not manager.verify_signed_transaction(altered + ":" + quantum, recovered_wallet)

    def test_tampered_quantum(self, manager, recovered_wallet):
        """Changed quantum half fails."""
        standard, _, quantum = manager.sign_transaction(recovered_wallet, self.TX).partition(":")
        altered = ("0" if quantum[0] != "0" else "1") + quantum[1:]
        assert not manager.verify_signed_transaction(standard + ":" + altered, recovered_wallet)

    @pytest.mark.parametrize("signed", ["", "no delimiter", ":", "abc:", ":abc", None, 42])
    def test_malformed(self, manager, recovered_wallet, signed):
        """Malformed inputs return False instead of raising."""
        assert not manager.verify_signed_transaction(signed, recovered_wallet)

    def test_other_wallet(self, manager, recovered_wallet, created_wallet):
        """Signature from another wallet fails."""
        signed = manager.sign_transaction(created_wallet, self.TX)
        assert not manager.verify_signed_transaction(signed, recovered_wallet)


class TestAddresses:
    """Tests for derived addresses."""

    def test_default_count(self, manager, recovered_wallet, config):
        """Default count comes from configuration."""
        addresses = manager.derive_addresses(recovered_wallet)
        assert len(addresses) == config.default_address_count
        assert len(set(addresses)) == len(addresses)

    def test_deterministic(self, manager, recovered_wallet):
        """Same wallet gives the same addresses in the same order."""
        assert manager.derive_addresses(recovered_wallet, 5) == manager.derive_addresses(recovered_wallet, 5)

    def test_prefix_stable(self, manager, recovered_wallet):
        """Asking for more addresses extends the list."""
        assert manager.derive_addresses(recovered_wallet, 8)[:3] == manager.derive_addresses(recovered_wallet, 3)

    def test_format(self, manager, recovered_wallet):
        """Addresses are 0x-prefixed 20-byte hex."""
        for address in manager.derive_addresses(recovered_wallet, 3):
            assert address.startswith("0x")
            assert len(address) == 42
            assert address != recovered_wallet.address

    def test_zero(self, manager, recovered_wallet):
        """Count of zero gives an empty list."""
        assert manager.derive_addresses(recovered_wallet, 0) == []

    def test_negative(self, manager, recovered_wallet):
        """Negative count gives an empty list."""
        assert manager.derive_addresses(recovered_wallet, -1) == []


class TestIdentity:
    """Tests for wallet identity and integrity."""

    def test_identity_format(self, recovered_wallet):
        """Identity is 0x-prefixed Keccak-256 hex."""
        identity = QuantumWalletManager.identity(recovered_wallet)
        assert identity.startswith("0x")
        assert len(identity) == 66

    def test_identity_deterministic(self, manager, recovered_wallet):
        """Recovering again gives the same identity."""
        again = manager.recover(TEST_MNEMONIC, TEST_PASSPHRASE)
        assert manager.identity(again) == manager.identity(recovered_wallet)

    def test_identity_distinct(self, manager, recovered_wallet, created_wallet):
        """Different wallets have different identities."""
        assert manager.identity(recovered_wallet) != manager.identity(created_wallet)

    def test_tampered_proof(self, manager, recovered_wallet):
        """Altered entanglement proof fails wallet verification."""
        tampered = dataclasses.replace(recovered_wallet, entanglement_proof="0x" + "00" * 32)
        assert not manager.verify_wallet(tampered)

    def test_tampered_seed(self, manager, recovered_wallet):
        """Entropy signature no longer matches a replaced seed."""
        tampered = dataclasses.replace(recovered_wallet, quantum_seed="0" * 64)
        assert manager.verify_wallet(tampered)
        assert not manager.verify_entropy_signature(tampered)
