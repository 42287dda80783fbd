"""
Torus Wallet Data Types

All records are immutable and created on demand; nothing here is cached
or persisted by the library itself. Secret fields are excluded from repr.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import json
from typing import Optional, Tuple


@dataclass(frozen=True)
class KeyPair:
    """
    Public/private key pair as opaque hex strings.

    Owned exclusively by the wallet record that contains it.
    """
    public_key: str
    private_key: str = field(repr=False)


@dataclass(frozen=True)
class QuantumKeyPair(KeyPair):
    """
    Key pair extended with deterministic derived material.

    All four derived fields are pure functions of (public_key, private_key).
    """
    quantum_fingerprint: str
    entanglement_hash: str
    superposition_states: Tuple[str, ...]
    lattice_salt: str

    def public_components(self) -> dict:
        """Serializable projection without the private key."""
        return {
            "public_key": self.public_key,
            "quantum_fingerprint": self.quantum_fingerprint,
            "entanglement_hash": self.entanglement_hash,
            "superposition_states": list(self.superposition_states),
            "lattice_salt": self.lattice_salt,
        }

    @classmethod
    def from_public_components(cls, data: dict, private_key: str) -> QuantumKeyPair:
        """Rebuild a full key pair from public components and a known private key."""
        return cls(
            public_key=data["public_key"],
            private_key=private_key,
            quantum_fingerprint=data["quantum_fingerprint"],
            entanglement_hash=data["entanglement_hash"],
            superposition_states=tuple(data["superposition_states"]),
            lattice_salt=data["lattice_salt"],
        )


@dataclass(frozen=True)
class BaseWallet:
    """Wallet produced by the base wallet provider."""
    public_key: str
    private_key: str = field(repr=False)
    address: str = ""
    mnemonic: Optional[str] = field(default=None, repr=False)

    @property
    def key_pair(self) -> KeyPair:
        return KeyPair(public_key=self.public_key, private_key=self.private_key)


@dataclass(frozen=True)
class QuantumWallet:
    """Base wallet composed with its quantum-enhanced material."""
    base_wallet: BaseWallet
    quantum_key_pair: QuantumKeyPair
    quantum_seed: str = field(repr=False)
    entropy_signature: str
    entanglement_proof: str

    @property
    def address(self) -> str:
        """Primary address of the base wallet."""
        return self.base_wallet.address


@dataclass(frozen=True)
class EncryptedWalletRecord:
    """
    Storage form of a QuantumWallet.

    SERIALIZATION: JSON object with two string fields
    """
    base_wallet: str
    quantum_components: str

    def to_json(self) -> str:
        return json.dumps({
            "base_wallet": self.base_wallet,
            "quantum_components": self.quantum_components,
        })

    @classmethod
    def from_json(cls, data: str) -> EncryptedWalletRecord:
        """
        Parse a serialized record.

        Raises:
            ValueError: If data is not a JSON object with both string fields
        """
        parsed = json.loads(data)
        if not isinstance(parsed, dict):
            raise ValueError("Encrypted wallet record must be a JSON object")

        base_wallet = parsed.get("base_wallet")
        quantum_components = parsed.get("quantum_components")
        if not isinstance(base_wallet, str) or not isinstance(quantum_components, str):
            raise ValueError("Encrypted wallet record is missing fields")

        return cls(base_wallet=base_wallet, quantum_components=quantum_components)
