"""
Torus Wallet Constants

All fixed numeric and lexical constants of the harmonic key pipeline live
here as a single immutable table, initialized once at import time.
Changing any value changes every derived key, signature and address.
"""

from typing import Final, Tuple, Union

Number = Union[int, float]

# ==============================================================================
# SACRED RATIOS
# ==============================================================================

PHI: Final[float] = 1.618033988749895              # Golden ratio
PHI_CONJUGATE: Final[float] = 0.618033988749895    # 1 / PHI
SQRT_TWO: Final[float] = 1.4142135623730951
SQRT_THREE: Final[float] = 1.7320508075688772
SQRT_FIVE: Final[float] = 2.23606797749979
PI: Final[float] = 3.141592653589793
E: Final[float] = 2.718281828459045
FIBONACCI_12: Final[int] = 144
FIBONACCI_13: Final[int] = 233

# Order matters: superposition states and seed folding walk this tuple.
SACRED_RATIOS: Final[Tuple[Number, ...]] = (
    PHI,
    PHI_CONJUGATE,
    SQRT_TWO,
    SQRT_THREE,
    SQRT_FIVE,
    PI,
    E,
    FIBONACCI_12,
    FIBONACCI_13,
)


def ratio_at(index: int) -> Number:
    """Sacred ratio at position index, wrapping around the table."""
    return SACRED_RATIOS[index % len(SACRED_RATIOS)]


# ==============================================================================
# HARMONIC TRANSFORM
# ==============================================================================

TORUS_CONSTANT: Final[str] = "TORUS_FIELD_HARMONIC_RESONANCE"

# 12 octaves, one per derivation round
OCTAVES: Final[Tuple[int, ...]] = (
    174, 285, 396, 417, 528, 639, 741, 852, 963, 1074, 1185, 1296,
)

# 3 phase shifts, cycled across rounds
PHASE_SHIFTS: Final[Tuple[float, ...]] = (
    0.3333333333333333,
    0.5,
    0.6666666666666666,
)


def octave_at(index: int) -> int:
    """Octave at position index, wrapping around the table."""
    return OCTAVES[index % len(OCTAVES)]


def phase_at(index: int) -> float:
    """Phase shift at position index, wrapping around the table."""
    return PHASE_SHIFTS[index % len(PHASE_SHIFTS)]


# ==============================================================================
# QUANTUM ENHANCER
# ==============================================================================

ENTANGLEMENT_ROUNDS: Final[int] = 12    # One per octave
SUPERPOSITION_STATES: Final[int] = 3    # One per phase shift
LATTICE_SALT_ROUNDS: Final[int] = 7
SUPERPOSITION_SALT_LENGTH: Final[int] = 16  # Hex chars

# ==============================================================================
# MNEMONIC
# ==============================================================================

MNEMONIC_WORD_COUNT: Final[int] = 12
MNEMONIC_BITS_PER_WORD: Final[int] = 6
MNEMONIC_DOMAIN: Final[bytes] = b"torus-mnemonic-fill"

HARMONIC_VOCABULARY: Final[Tuple[str, ...]] = (
    "aether", "anchor", "apex", "arc", "aurora", "axis", "beacon", "bloom",
    "breath", "bridge", "cadence", "chord", "circle", "comet", "core", "crystal",
    "dawn", "delta", "echo", "ember", "epoch", "field", "flame", "flow",
    "focus", "forge", "glyph", "grace", "harbor", "helix", "horizon", "hymn",
    "ion", "jade", "keystone", "lattice", "light", "lotus", "lumen", "meridian",
    "mirror", "nexus", "nova", "octave", "orbit", "phase", "pillar", "prism",
    "pulse", "quartz", "radiant", "resonance", "ripple", "sage", "seed", "spiral",
    "star", "temple", "tide", "torus", "unity", "vector", "wave", "zenith",
)

# ==============================================================================
# SYMMETRIC CIPHER
# ==============================================================================

AES_KEY_HEX_CHARS: Final[int] = 32      # 16-byte AES-128 key
AES_IV_HEX_CHARS: Final[int] = 16       # 8 bytes, zero-extended
AES_BLOCK_SIZE: Final[int] = 16

# ==============================================================================
# STORAGE
# ==============================================================================

STORAGE_VERSION: Final[int] = 1
STORAGE_KDF: Final[str] = "scrypt"
GCM_NONCE_SIZE: Final[int] = 12
SALT_SIZE: Final[int] = 32

# ==============================================================================
# BASE WALLET
# ==============================================================================

ED25519_SEED_KEY: Final[bytes] = b"ed25519 seed"
ED25519_SIGNATURE_SIZE: Final[int] = 64
ADDRESS_SIZE: Final[int] = 20
DEFAULT_ADDRESS_COUNT: Final[int] = 12
SIGNED_TX_DELIMITER: Final[str] = ":"
