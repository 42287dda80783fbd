"""
Torus Wallet Configuration
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, asdict
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from torus_wallet.constants import (
    DEFAULT_ADDRESS_COUNT,
    GCM_NONCE_SIZE,
    SALT_SIZE,
)

logger = logging.getLogger(__name__)

LOGGER_NAMESPACE = "torus_wallet"

VALID_MNEMONIC_STRENGTHS = (128, 160, 192, 224, 256)


@dataclass
class KdfConfig:
    """Scrypt parameters for sealing base wallet secrets."""
    n: int = 2**15
    r: int = 8
    p: int = 1
    length: int = 32
    salt_size: int = SALT_SIZE
    nonce_size: int = GCM_NONCE_SIZE


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    max_size_mb: int = 50
    backup_count: int = 5


@dataclass
class WalletConfig:
    """
    Complete wallet configuration.

    The scrypt cost in `kdf` must match between sealing and unsealing a
    stored wallet; changing it makes older blobs unreadable.
    """
    language: str = "english"
    mnemonic_strength: int = 128
    default_address_count: int = DEFAULT_ADDRESS_COUNT

    kdf: KdfConfig = field(default_factory=KdfConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.mnemonic_strength not in VALID_MNEMONIC_STRENGTHS:
            errors.append(f"Invalid mnemonic strength: {self.mnemonic_strength}")

        if self.default_address_count < 0:
            errors.append("default_address_count cannot be negative")

        # Scrypt requires N to be a power of two greater than 1
        if self.kdf.n < 2 or (self.kdf.n & (self.kdf.n - 1)) != 0:
            errors.append(f"Scrypt n must be a power of 2 greater than 1: {self.kdf.n}")

        if self.kdf.r < 1 or self.kdf.p < 1:
            errors.append("Scrypt r and p must be at least 1")

        if self.kdf.length not in (16, 24, 32):
            errors.append(f"Invalid AES key length: {self.kdf.length}")

        if self.kdf.nonce_size < 8:
            errors.append("nonce_size must be at least 8")

        if self.log.level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Invalid log level: {self.log.level}")

        return errors

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "WalletConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        config = cls(
            language=data.get("language", "english"),
            mnemonic_strength=data.get("mnemonic_strength", 128),
            default_address_count=data.get("default_address_count", DEFAULT_ADDRESS_COUNT),
        )

        if "kdf" in data:
            config.kdf = KdfConfig(**data["kdf"])

        if "log" in data:
            config.log = LogConfig(**data["log"])

        logger.info(f"Configuration loaded from {path}")
        return config

    @classmethod
    def default(cls) -> "WalletConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def fast_testing(cls) -> "WalletConfig":
        """Create configuration with a cheap KDF. Never use for real funds."""
        config = cls()
        config.kdf.n = 2**10
        config.log.level = "DEBUG"
        return config

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "language": self.language,
            "mnemonic_strength": self.mnemonic_strength,
            "default_address_count": self.default_address_count,
            "kdf": asdict(self.kdf),
            "log": asdict(self.log),
        }


def setup_logging(config: LogConfig) -> logging.Logger:
    """
    Attach handlers to the torus_wallet logger namespace.

    The root logger is left untouched. Handlers installed by an earlier
    call are closed and replaced.

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    for handler in list(package_logger.handlers):
        if getattr(handler, "_torus_wallet", False):
            package_logger.removeHandler(handler)
            handler.close()

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if config.file:
        handlers.append(RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        ))

    formatter = logging.Formatter(config.format)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._torus_wallet = True
        package_logger.addHandler(handler)

    return package_logger
