"""Constants and types for the hybridcrypt envelope format."""

import base64
from dataclasses import dataclass
from typing import Dict, Optional

from .error import ConfigError


# "HybridMode" in base64, first segment of every hybrid envelope
MARKER: str = "SHlicmlkTW9kZQ=="

# Segment separator; never part of the base64 alphabet
SEPARATOR: str = "$"

# Shared secret length in bytes produced by every supported Kyber level
SHARED_SECRET_LEN: int = 32

# Supported Kyber security levels
KEM_LEVELS = (512, 768, 1024)
DEFAULT_KEM_LEVEL: int = 512

# User ID put on generated OpenPGP keys
KEY_USER_NAME: str = "inxt"
KEY_USER_EMAIL: str = "inxt@inxt.com"


@dataclass
class CodecConfig:
    """Codec configuration."""

    kem_level: int = DEFAULT_KEM_LEVEL

    @classmethod
    def default(cls) -> "CodecConfig":
        """Return the default configuration (Kyber-512)."""
        return cls()

    def validate(self) -> None:
        """Validate the configuration, raises ConfigError if invalid."""
        if isinstance(self.kem_level, bool) or self.kem_level not in KEM_LEVELS:
            raise ConfigError(
                f"kem_level must be one of {KEM_LEVELS}, got {self.kem_level!r}"
            )


@dataclass
class EncapsulationResult:
    """Result of a KEM encapsulation. Never persisted."""

    ciphertext: bytes
    shared_secret: bytes


@dataclass
class KemKeyPair:
    """Post-quantum KEM key pair."""

    public_key: bytes
    private_key: bytes

    def to_base64(self) -> Dict[str, str]:
        """Both keys as base64 text, the form stored next to user keys."""
        return {
            "public_key": base64.b64encode(self.public_key).decode("ascii"),
            "private_key": base64.b64encode(self.private_key).decode("ascii"),
        }


@dataclass
class KeyPair:
    """Classical key pair with an optional KEM key pair attached."""

    public_key: str  # Base64 of the armored public key
    private_key: str  # Armored private key
    kem_public_key: Optional[bytes] = None
    kem_private_key: Optional[bytes] = None
    revocation_certificate: Optional[str] = None  # Base64 of the armored signature

    def with_kem(self, kem_keys: KemKeyPair) -> "KeyPair":
        """Return a copy carrying the given KEM keys."""
        return KeyPair(
            public_key=self.public_key,
            private_key=self.private_key,
            kem_public_key=kem_keys.public_key,
            kem_private_key=kem_keys.private_key,
            revocation_certificate=self.revocation_certificate,
        )
