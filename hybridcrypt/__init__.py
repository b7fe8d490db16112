"""
hybridcrypt: Hybrid post-quantum message encryption

Protects short messages (wrapped keys, share-link secrets) for a recipient
with a classical public key and, optionally, a Kyber public key.

Features:
- Kyber KEM shared secret expanded with the BLAKE3 XOF into a one-time mask
- Masked message encrypted with OpenPGP (Ed25519 + Curve25519 ECDH)
- Self-describing envelope: "SHlicmlkTW9kZQ==$<kem ct>$<classical ct>"
- Classical-only envelopes stay readable through the same decrypt path

Breaking the classical cipher alone is not enough to read a hybrid message
while the KEM remains secure.
"""

from .types import (
    MARKER,
    SEPARATOR,
    SHARED_SECRET_LEN,
    KEM_LEVELS,
    DEFAULT_KEM_LEVEL,
    CodecConfig,
    EncapsulationResult,
    KemKeyPair,
    KeyPair,
)
from .crypto import xor_hex
from .kdf import expand_secret
from .kem import KeyEncapsulationProvider, KyberProvider
from .classical import ClassicalAsymmetricCipher, OpenPGPCipher
from .envelope import Envelope, EnvelopeMode, frame_hybrid, frame_legacy, parse_envelope
from .codec import HybridEncryptionCodec
from .error import (
    HybridCryptError,
    MissingKemKeyError,
    LengthMismatchError,
    CryptoFailure,
    KemError,
    DecryptionFailed,
    MalformedEnvelopeError,
    ConfigError,
)

__version__ = "0.1.0"
__all__ = [
    # Constants
    "MARKER",
    "SEPARATOR",
    "SHARED_SECRET_LEN",
    "KEM_LEVELS",
    "DEFAULT_KEM_LEVEL",
    # Types
    "CodecConfig",
    "EncapsulationResult",
    "KemKeyPair",
    "KeyPair",
    # Primitives
    "xor_hex",
    "expand_secret",
    # Collaborators
    "KeyEncapsulationProvider",
    "KyberProvider",
    "ClassicalAsymmetricCipher",
    "OpenPGPCipher",
    # Envelope
    "Envelope",
    "EnvelopeMode",
    "frame_hybrid",
    "frame_legacy",
    "parse_envelope",
    # Codec
    "HybridEncryptionCodec",
    # Errors
    "HybridCryptError",
    "MissingKemKeyError",
    "LengthMismatchError",
    "CryptoFailure",
    "KemError",
    "DecryptionFailed",
    "MalformedEnvelopeError",
    "ConfigError",
]
