"""hybridcrypt error types."""


class HybridCryptError(Exception):
    """Base exception for hybridcrypt errors."""
    pass


class MissingKemKeyError(HybridCryptError):
    """Hybrid envelope received but no KEM private key supplied."""
    pass


class LengthMismatchError(HybridCryptError, ValueError):
    """XOR operands have different lengths."""
    pass


class CryptoFailure(HybridCryptError):
    """An underlying KEM or classical cipher operation failed."""
    pass


class KemError(CryptoFailure):
    """KEM operation error."""
    pass


class DecryptionFailed(CryptoFailure):
    """Classical decryption failed."""
    pass


class MalformedEnvelopeError(HybridCryptError):
    """Envelope could not be parsed."""
    pass


class ConfigError(HybridCryptError):
    """Configuration error."""
    pass
