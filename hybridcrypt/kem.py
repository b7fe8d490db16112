"""Post-quantum key encapsulation backed by kyber_py."""

import importlib
import logging
import threading
from typing import Protocol

from .error import ConfigError, KemError
from .types import (
    DEFAULT_KEM_LEVEL,
    KEM_LEVELS,
    SHARED_SECRET_LEN,
    EncapsulationResult,
    KemKeyPair,
)

logger = logging.getLogger(__name__)


class KeyEncapsulationProvider(Protocol):
    """What the codec needs from a KEM."""

    shared_secret_size: int

    def keypair(self) -> KemKeyPair:
        ...

    def encapsulate(self, public_key: bytes) -> EncapsulationResult:
        ...

    def decapsulate(self, ciphertext: bytes, private_key: bytes) -> bytes:
        ...


class KyberProvider:
    """
    Kyber KEM (512, 768 or 1024).

    The kyber_py backend is imported on first use, so constructing a
    provider is cheap. One provider can be shared between threads.
    """

    shared_secret_size = SHARED_SECRET_LEN

    def __init__(self, level: int = DEFAULT_KEM_LEVEL):
        if isinstance(level, bool) or level not in KEM_LEVELS:
            raise ConfigError(f"Kyber level must be one of {KEM_LEVELS}, got {level!r}")
        self._level = level
        self._kem = None
        self._lock = threading.Lock()

    @property
    def level(self) -> int:
        return self._level

    def _backend(self):
        with self._lock:
            if self._kem is None:
                module = importlib.import_module("kyber_py.kyber")
                self._kem = getattr(module, f"Kyber{self._level}")
                logger.debug("Kyber%d backend loaded", self._level)
            return self._kem

    def keypair(self) -> KemKeyPair:
        """
        Generate a new Kyber key pair.

        Returns:
            KemKeyPair with raw public and private key bytes
        """
        public_key, private_key = self._backend().keygen()
        logger.debug("Keys: pk=%dB sk=%dB", len(public_key), len(private_key))
        return KemKeyPair(public_key=public_key, private_key=private_key)

    def encapsulate(self, public_key: bytes) -> EncapsulationResult:
        """
        Encapsulate a fresh shared secret to the recipient's public key.

        Raises:
            KemError: If the public key is rejected by the backend
        """
        try:
            shared_secret, ciphertext = self._backend().encaps(bytes(public_key))
        except (ValueError, TypeError, IndexError) as e:
            raise KemError(f"Kyber encapsulation failed: {e}") from e
        logger.debug("Encap: ss=%dB ct=%dB", len(shared_secret), len(ciphertext))
        return EncapsulationResult(ciphertext=ciphertext, shared_secret=shared_secret)

    def decapsulate(self, ciphertext: bytes, private_key: bytes) -> bytes:
        """
        Recover the shared secret from a ciphertext.

        Kyber uses implicit rejection: a wrong but well-formed key yields an
        unrelated secret instead of an error.

        Raises:
            KemError: If the ciphertext or private key is malformed
        """
        try:
            shared_secret = self._backend().decaps(bytes(private_key), bytes(ciphertext))
        except (ValueError, TypeError, IndexError) as e:
            raise KemError(f"Kyber decapsulation failed: {e}") from e
        logger.debug("Decap: ss=%dB", len(shared_secret))
        return shared_secret

    def __repr__(self):
        return f"KyberProvider(Kyber{self._level})"
