"""Hybrid (Kyber + classical) message encryption."""

import base64
import binascii
from typing import Optional, Union

from .classical import ClassicalAsymmetricCipher, OpenPGPCipher
from .crypto import xor_hex
from .envelope import frame_hybrid, frame_legacy, parse_envelope
from .error import CryptoFailure, DecryptionFailed, KemError, MissingKemKeyError
from .kdf import expand_secret
from .kem import KeyEncapsulationProvider, KyberProvider
from .types import CodecConfig, EncapsulationResult, KemKeyPair

KemKey = Union[bytes, str]


def _kem_key_bytes(key: KemKey, what: str) -> bytes:
    """KEM keys are accepted raw or as base64 text."""
    if isinstance(key, str):
        try:
            return base64.b64decode(key, validate=True)
        except binascii.Error as e:
            raise KemError(f"Invalid base64 {what}: {e}") from e
    return bytes(key)


def _keystream(shared_secret: bytes, bits: int) -> str:
    # An empty message masks with an empty keystream
    return expand_secret(shared_secret, bits) if bits else ""


class HybridEncryptionCodec:
    """
    Encrypts messages with a classical cipher, optionally hardened by a KEM.

    With a KEM public key the message is XOR-masked with a keystream expanded
    from a Kyber shared secret before classical encryption, so recovering it
    requires breaking both schemes. Without one, the output is a plain
    classical ciphertext, readable by older clients.

    The codec holds no mutable state and may be shared between threads.
    """

    def __init__(
        self,
        kem: Optional[KeyEncapsulationProvider] = None,
        cipher: Optional[ClassicalAsymmetricCipher] = None,
    ):
        self._kem = kem if kem is not None else KyberProvider()
        self._cipher = cipher if cipher is not None else OpenPGPCipher()

    @classmethod
    def from_config(cls, config: CodecConfig) -> "HybridEncryptionCodec":
        config.validate()
        return cls(kem=KyberProvider(config.kem_level), cipher=OpenPGPCipher())

    @property
    def kem(self) -> KeyEncapsulationProvider:
        return self._kem

    @property
    def cipher(self) -> ClassicalAsymmetricCipher:
        return self._cipher

    def generate_kem_keys(self) -> KemKeyPair:
        return self._kem.keypair()

    def encapsulate(self, kem_public_key: KemKey) -> EncapsulationResult:
        return self._kem.encapsulate(_kem_key_bytes(kem_public_key, "KEM public key"))

    def decapsulate(self, kem_ciphertext: bytes, kem_private_key: KemKey) -> bytes:
        return self._kem.decapsulate(
            kem_ciphertext, _kem_key_bytes(kem_private_key, "KEM private key")
        )

    def encrypt(
        self,
        message: str,
        public_key: str,
        kem_public_key: Optional[KemKey] = None,
    ) -> str:
        """
        Encrypt a message for a recipient.

        Args:
            message: Text to encrypt
            public_key: Recipient classical public key
            kem_public_key: Recipient Kyber public key, raw or base64. When
                absent or empty the legacy classical-only envelope is produced.

        Returns:
            Envelope string, hybrid or legacy
        """
        data = message.encode("utf-8")

        if not kem_public_key:
            return str(frame_legacy(self._armored_bytes(self._cipher.encrypt(data, public_key))))

        encapsulated = self.encapsulate(kem_public_key)
        keystream = _keystream(encapsulated.shared_secret, len(data) * 8)
        masked = xor_hex(data.hex(), keystream)

        classical = self._cipher.encrypt(masked.encode("ascii"), public_key)
        return str(frame_hybrid(encapsulated.ciphertext, self._armored_bytes(classical)))

    def decrypt(
        self,
        envelope: str,
        private_key: str,
        kem_private_key: Optional[KemKey] = None,
    ) -> str:
        """
        Decrypt an envelope produced by encrypt() or by the classical cipher.

        Raises:
            MissingKemKeyError: Hybrid envelope and no KEM private key
            MalformedEnvelopeError: Envelope cannot be parsed
            CryptoFailure: Any KEM or classical failure, or unmasked data
                that is not UTF-8

        A wrong KEM private key is only caught when the unmasked bytes fail
        UTF-8 decoding. Kyber's implicit rejection hands back an unrelated
        secret and the mask is not authenticated, so for short messages a
        wrong key often returns garbage text instead of raising.
        """
        parsed = parse_envelope(envelope)

        if not parsed.is_hybrid:
            plaintext = self._classical_decrypt(parsed.classical_ciphertext_bytes(), private_key)
            return self._utf8(plaintext)

        if not kem_private_key:
            raise MissingKemKeyError("Attempted to decrypt hybrid ciphertext without Kyber key")

        shared_secret = self.decapsulate(parsed.kem_ciphertext_bytes(), kem_private_key)
        masked_plaintext = self._classical_decrypt(parsed.classical_ciphertext_bytes(), private_key)

        try:
            masked = masked_plaintext.decode("ascii")
        except UnicodeDecodeError as e:
            raise DecryptionFailed("Masked payload is not hex text") from e
        if len(masked) % 2:
            raise DecryptionFailed("Masked payload has an odd number of hex digits")

        # Two hex digits per message byte, so hex length * 4 == byte length * 8
        keystream = _keystream(shared_secret, len(masked) * 4)
        try:
            unmasked = bytes.fromhex(xor_hex(masked, keystream))
        except ValueError as e:
            raise DecryptionFailed(f"Masked payload is not hex text: {e}") from e
        return self._utf8(unmasked)

    def _classical_decrypt(self, armored: bytes, private_key: str) -> bytes:
        try:
            text = armored.decode("ascii")
        except UnicodeDecodeError as e:
            raise DecryptionFailed("Classical ciphertext is not ASCII armored") from e
        return self._cipher.decrypt(text, private_key)

    @staticmethod
    def _armored_bytes(armored: str) -> bytes:
        return armored.encode("ascii")

    @staticmethod
    def _utf8(data: bytes) -> str:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CryptoFailure("Decrypted data is not valid UTF-8, wrong key?") from e
