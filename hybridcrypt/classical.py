"""Classical public-key encryption: OpenPGP (Ed25519 primary, Curve25519 ECDH subkey)."""

import base64
import binascii
import logging
from datetime import datetime
from typing import Optional, Protocol

import pgpy
from pgpy.constants import (
    CompressionAlgorithm,
    EllipticCurveOID,
    HashAlgorithm,
    KeyFlags,
    PubKeyAlgorithm,
    SymmetricKeyAlgorithm,
)
from pgpy.errors import PGPError

from .error import DecryptionFailed
from .types import KEY_USER_EMAIL, KEY_USER_NAME, KeyPair

logger = logging.getLogger(__name__)

# Failures raised by pgpy while parsing or decrypting untrusted input
_PGP_ERRORS = (PGPError, ValueError, TypeError, KeyError, IndexError, NotImplementedError)


class ClassicalAsymmetricCipher(Protocol):
    """What the codec needs from a classical public-key cipher."""

    def encrypt(self, plaintext: bytes, public_key: str) -> str:
        ...

    def decrypt(self, ciphertext: str, private_key: str) -> bytes:
        ...


class OpenPGPCipher:
    """
    OpenPGP public-key encryption.

    Public keys travel as base64 of their armor, private keys as plain armor,
    matching the keys already stored for every user. Messages are armored
    PGP messages, so ciphertexts written by other OpenPGP implementations
    decrypt here unchanged.
    """

    @staticmethod
    def generate_keys(date: Optional[datetime] = None) -> KeyPair:
        """
        Generate a new Ed25519/Curve25519 key pair.

        Args:
            date: Creation time of the keys, defaults to now

        Returns:
            KeyPair with the public key and revocation certificate as base64
            of their armor and the armored private key
        """
        key = pgpy.PGPKey.new(PubKeyAlgorithm.EdDSA, EllipticCurveOID.Ed25519, created=date)
        uid = pgpy.PGPUID.new(KEY_USER_NAME, email=KEY_USER_EMAIL)
        key.add_uid(
            uid,
            usage={KeyFlags.Sign, KeyFlags.Certify},
            hashes=[HashAlgorithm.SHA256, HashAlgorithm.SHA512],
            ciphers=[SymmetricKeyAlgorithm.AES256],
            compression=[CompressionAlgorithm.Uncompressed],
        )
        subkey = pgpy.PGPKey.new(PubKeyAlgorithm.ECDH, EllipticCurveOID.Curve25519, created=date)
        key.add_subkey(subkey, usage={KeyFlags.EncryptCommunications, KeyFlags.EncryptStorage})
        revocation = key.revoke(key)
        logger.debug("Generated OpenPGP key %s", key.fingerprint)

        return KeyPair(
            public_key=_b64(str(key.pubkey)),
            private_key=str(key),
            revocation_certificate=_b64(str(revocation)),
        )

    @staticmethod
    def _load_public(public_key: str) -> pgpy.PGPKey:
        try:
            armored = base64.b64decode(public_key, validate=True).decode("ascii")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise DecryptionFailed(f"Invalid public key encoding: {e}") from e
        try:
            key, _ = pgpy.PGPKey.from_blob(armored)
        except _PGP_ERRORS as e:
            raise DecryptionFailed(f"Invalid public key: {e}") from e
        return key if key.is_public else key.pubkey

    @staticmethod
    def _load_private(private_key: str) -> pgpy.PGPKey:
        try:
            key, _ = pgpy.PGPKey.from_blob(private_key)
        except _PGP_ERRORS as e:
            raise DecryptionFailed(f"Invalid private key: {e}") from e
        if key.is_public:
            raise DecryptionFailed("Expected a private key")
        if key.is_protected:
            raise DecryptionFailed("Private key is passphrase protected")
        return key

    def encrypt(self, plaintext: bytes, public_key: str) -> str:
        """
        Encrypt plaintext to the holder of public_key.

        Args:
            plaintext: Data to encrypt
            public_key: Recipient public key, base64 of its armor

        Returns:
            Armored PGP message
        """
        recipient = self._load_public(public_key)
        message = pgpy.PGPMessage.new(bytes(plaintext), compression=CompressionAlgorithm.Uncompressed)
        try:
            encrypted = recipient.encrypt(message)
        except _PGP_ERRORS as e:
            raise DecryptionFailed(f"Encryption failed: {e}") from e
        return str(encrypted)

    def decrypt(self, ciphertext: str, private_key: str) -> bytes:
        """
        Decrypt an armored PGP message.

        Text literals are returned UTF-8 encoded with line endings
        normalized to LF.

        Raises:
            DecryptionFailed: On bad armor, wrong key or tampered data
        """
        key = self._load_private(private_key)
        try:
            message = pgpy.PGPMessage.from_blob(ciphertext)
            if not message.is_encrypted:
                raise DecryptionFailed("Message is not encrypted")
            data = key.decrypt(message).message
        except _PGP_ERRORS as e:
            raise DecryptionFailed(f"Decryption failed: {e}") from e

        if isinstance(data, str):
            return data.replace("\r\n", "\n").encode("utf-8")
        return bytes(data)


def _b64(armored: str) -> str:
    return base64.b64encode(armored.encode("ascii")).decode("ascii")
