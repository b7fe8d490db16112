"""hybridcrypt Demo - hybrid Kyber + OpenPGP message encryption."""

import logging

from .classical import OpenPGPCipher
from .codec import HybridEncryptionCodec
from .envelope import parse_envelope
from .error import MissingKemKeyError
from .types import CodecConfig


def main():
    """Run the hybridcrypt demo."""
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    print("=== hybridcrypt Demo (Python) ===\n")

    codec = HybridEncryptionCodec.from_config(CodecConfig.default())

    print("Generating OpenPGP key pair...")
    keys = OpenPGPCipher.generate_keys()

    print("Generating Kyber512 key pair...")
    keys = keys.with_kem(codec.generate_kem_keys())
    print(f"  Kyber public key size: {len(keys.kem_public_key)} bytes")

    print("\n--- Legacy (classical only) ---")
    plaintext = "hello world"
    envelope = codec.encrypt(plaintext, keys.public_key)
    print(f"  Envelope: {envelope[:40]}...")
    decrypted = codec.decrypt(envelope, keys.private_key)
    print(f"Decrypted: \"{decrypted}\"")
    assert decrypted == plaintext

    print("\n--- Hybrid (Kyber + classical) ---")
    messages = [
        "hello world",
        "Harvest now, decrypt never!",
        "Ünïcödé survives the mask ✓",
    ]

    for i, plaintext in enumerate(messages):
        print(f"\nEncrypting: \"{plaintext}\"")
        envelope = codec.encrypt(plaintext, keys.public_key, keys.kem_public_key)
        parsed = parse_envelope(envelope)
        print(f"  Mode: {parsed.mode.value}")
        print(f"  KEM ciphertext: {parsed.kem_ciphertext[:40]}...")
        print(f"  Classical ciphertext: {parsed.classical_ciphertext[:40]}...")

        decrypted = codec.decrypt(envelope, keys.private_key, keys.kem_private_key)
        print(f"Decrypted: \"{decrypted}\"")

        assert decrypted == plaintext, f"Message {i} mismatch!"

    print("\n--- Missing Kyber key ---")
    try:
        codec.decrypt(envelope, keys.private_key)
    except MissingKemKeyError as e:
        print(f"✓ Refused: {e}")

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
