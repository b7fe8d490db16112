"""Secret expansion with the BLAKE3 XOF."""

from blake3 import blake3


def expand_secret(secret: bytes, output_bits: int) -> str:
    """
    Expand a secret into a keystream of the requested bit length.

    BLAKE3 is used in extendable-output mode, so any length can be requested
    and ``expand_secret(s, n)`` is always a prefix of ``expand_secret(s, m)``
    for ``m > n``.

    Args:
        secret: Input keying material (typically a 32-byte KEM shared secret)
        output_bits: Keystream length in bits, positive multiple of 8

    Returns:
        Keystream as lowercase hex, ``output_bits // 4`` characters

    Raises:
        ValueError: If output_bits is not a positive multiple of 8
    """
    if isinstance(output_bits, bool) or not isinstance(output_bits, int):
        raise ValueError(f"output_bits must be an int, got {type(output_bits).__name__}")
    if output_bits <= 0 or output_bits % 8:
        raise ValueError(f"output_bits must be a positive multiple of 8, got {output_bits}")
    return blake3(bytes(secret)).hexdigest(length=output_bits // 8)
