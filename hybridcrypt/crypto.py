"""Hex XOR masking."""

import string

from .error import LengthMismatchError

_HEX_DIGITS = frozenset(string.hexdigits)


def xor_hex(a: str, b: str) -> str:
    """
    XOR two hex strings of identical length, nibble by nibble.

    The result has the same length as the inputs, leading zeros included.

    Raises:
        LengthMismatchError: If the strings differ in length
        ValueError: If either string contains anything but ASCII hex digits
    """
    if len(a) != len(b):
        raise LengthMismatchError("Can XOR only strings with identical length")
    if not _HEX_DIGITS.issuperset(a) or not _HEX_DIGITS.issuperset(b):
        raise ValueError("Can XOR only hex strings")
    return "".join("%x" % (int(x, 16) ^ int(y, 16)) for x, y in zip(a, b))
