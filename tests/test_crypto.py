"""Tests for hex XOR masking."""

import os

import pytest
from hybridcrypt.crypto import xor_hex
from hybridcrypt.error import LengthMismatchError


def test_xor_identical_is_zero():
    """Test x ^ x is all zeros of the same length."""
    assert xor_hex("deadbeef", "deadbeef") == "00000000"


def test_xor_fixed_example():
    """Test a fixed known XOR result."""
    first = "74686973206973207468652074657374206d657373616765"
    second = "7468697320697320746865207365636f6e64206d65737361"
    expected = "0000000000000000000000000700101b4e09451e16121404"
    assert xor_hex(first, second) == expected


def test_xor_with_zeros_is_identity():
    """Test x ^ 0 == x."""
    assert xor_hex("12345678", "00000000") == "12345678"


def test_xor_preserves_leading_zeros():
    """Test leading zero nibbles are kept."""
    assert xor_hex("0f", "0f") == "00"
    assert xor_hex("00ab", "0001") == "00aa"


def test_xor_length_mismatch():
    """Test operands of different length are rejected."""
    with pytest.raises(LengthMismatchError, match="identical length"):
        xor_hex("1234", "abcd12")


def test_xor_empty():
    """Test two empty strings XOR to an empty string."""
    assert xor_hex("", "") == ""


def test_xor_non_hex():
    """Test non-hex input raises ValueError."""
    with pytest.raises(ValueError):
        xor_hex("zz", "00")


def test_xor_is_self_inverse():
    """Test masking twice restores the input."""
    data = b"mask me".hex()
    key = os.urandom(7).hex()
    assert xor_hex(xor_hex(data, key), key) == data


def test_xor_rejects_non_ascii_digits():
    """Test Unicode digits are not accepted as hex."""
    with pytest.raises(ValueError, match="hex strings"):
        xor_hex("\u0663", "0")
    with pytest.raises(ValueError):
        xor_hex("0", "\uff11")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
