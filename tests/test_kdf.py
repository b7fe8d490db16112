"""Tests for secret expansion."""

import pytest
from hybridcrypt.kdf import expand_secret


# BLAKE3 reference output for the empty input, 131 bytes (1048 bits)
EMPTY_1048 = (
    "af1349b9f5f9a1a6a0404dea36dcc9499bcb25c9adc112b7cc9a93cae41f3262"
    "e00f03e7b69af26b7faaf09fcd333050338ddfe085b8cc869ca98b206c08243a"
    "26f5487789e8f660afe6c99ef9e0c52b92e7393024a80459cf91f476f9ffdbda"
    "7001c22e159b402631f277ca96f2defdf1078282314e763699a31c5363165421"
    "cce14d"
)


def test_expand_empty_vector():
    """Test the pinned BLAKE3 vector for the empty input."""
    assert expand_secret(b"", 1048) == EMPTY_1048


def test_expand_length():
    """Test output length is output_bits / 4 hex characters."""
    secret = bytes(range(32))
    for bits in (8, 256, 1048, 8 * 1000):
        out = expand_secret(secret, bits)
        assert len(out) == bits // 4
        int(out, 16)


def test_expand_large_inputs():
    """Test inputs of assorted sizes map to full-length outputs."""
    for n in (0, 1, 2, 7, 63, 1023, 102400):
        data = bytes(i % 251 for i in range(n))
        assert len(expand_secret(data, 1048)) == 262


def test_expand_deterministic():
    """Test the same input always gives the same output."""
    secret = bytes([1, 2, 3, 4])
    assert expand_secret(secret, 256) == expand_secret(secret, 256)


def test_expand_different_inputs():
    """Test different secrets give different keystreams."""
    assert expand_secret(bytes([1, 2, 3, 4]), 256) != expand_secret(bytes([5, 6, 7, 8]), 256)


def test_expand_prefix_property():
    """Test shorter outputs are prefixes of longer ones."""
    secret = b"\x42" * 32
    long = expand_secret(secret, 8 * 4096)
    for bits in (8, 256, 1048, 8 * 1024):
        assert long.startswith(expand_secret(secret, bits))


@pytest.mark.parametrize("bits", [0, -8, 4, 12, 1047])
def test_expand_rejects_bad_lengths(bits):
    """Test non-positive or non byte-aligned lengths are rejected."""
    with pytest.raises(ValueError):
        expand_secret(b"secret", bits)


def test_expand_rejects_non_int():
    """Test bool and float lengths are rejected."""
    with pytest.raises(ValueError):
        expand_secret(b"secret", True)
    with pytest.raises(ValueError):
        expand_secret(b"secret", 256.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
