"""Envelope framing and parsing.

Legacy:  <base64 classical ciphertext>
Hybrid:  SHlicmlkTW9kZQ==$<base64 KEM ciphertext>$<base64 classical ciphertext>
"""

import base64
import binascii
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .error import MalformedEnvelopeError
from .types import MARKER, SEPARATOR


class EnvelopeMode(str, Enum):
    LEGACY = "legacy"
    HYBRID = "hybrid"


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(text: str, what: str = "segment") -> bytes:
    """Strict base64 decode, raising MalformedEnvelopeError."""
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedEnvelopeError(f"Invalid base64 in {what}: {e}") from e


@dataclass(frozen=True)
class Envelope:
    """Parsed envelope. Ciphertext fields hold base64 text as found on the wire."""

    mode: EnvelopeMode
    classical_ciphertext: str
    kem_ciphertext: Optional[str] = None

    @property
    def is_hybrid(self) -> bool:
        return self.mode is EnvelopeMode.HYBRID

    def kem_ciphertext_bytes(self) -> bytes:
        if self.kem_ciphertext is None:
            raise MalformedEnvelopeError("Legacy envelope has no KEM ciphertext")
        return b64decode(self.kem_ciphertext, "KEM ciphertext")

    def classical_ciphertext_bytes(self) -> bytes:
        return b64decode(self.classical_ciphertext, "classical ciphertext")

    def __str__(self) -> str:
        if self.is_hybrid:
            return SEPARATOR.join((MARKER, self.kem_ciphertext, self.classical_ciphertext))
        return self.classical_ciphertext


def frame_legacy(classical_ciphertext: bytes) -> Envelope:
    return Envelope(EnvelopeMode.LEGACY, b64encode(classical_ciphertext))


def frame_hybrid(kem_ciphertext: bytes, classical_ciphertext: bytes) -> Envelope:
    return Envelope(
        EnvelopeMode.HYBRID,
        b64encode(classical_ciphertext),
        kem_ciphertext=b64encode(kem_ciphertext),
    )


def parse_envelope(text: str) -> Envelope:
    """
    Classify and split an envelope.

    The envelope is hybrid only when the text before the first separator is
    exactly the marker; anything else is legacy.

    Raises:
        MalformedEnvelopeError: If the segment count does not fit the mode
    """
    if not isinstance(text, str):
        raise MalformedEnvelopeError(f"Envelope must be str, got {type(text).__name__}")

    segments = text.split(SEPARATOR)
    if len(segments) not in (1, 3):
        raise MalformedEnvelopeError(
            f"Envelope must have 1 or 3 segments, got {len(segments)}"
        )

    if segments[0] != MARKER:
        return Envelope(EnvelopeMode.LEGACY, text)

    if len(segments) != 3:
        raise MalformedEnvelopeError("Hybrid envelope must have 3 segments")
    _, kem_ct, classical_ct = segments
    if not kem_ct or not classical_ct:
        raise MalformedEnvelopeError("Hybrid envelope has an empty segment")
    return Envelope(EnvelopeMode.HYBRID, classical_ct, kem_ciphertext=kem_ct)
