"""Textual envelope for encrypted secrets.

Layout (ASCII, lowercase hex on output):

    <hex(salt)>-<hex(nonce)>-<hex(ciphertext || tag)>

- salt: KDF salt, empty for every envelope this package produces
- nonce: 12 random bytes
- ciphertext: the AES-GCM sealed output, 16-byte tag appended

Uppercase hex is accepted on input. Anything else (whitespace, signs,
odd-length components, non-ASCII) is rejected.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from seedvault.core.exceptions import EnvelopeFormatError

SEPARATOR = "-"
NONCE_SIZE = 12
TAG_SIZE = 16

_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _decode_component(name: str, value: str) -> bytes:
    # bytes.fromhex tolerates whitespace, so check the alphabet first.
    if not _HEX_RE.fullmatch(value):
        raise EnvelopeFormatError(f"{name} component is not valid hex")
    return bytes.fromhex(value)


@dataclass(frozen=True)
class Envelope:
    """Decoded envelope components."""

    salt: bytes
    nonce: bytes
    ciphertext: bytes

    def to_string(self) -> str:
        return SEPARATOR.join((self.salt.hex(), self.nonce.hex(), self.ciphertext.hex()))

    @classmethod
    def parse(cls, text: str) -> "Envelope":
        """
        Parse an envelope string.

        Raises :class:`EnvelopeFormatError` if the text does not have exactly
        three hex components or the nonce is not ``NONCE_SIZE`` bytes long.
        """
        if not isinstance(text, str):
            raise EnvelopeFormatError(f"envelope must be str, got {type(text).__name__}")

        parts = text.split(SEPARATOR)
        if len(parts) != 3:
            raise EnvelopeFormatError(f"expected 3 components, got {len(parts)}")

        salt = _decode_component("salt", parts[0])
        nonce = _decode_component("nonce", parts[1])
        if len(nonce) != NONCE_SIZE:
            raise EnvelopeFormatError(f"nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
        ciphertext = _decode_component("ciphertext", parts[2])

        return cls(salt=salt, nonce=nonce, ciphertext=ciphertext)
