"""
Passphrase-based AEAD encryption of secret strings.

The codec turns a passphrase and a plaintext string into a textual envelope
(:mod:`seedvault.security.envelope`) and back:

- key: PBKDF2-HMAC-SHA256 over the passphrase with an empty salt
  (:mod:`seedvault.security.kdf`), so one passphrase always yields one key
- cipher: AES-256-GCM via :class:`cryptography.hazmat.primitives.ciphers.aead.AESGCM`
- nonce: 12 fresh bytes from the injected random source on every call
- no associated data

The empty salt and the 1000-iteration KDF are weak but fixed: stored
envelopes depend on them. Moving to per-record salts means re-encrypting
every stored secret, so it needs a product decision first.

Decryption comes in two flavours. :meth:`SecretCodec.open` raises typed
errors. :meth:`SecretCodec.decrypt` is total: every failure collapses into
the empty string, which callers treat the same as a wrong password.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Union

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from seedvault.core.exceptions import (
    DecryptionFailedError,
    EncryptionError,
    SeedVaultError,
)

from .envelope import NONCE_SIZE, Envelope
from .kdf import derive_key

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


class SecretCodec:
    """
    Encrypts and decrypts secret strings into envelopes.

    The random source is a callable ``(n) -> bytes`` returning ``n`` bytes.
    It defaults to :func:`os.urandom`; tests can pass a deterministic one.
    The codec holds no other state, so a single instance can be shared
    between threads.
    """

    def __init__(self, random_source: RandomSource = os.urandom):
        self._random_source = random_source

    # ------------------------------------------------------------------
    # Encryption
    # ------------------------------------------------------------------

    def _new_nonce(self) -> bytes:
        try:
            nonce = self._random_source(NONCE_SIZE)
        except Exception as e:
            raise EncryptionError(f"random source failed: {e}") from e
        if not isinstance(nonce, bytes) or len(nonce) != NONCE_SIZE:
            raise EncryptionError(f"random source must return {NONCE_SIZE} bytes")
        return nonce

    def encrypt(self, passphrase: Union[str, bytes], plaintext: str) -> str:
        """
        Encrypt ``plaintext`` under ``passphrase`` and return the envelope.

        Raises :class:`EncryptionError` if randomness or the cipher is
        unavailable, and ``TypeError`` for arguments of the wrong type.
        """
        if not isinstance(passphrase, (str, bytes)):
            raise TypeError(f"passphrase must be str or bytes, got {type(passphrase).__name__}")
        if not isinstance(plaintext, str):
            raise TypeError(f"plaintext must be str, got {type(plaintext).__name__}")

        salt = b""
        key = derive_key(passphrase, salt)
        nonce = self._new_nonce()
        try:
            aead = AESGCM(key)
        except (ValueError, UnsupportedAlgorithm) as e:
            raise EncryptionError(f"unable to construct cipher: {e}") from e

        sealed = aead.encrypt(nonce, plaintext.encode("utf-8", "surrogatepass"), None)
        return Envelope(salt=salt, nonce=nonce, ciphertext=sealed).to_string()

    # ------------------------------------------------------------------
    # Decryption
    # ------------------------------------------------------------------

    def open(self, passphrase: Union[str, bytes], envelope: str) -> str:
        """
        Decrypt ``envelope`` and return the plaintext.

        Raises :class:`~seedvault.core.exceptions.EnvelopeFormatError` when
        the envelope is malformed and :class:`DecryptionFailedError` when the
        tag does not verify (wrong passphrase, tampering, truncation).
        """
        parsed = Envelope.parse(envelope)
        key = derive_key(passphrase, parsed.salt)
        try:
            aead = AESGCM(key)
            data = aead.decrypt(parsed.nonce, parsed.ciphertext, None)
        except (InvalidTag, ValueError, OverflowError) as e:
            raise DecryptionFailedError("authentication failed") from e

        try:
            return data.decode("utf-8", "surrogatepass")
        except UnicodeDecodeError as e:
            raise DecryptionFailedError("plaintext is not valid UTF-8") from e

    def decrypt(self, passphrase: Union[str, bytes], envelope: str) -> str:
        """Decrypt ``envelope``; return ``""`` instead of raising on any failure."""
        try:
            return self.open(passphrase, envelope)
        except (SeedVaultError, TypeError) as e:
            logger.debug("decryption failed: %s", e.__class__.__name__)
            return ""


# module-level default codec
_default_codec = SecretCodec()


def get_codec() -> SecretCodec:
    return _default_codec


def encrypt(passphrase: Union[str, bytes], plaintext: str) -> str:
    return get_codec().encrypt(passphrase, plaintext)


def decrypt(passphrase: Union[str, bytes], envelope: str) -> str:
    return get_codec().decrypt(passphrase, envelope)


def open_envelope(passphrase: Union[str, bytes], envelope: str) -> str:
    return get_codec().open(passphrase, envelope)
