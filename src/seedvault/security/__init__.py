"""Security helpers: key derivation and envelope encryption for SeedVault.

This package provides:
- PBKDF2-SHA256 key derivation with the fixed legacy parameters
- AES-256-GCM encryption of secret strings into ``salt-nonce-ciphertext``
  hex envelopes, with a total (never raising) decrypt
- OS keyring persistence of envelopes and a per-user vault on top of it
"""

from .kdf import derive_key, kdf_params_to_dict, KDF_ITERATIONS, KEY_LENGTH
from .envelope import Envelope, NONCE_SIZE, SEPARATOR, TAG_SIZE
from .encryption import SecretCodec, get_codec, encrypt, decrypt, open_envelope
from .keystore import save_envelope, load_envelope, delete_envelope, assess_keyring_backend
from .vault import SecretVault

__all__ = [
    "derive_key",
    "kdf_params_to_dict",
    "KDF_ITERATIONS",
    "KEY_LENGTH",
    "Envelope",
    "NONCE_SIZE",
    "SEPARATOR",
    "TAG_SIZE",
    "SecretCodec",
    "get_codec",
    "encrypt",
    "decrypt",
    "open_envelope",
    "save_envelope",
    "load_envelope",
    "delete_envelope",
    "assess_keyring_backend",
    "SecretVault",
]
