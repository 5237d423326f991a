"""Password-based key derivation for SeedVault."""
from typing import Dict, Optional, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

# Stored envelopes depend on these exact values.
KDF_ITERATIONS = 1000
KEY_LENGTH = 32


def derive_key(
    passphrase: Union[bytes, str],
    salt: Optional[bytes] = None,
    iterations: int = KDF_ITERATIONS,
    key_len: int = KEY_LENGTH,
) -> bytes:
    """
    Derive a symmetric key from a passphrase using PBKDF2-HMAC-SHA256.
    Returns raw derived key bytes. A missing salt is the empty salt.
    """
    if isinstance(passphrase, str):
        passphrase = passphrase.encode("utf-8", "surrogatepass")
    if salt is None:
        salt = b""

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=key_len,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(passphrase)


def kdf_params_to_dict(salt: Optional[bytes] = None) -> Dict:
    return {
        "algo": "pbkdf2",
        "hash": "sha256",
        "salt": (salt or b"").hex(),
        "iterations": KDF_ITERATIONS,
        "length": KEY_LENGTH,
    }
