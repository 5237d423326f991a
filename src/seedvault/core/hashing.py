""" Content digests for verification fingerprints. """

import hashlib

from seedvault.core.exceptions import DigestError


DIGEST_HEX_LENGTH = 64


def calculate_sha256_bytes(data: bytes) -> str:

    # Calculates the SHA-256 hash of raw bytes as lowercase hex.

    try:
        return hashlib.sha256(data).hexdigest()
    except (TypeError, ValueError) as e:
        raise DigestError(f"unable to digest input: {e}") from e


def hash_text(value: str) -> str:
    """Return the SHA-256 digest of ``value`` as 64 lowercase hex characters.

    The text is hashed as UTF-8. This is a plain content digest: there is no
    key and no salt, so equal inputs always give equal outputs.
    """
    if not isinstance(value, str):
        raise DigestError(f"expected str, got {type(value).__name__}")
    return calculate_sha256_bytes(value.encode("utf-8", "surrogatepass"))
