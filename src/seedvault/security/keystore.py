"""OS keystore integration for persisting encrypted secret envelopes.

Envelopes are opaque text, keyed by (service, user_id). Only the envelope is
stored: the passphrase never reaches the keyring, so whoever can read the
keyring entry still needs the password to recover the secret.
"""
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from seedvault.core.exceptions import KeystoreError

from .envelope import Envelope


def save_envelope(service: str, user_id: str, envelope: str) -> None:
    """Persist ``envelope`` under (service, user_id).

    The envelope is parsed first so that garbage is never written;
    :class:`EnvelopeFormatError` propagates to the caller.
    """
    Envelope.parse(envelope)
    try:
        keyring.set_password(service, user_id, envelope)
    except KeyringError as e:
        raise KeystoreError(f"failed to store envelope for {user_id!r}: {e}") from e


def assess_keyring_backend() -> tuple[bool, str]:
    """Return (is_secure, message) describing the current keyring backend.

    Heuristics are used because the `keyring` package exposes different backends
    across platforms.
    """
    try:
        backend = keyring.get_keyring()
    except KeyringError as e:
        return False, f"failed to get keyring backend: {e}"

    name = backend.__class__.__name__
    priority = getattr(backend, "priority", None)

    insecure_indicators = ("Plaintext", "Uncrypted", "File")
    if any(tok in name for tok in insecure_indicators):
        return False, f"insecure backend detected: {name}"

    if priority is not None and priority <= 0:
        return False, f"no usable keyring backend (priority={priority}, backend={name})"

    if "Win" in name or "Keychain" in name or "SecretService" in name or "KWallet" in name:
        return True, f"backend looks acceptable: {name} (priority={priority})"

    return True, f"unknown backend '{name}', treat with caution (priority={priority})"


def load_envelope(service: str, user_id: str) -> Optional[str]:
    """Load the stored envelope for (service, user_id), or None."""
    try:
        return keyring.get_password(service, user_id)
    except KeyringError as e:
        raise KeystoreError(f"failed to read envelope for {user_id!r}: {e}") from e


def delete_envelope(service: str, user_id: str) -> None:
    """Remove the stored envelope; a missing entry is not an error."""
    try:
        keyring.delete_password(service, user_id)
    except PasswordDeleteError:
        pass
    except KeyringError as e:
        raise KeystoreError(f"failed to delete envelope for {user_id!r}: {e}") from e
