"""
Per-user secret storage built on the codec and the OS keystore.

This is the caller side of the envelope contract: the vault stores only the
envelope, and a failed decryption is indistinguishable from a wrong
password. It knows nothing about accounts, sessions or HTTP.
"""

from __future__ import annotations

import logging
from typing import Optional

from seedvault.core.exceptions import KeystoreError

from .encryption import SecretCodec, get_codec
from .keystore import assess_keyring_backend, delete_envelope, load_envelope, save_envelope

logger = logging.getLogger(__name__)

DEFAULT_SERVICE = "seedvault"


class SecretVault:
    """
    Encrypts a user's secret (e.g. a wallet recovery phrase) with their
    password and keeps the resulting envelope in the OS keyring under
    ``(service, user_id)``.
    """

    def __init__(
        self,
        service: str = DEFAULT_SERVICE,
        codec: Optional[SecretCodec] = None,
        require_secure_backend: bool = True,
    ):
        self.service = service
        self.codec = codec or get_codec()
        self.require_secure_backend = require_secure_backend

    def _check_backend(self) -> None:
        if not self.require_secure_backend:
            return
        secure, msg = assess_keyring_backend()
        if not secure:
            raise KeystoreError(
                f"refusing to store secret in OS keystore: {msg}; "
                "disable the backend check if you understand the risk"
            )

    def store_secret(self, user_id: str, password: str, secret: str) -> str:
        """Encrypt ``secret`` under ``password``, persist it and return the envelope.

        Any previously stored envelope for ``user_id`` is replaced.
        """
        self._check_backend()
        envelope = self.codec.encrypt(password, secret)
        save_envelope(self.service, user_id, envelope)
        logger.info("stored secret for user %s", user_id)
        return envelope

    def reveal_secret(self, user_id: str, password: str) -> str:
        """Return the stored secret, or ``""`` if absent or the password is wrong."""
        envelope = load_envelope(self.service, user_id)
        if envelope is None:
            logger.warning("no secret stored for user %s", user_id)
            return ""
        secret = self.codec.decrypt(password, envelope)
        if not secret:
            logger.warning("secret for user %s could not be decrypted", user_id)
        return secret

    def verify_password(self, user_id: str, password: str) -> bool:
        return self.reveal_secret(user_id, password) != ""

    def forget(self, user_id: str) -> None:
        delete_envelope(self.service, user_id)
        logger.info("removed secret for user %s", user_id)
