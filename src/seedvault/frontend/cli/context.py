"""Small helper to build the runtime context for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import os

from seedvault.security.vault import DEFAULT_SERVICE, SecretVault

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class CliContext:
    """Container for runtime settings and objects the commands need."""

    service: str
    log_level: str
    allow_insecure_keyring: bool = False

    def vault(self) -> SecretVault:
        return SecretVault(
            service=self.service,
            require_secure_backend=not self.allow_insecure_keyring,
        )


def build_context(
    service: Optional[str] = None,
    log_level: Optional[str] = None,
    allow_insecure_keyring: Optional[bool] = None,
) -> CliContext:
    """
    Resolve CLI settings.

    Explicit arguments (from command-line flags) win; otherwise the values
    come from the environment:

    - ``SEEDVAULT_KEYRING_SERVICE``: keyring service name, default ``seedvault``
    - ``SEEDVAULT_LOG_LEVEL``: logging level name, default ``WARNING``
    - ``SEEDVAULT_ALLOW_INSECURE_KEYRING``: ``1/true/yes/on`` lets the vault
      write to keyring backends that look insecure
    """
    if service is None:
        service = os.getenv("SEEDVAULT_KEYRING_SERVICE") or DEFAULT_SERVICE
    if log_level is None:
        log_level = os.getenv("SEEDVAULT_LOG_LEVEL") or "WARNING"
    if allow_insecure_keyring is None:
        flag = os.getenv("SEEDVAULT_ALLOW_INSECURE_KEYRING", "")
        allow_insecure_keyring = flag.strip().lower() in _TRUTHY

    return CliContext(
        service=service,
        log_level=log_level.upper(),
        allow_insecure_keyring=allow_insecure_keyring,
    )
